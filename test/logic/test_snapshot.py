"""Tests for model snapshots and version reconciliation."""

import copy
from dataclasses import dataclass

import numpy as np
import pytest

from qmodel.model import ModelSnapshot, as_snapshot, load, read_snapshot, save
from qmodel.models import InversionRecovery, QsmSb
from qmodel.types import SchemaMismatchError, SerializationError


@dataclass(kw_only=True, repr=False)
class InversionRecoveryV2(InversionRecovery):
    """Newer release of the model with an extra property."""

    b1_correction: bool = True


@pytest.fixture
def qsm():
    model = QsmSb()
    model.set_option("Split-Bregman", True)
    model.set_option("Lambda L1", 2.5)
    model.update_fields()
    model.scale_protocols("user")
    model.env_details = {"host": "scanner-3", "threads": 4}
    return model


def test_save_is_flat_and_versioned(qsm):
    snapshot = save(qsm)
    assert snapshot.version == qsm.version
    assert "prot" in snapshot
    assert "controls" in snapshot
    assert snapshot["original_prot_enabled"] is False
    assert snapshot["model_name"] == "QsmSb"


def test_round_trip_in_memory(qsm):
    loaded = load(QsmSb(), save(qsm))
    assert loaded == qsm
    assert loaded.controls["L1 Regularized"].value is True
    assert loaded.controls["L1 Regularized"].disabled


def test_round_trip_bytes(qsm):
    data = save(qsm).to_msgpack()
    assert isinstance(data, bytes)
    loaded = load(QsmSb(), data)
    assert loaded == qsm
    assert loaded.prot["Resolution"].format == ["xDim(mm)", "yDim(mm)", "zDim(mm)"]
    assert loaded.controls["L1 Range"].value == (-4.0, 2.5, 15.0)


def test_round_trip_file(qsm, tmp_path):
    path = qsm.save_obj(tmp_path / "qsm")
    assert path.name == "qsm.qmodel.msgpack"
    assert read_snapshot(path).version == qsm.version
    assert QsmSb().load_obj(path) == qsm


def test_missing_property_keeps_default():
    old = InversionRecovery()
    old.prot["IRData"].mat[0, 0] = 100
    loaded = load(InversionRecoveryV2(), save(old))
    assert loaded.b1_correction is True
    assert loaded.prot["IRData"].mat[0, 0] == 100


def test_unknown_property_is_dropped():
    new = InversionRecoveryV2(b1_correction=False)
    loaded = load(InversionRecovery(), save(new).to_msgpack())
    assert isinstance(loaded, InversionRecovery)
    assert not hasattr(loaded, "b1_correction")


def test_load_does_not_mutate_inputs():
    model = InversionRecovery()
    snapshot = save(model)
    snapshot.properties["controls"]["entries"][0]["value"] = ["Complex", "Magnitude"]
    before = copy.deepcopy(snapshot.properties)

    loaded = load(model, snapshot)
    loaded.controls["method"].value.append("Other")
    assert snapshot.properties == before
    assert model.options["method"] == ["Magnitude", "Complex"]


@pytest.mark.parametrize(
    "properties", [{"model_name": "InversionRecovery"}, {"version": ""}]
)
def test_version_is_required(properties):
    with pytest.raises(SchemaMismatchError):
        load(InversionRecovery(), properties)


def test_mapping_source():
    snapshot = as_snapshot({"version": "1.0.0", "original_prot_enabled": False})
    assert isinstance(snapshot, ModelSnapshot)
    loaded = load(InversionRecovery(), snapshot)
    assert loaded.original_prot_enabled is False
    assert loaded.prot == InversionRecovery().prot


def test_unserializable_property():
    model = InversionRecovery(env_details={"handle": object()})
    with pytest.raises(SerializationError):
        save(model)


def test_garbage_bytes():
    with pytest.raises(SerializationError):
        load(InversionRecovery(), b"\xc1\xc1\xc1")


def test_unsupported_source_type():
    with pytest.raises(TypeError):
        as_snapshot(42)


def test_protocol_matrix_survives_bytes():
    model = InversionRecovery()
    loaded = load(InversionRecovery(), save(model).to_msgpack())
    assert isinstance(loaded.prot["IRData"].mat, np.ndarray)
    assert loaded.prot["IRData"].mat.shape == (9, 1)
