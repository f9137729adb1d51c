"""Tests for protocol tables."""

import numpy as np
import pytest

from qmodel.types import ProtocolField


def test_scalar_format_is_wrapped():
    prot = ProtocolField(format="TE", mat=[[10], [20]])
    assert prot.format == ["TE"]
    assert prot.mat.shape == (2, 1)


def test_vector_matrix_becomes_single_column():
    prot = ProtocolField(format=["TI"], mat=np.array([350, 500, 650]))
    assert prot.mat.shape == (3, 1)
    assert prot.n_rows == 3


def test_column_count_must_match_format():
    with pytest.raises(ValueError) as exc_info:
        ProtocolField(format=["FlipAngle", "TR"], mat=[[3], [20]])
    assert "column labels" in str(exc_info.value)


def test_equality_compares_values():
    a = ProtocolField(format=["TE"], mat=[[10], [20]])
    b = ProtocolField(format=["TE"], mat=[[10.0], [20.0]])
    c = ProtocolField(format=["TE"], mat=[[10], [21]])
    assert a == b
    assert a != c
    assert a != ProtocolField(format=["TR"], mat=[[10], [20]])


def test_copy_is_independent():
    a = ProtocolField(format=["TE"], mat=[[10], [20]])
    b = a.copy()
    b.mat[0, 0] = 99
    b.format[0] = "TR"
    assert a.mat[0, 0] == 10
    assert a.format == ["TE"]


def test_dict_round_trip():
    prot = ProtocolField(format=["FlipAngle", "TR"], mat=[[3, 15], [20, 15]])
    data = prot.to_dict()
    assert data == {"format": ["FlipAngle", "TR"], "mat": [[3.0, 15.0], [20.0, 15.0]]}
    assert ProtocolField.from_dict(data) == prot


def test_from_dict_accepts_scalar_format():
    prot = ProtocolField.from_dict({"format": "TE", "mat": [[10], [20]]})
    assert prot.format == ["TE"]
