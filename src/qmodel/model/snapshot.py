"""Versioned snapshots of model properties.

`save` flattens every property of a model into a `ModelSnapshot`. `load`
reconciles a snapshot, possibly written by an older or newer version of the
model class, into a model instance:

- properties the current class declares and the snapshot holds are
  overwritten with the snapshot value
- properties the snapshot lacks keep the current (default) value
- snapshot properties the current class no longer declares are dropped

so there is no per-version migration table. The only structural requirement
on a snapshot is its ``version`` tag.

On disk (and over the wire) a snapshot is the flat property record encoded as
MessagePack.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping, TypeVar, Union

from loguru import logger
from mashumaro.mixins.msgpack import DataClassMessagePackMixin

from qmodel.types import SchemaMismatchError, SerializationError

if TYPE_CHECKING:
    from .base import AbstractModel

M = TypeVar("M", bound="AbstractModel")

SnapshotSource = Union["ModelSnapshot", Mapping[str, Any], bytes, str, os.PathLike]


@dataclass(repr=False)
class ModelSnapshot(DataClassMessagePackMixin):
    """Flat mapping of property name to value, tagged with a version."""

    properties: dict[str, Any]

    @classmethod
    def __pre_deserialize__(cls, d: Any) -> dict[Any, Any]:
        return {"properties": d}

    def __post_serialize__(self, d: dict[Any, Any]) -> dict[Any, Any]:
        return d["properties"]

    def __post_init__(self):
        if not isinstance(self.properties, dict):
            raise SerializationError(
                f"Snapshot must be a mapping, got {type(self.properties).__name__}"
            )
        if "version" not in self.properties:
            raise SchemaMismatchError("Snapshot has no version field")
        if not self.properties["version"]:
            raise SchemaMismatchError("Snapshot has an empty version field")

    @property
    def version(self) -> str:
        return self.properties["version"]

    def __getitem__(self, name: str) -> Any:
        return self.properties[name]

    def __contains__(self, name: str) -> bool:
        return name in self.properties

    def keys(self):
        return self.properties.keys()

    def __repr__(self):
        return (
            f"ModelSnapshot(version={self.version}, "
            f"properties={list(self.properties)})"
        )


def save(model: AbstractModel) -> ModelSnapshot:
    """Snapshot every property of `model`.

    Raises
    ------
    SerializationError
        If a property value cannot be encoded.
    """
    try:
        snapshot = ModelSnapshot(properties=model.to_dict())
        snapshot.to_msgpack()
    except (TypeError, ValueError, OverflowError) as e:
        raise SerializationError(
            f"Cannot serialize {model.__class__.__name__}: {e}"
        ) from e
    return snapshot


def decode(data: bytes) -> ModelSnapshot:
    """Decode a MessagePack snapshot record."""
    try:
        return ModelSnapshot.from_msgpack(data)
    except (SchemaMismatchError, SerializationError):
        raise
    except Exception as e:
        raise SerializationError(f"Could not decode snapshot: {e}") from e


def write_snapshot(snapshot: ModelSnapshot, path: str | os.PathLike) -> Path:
    path = Path(path)
    with open(path, "wb") as f:
        f.write(snapshot.to_msgpack())
    logger.info(f"Saved snapshot (version {snapshot.version}) to {path}")
    return path


def read_snapshot(path: str | os.PathLike) -> ModelSnapshot:
    path = Path(path)
    with open(path, "rb") as f:
        snapshot = decode(f.read())
    logger.info(f"Read snapshot (version {snapshot.version}) from {path}")
    return snapshot


def as_snapshot(source: SnapshotSource) -> ModelSnapshot:
    """Coerce an in-memory mapping, encoded bytes or a file path to a snapshot."""
    if isinstance(source, ModelSnapshot):
        return source
    if isinstance(source, Mapping):
        return ModelSnapshot(properties=dict(source))
    if isinstance(source, (bytes, bytearray)):
        return decode(bytes(source))
    if isinstance(source, (str, os.PathLike)):
        return read_snapshot(source)
    raise TypeError(f"Cannot load a snapshot from {type(source).__name__}")


def load(model: M, source: SnapshotSource) -> M:
    """Reconcile `source` into a copy of `model`.

    Parameters
    ----------
    model : AbstractModel
        Model providing the current schema and the default values.
    source : SnapshotSource
        Snapshot, plain mapping, encoded bytes or path of a snapshot file.

    Returns
    -------
    AbstractModel
        New instance of ``type(model)``. Neither `model` nor `source` is
        modified.

    Raises
    ------
    SchemaMismatchError
        If the snapshot has no version tag.
    """
    snapshot = as_snapshot(source)
    incoming = copy.deepcopy(snapshot.properties)
    current = model.to_dict()

    patched = {}
    for name, value in current.items():
        if name in incoming:
            patched[name] = incoming[name]
        else:
            logger.debug(f"Property {name} not in snapshot, keeping default")
            patched[name] = value

    dropped = [name for name in incoming if name not in current]
    if dropped:
        logger.warning(
            f"Ignoring properties unknown to {model.__class__.__name__}: {dropped}"
        )
    loaded_name = incoming.get("model_name")
    if loaded_name and loaded_name != current.get("model_name"):
        logger.warning(
            f"Loading a {loaded_name} snapshot into {current.get('model_name')}"
        )

    logger.debug(
        f"Patched {model.__class__.__name__} (version {current.get('version')}) "
        f"from snapshot version {snapshot.version}"
    )
    return type(model).from_dict(patched)
