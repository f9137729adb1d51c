"""Conversion of protocol tables between original and user units.

Protocol values are defined in their *original* units, which are what fitting
code consumes. Users see and edit them in *user* units, with the unit symbol
appended to each column label (e.g. ``TI`` -> ``TI(s)``).

A single flag per model, ``original_prot_enabled``, records which of the two
the whole protocol set is currently in. Conversion only happens when the flag
says the data is in the other unit system, so repeated requests for the same
direction never scale values twice.
"""

from __future__ import annotations

from enum import Enum

import numpy as np
from loguru import logger

from qmodel.registry import UnitMappingRegistry
from qmodel.types import ProtocolField


class Direction(str, Enum):
    """Target unit system of a conversion."""

    USER = "user"
    ORIGINAL = "original"


def strip_unit(label: str) -> str:
    """Recover the raw column label from a unit-annotated one.

    Everything from the first ``(`` onwards is dropped. Labels without a unit
    annotation are returned unchanged.
    """
    loc = label.find("(")
    if loc < 0:
        return label
    return label[:loc]


def _scale_field(
    prot_name: str,
    prot_field: ProtocolField,
    registry: UnitMappingRegistry,
    direction: Direction,
) -> ProtocolField:
    # resolve every column before touching any values
    labels = []
    factors = []
    for label in prot_field.format:
        raw = strip_unit(label) if direction is Direction.ORIGINAL else label
        mapping = registry.lookup(prot_name, raw)
        labels.append(raw if direction is Direction.ORIGINAL else raw + mapping.symbol)
        factors.append(mapping.scale_factor)

    factors = np.asarray(factors, dtype=float)
    if direction is Direction.USER:
        mat = prot_field.mat / factors
    else:
        mat = prot_field.mat * factors
    return ProtocolField(format=labels, mat=mat)


def get_scaled_protocols(
    prot: dict[str, ProtocolField],
    registry: UnitMappingRegistry,
    direction: Direction | str,
    original_prot_enabled: bool,
) -> tuple[dict[str, ProtocolField], bool]:
    """Convert a protocol set to the requested unit system.

    Parameters
    ----------
    prot : dict[str, ProtocolField]
        Protocol tables keyed by protocol name. Not modified.
    registry : UnitMappingRegistry
        Unit mappings of the model owning the protocols.
    direction : Direction | str
        "user" or "original".
    original_prot_enabled : bool
        Whether `prot` is currently in original units.

    Returns
    -------
    tuple[dict[str, ProtocolField], bool]
        (converted protocols, new value of original_prot_enabled)

    Raises
    ------
    UnknownUnitMapping
        If any (protocol, label) pair has no registered mapping. Nothing is
        converted in that case.
    """
    direction = Direction(direction)
    new_flag = direction is Direction.ORIGINAL

    if original_prot_enabled == new_flag:
        logger.debug(f"Protocols already in {direction.value} units, not scaling")
        return {name: pf.copy() for name, pf in prot.items()}, new_flag

    scaled = {
        name: _scale_field(name, pf, registry, direction) for name, pf in prot.items()
    }
    logger.debug(
        f"Scaled protocols {list(scaled)} of {registry.model_name} "
        f"to {direction.value} units"
    )
    return scaled, new_flag
