"""
Model base class and the machinery it is built from.

- base: `AbstractModel`
- snapshot: versioned save/load (`save`, `load`, `ModelSnapshot`)
- units: protocol unit conversion (`get_scaled_protocols`)
- controls: `ControlDescriptorList`
- dependencies: `ControlDependencyResolver`
- sanity: input data checks

See Also
--------
qmodel.models : concrete models
qmodel.registry : unit mappings
"""

from .base import AbstractModel
from .controls import PANEL_SENTINEL, ControlDescriptorList
from .dependencies import ControlDependencyResolver
from .sanity import sanity_check
from .snapshot import (
    ModelSnapshot,
    as_snapshot,
    load,
    read_snapshot,
    save,
    write_snapshot,
)
from .units import Direction, get_scaled_protocols, strip_unit

__all__ = [
    "PANEL_SENTINEL",
    "AbstractModel",
    "ControlDependencyResolver",
    "ControlDescriptorList",
    "Direction",
    "ModelSnapshot",
    "as_snapshot",
    "get_scaled_protocols",
    "load",
    "read_snapshot",
    "sanity_check",
    "save",
    "strip_unit",
    "write_snapshot",
]
