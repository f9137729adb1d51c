"""
Core data types shared across qmodel.

- errors: the exception taxonomy
- protocol: `ProtocolField`, the acquisition protocol table
- controls: `ControlEntry`, `DependencyRule` and their enums

Examples
--------
```python
from qmodel.types import ProtocolField
prot = ProtocolField(format="TE", mat=[[10], [20]])
prot.format  # ['TE']
```
"""

from .controls import (
    ControlEntry,
    ControlKind,
    DependencyRule,
    EventKind,
    Marker,
    Polarity,
    coerce_value,
    infer_kind,
)
from .errors import (
    ControlError,
    InvalidAssignment,
    NotACheckbox,
    NotAPanel,
    QModelError,
    SchemaMismatchError,
    SerializationError,
    UnknownControl,
    UnknownUnitMapping,
)
from .protocol import ProtocolField

__all__ = [
    "ControlEntry",
    "ControlError",
    "ControlKind",
    "DependencyRule",
    "EventKind",
    "InvalidAssignment",
    "Marker",
    "NotACheckbox",
    "NotAPanel",
    "Polarity",
    "ProtocolField",
    "QModelError",
    "SchemaMismatchError",
    "SerializationError",
    "UnknownControl",
    "UnknownUnitMapping",
    "coerce_value",
    "infer_kind",
]
