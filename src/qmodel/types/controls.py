"""Control entry and dependency rule types.

A model declares its interactive controls as an ordered list of
`ControlEntry` items. Each entry keeps its identity (`name`) apart from its
presentation state (`hidden`/`disabled`), and its value in a slot typed by
`ControlKind`.
"""

from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Any, Optional

import numpy as np
from mashumaro import DataClassDictMixin

from .errors import InvalidAssignment


class ControlKind(Enum):
    CHECKBOX = "checkbox"
    SINGLE_VALUE = "single_value"
    TABLE = "table"
    CHOICE = "choice"
    PANEL = "panel"


class Marker(Enum):
    NONE = "none"
    HIDDEN = "hidden"
    DISABLED = "disabled"


class EventKind(Enum):
    ENABLE_DISABLE = "enable_disable"
    SHOW_HIDE_CONTROL = "show_hide_control"
    SHOW_HIDE_PANEL = "show_hide_panel"


class Polarity(Enum):
    """What checking the source checkbox does to the target.

    ON_TRIGGERS_NEGATIVE: checked -> target disabled/hidden.
    ON_TRIGGERS_POSITIVE: checked -> target enabled/shown.
    Unchecking always does the inverse.
    """

    ON_TRIGGERS_NEGATIVE = "on_triggers_negative"
    ON_TRIGGERS_POSITIVE = "on_triggers_positive"

    def wants_negative(self, checked: bool) -> bool:
        """Whether the target should end up disabled/hidden."""
        if self is Polarity.ON_TRIGGERS_NEGATIVE:
            return bool(checked)
        return not checked


def _is_bool(value: Any) -> bool:
    return isinstance(value, (bool, np.bool_))


def _is_number(value: Any) -> bool:
    return isinstance(value, (Real, np.number)) and not _is_bool(value)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple, np.ndarray))


def infer_kind(value: Any) -> ControlKind:
    """Classify a control from the shape of its default value.

    bool -> checkbox, number -> single value, numeric vector -> table,
    list of strings -> choice list.
    """
    if _is_bool(value):
        return ControlKind.CHECKBOX
    if _is_number(value):
        return ControlKind.SINGLE_VALUE
    if _is_sequence(value):
        items = list(np.ravel(value)) if isinstance(value, np.ndarray) else list(value)
        if items and all(isinstance(v, str) for v in items):
            return ControlKind.CHOICE
        if items and all(_is_number(v) for v in items):
            return ControlKind.TABLE if len(items) > 1 else ControlKind.SINGLE_VALUE
    raise InvalidAssignment(f"Cannot infer a control kind from value {value!r}")


def coerce_value(kind: ControlKind, value: Any, name: str = "") -> Any:
    """Validate `value` against `kind` and return it in canonical form.

    Raises
    ------
    InvalidAssignment
        If the value shape does not fit the control kind.
    """
    label = f" '{name}'" if name else ""
    if kind is ControlKind.PANEL:
        return None
    if kind is ControlKind.CHECKBOX:
        if not _is_bool(value):
            raise InvalidAssignment(f"Checkbox{label} expects a boolean, got {value!r}")
        return bool(value)
    if kind is ControlKind.SINGLE_VALUE:
        if _is_sequence(value):
            flat = np.ravel(value)
            if flat.size != 1 or not _is_number(flat[0]):
                raise InvalidAssignment(f"Control{label} expects a single value.")
            value = flat[0]
        if not _is_number(value):
            raise InvalidAssignment(f"Control{label} expects a single value.")
        return value.item() if isinstance(value, np.generic) else value
    if kind is ControlKind.TABLE:
        if not _is_sequence(value):
            raise InvalidAssignment(f"Control{label} expects an array.")
        flat = np.ravel(value)
        if flat.size < 2 or not all(_is_number(v) for v in flat):
            raise InvalidAssignment(f"Control{label} expects an array.")
        return tuple(float(v) for v in flat)
    if kind is ControlKind.CHOICE:
        if isinstance(value, np.ndarray):
            value = list(np.ravel(value))
        if not isinstance(value, (list, tuple)) or not all(
            isinstance(v, str) for v in value
        ):
            raise InvalidAssignment(f"Control{label} expects a list of strings.")
        return [str(v) for v in value]
    raise InvalidAssignment(f"Unknown control kind {kind}")


@dataclass(kw_only=True)
class ControlEntry(DataClassDictMixin):
    """One interactive control.

    `kind` is inferred from `default` when not given. `value` starts as a
    copy of `default`. For a choice list the first item of `value` is the
    selected option. Panel headers have kind PANEL and carry the number of
    member entries that follow them in `panel_size`.
    """

    name: str
    default: Any = None
    kind: Optional[ControlKind] = None
    value: Any = None
    hidden: bool = False
    disabled: bool = False
    panel_size: int = 0

    def __post_init__(self):
        if self.kind is None:
            self.kind = infer_kind(self.default)
        self.default = coerce_value(self.kind, self.default, self.name)
        if self.value is None:
            self.value = self.default
        self.value = coerce_value(self.kind, self.value, self.name)

    @property
    def is_panel(self) -> bool:
        return self.kind is ControlKind.PANEL

    @property
    def selection(self) -> Optional[str]:
        """Selected option of a choice list, None for other kinds."""
        if self.kind is not ControlKind.CHOICE or not self.value:
            return None
        return self.value[0]

    @property
    def marker(self) -> Marker:
        if self.hidden:
            return Marker.HIDDEN
        if self.disabled:
            return Marker.DISABLED
        return Marker.NONE


@dataclass(frozen=True, kw_only=True)
class DependencyRule:
    """Links the state of a checkbox to another control.

    Attributes
    ----------
    source : str
        Name of the checkbox driving the rule.
    target : str
        Name of the control (or panel) affected.
    event_kind : EventKind
        Which axis of the target is changed.
    polarity : Polarity
        Whether checking the source disables/hides or enables/shows the target.
    set_value : Any, optional
        Value assigned to the target just before it gets disabled.
    """

    source: str
    target: str
    event_kind: EventKind
    polarity: Polarity
    set_value: Any = None

    @property
    def has_set_value(self) -> bool:
        return self.set_value is not None
