"""Ordered list of a model's interactive controls.

Controls are declared once per model class, in display order. Panels group a
contiguous run of controls: a PANEL header entry is followed by its
`panel_size` member entries.

The compact declaration notation accepted by `ControlDescriptorList.from_buttons`
is a flat list of name/default pairs, where a panel is introduced by the
``"PANEL"`` sentinel followed by the panel name and its member count:

```python
ControlDescriptorList.from_buttons([
    "Method", ["Magnitude", "Complex"],
    "PANEL", "Regularization", 2,
    "Use L1", True,
    "Lambda", 0.1,
])
```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Sequence

from loguru import logger
from mashumaro import DataClassDictMixin

from qmodel.types import (
    ControlEntry,
    ControlKind,
    InvalidAssignment,
    NotAPanel,
    UnknownControl,
    coerce_value,
)

PANEL_SENTINEL = "PANEL"


@dataclass
class ControlDescriptorList(DataClassDictMixin):
    entries: list[ControlEntry] = field(default_factory=list)

    def __post_init__(self):
        names = [entry.name for entry in self.entries]
        duplicates = {name for name in names if names.count(name) > 1}
        if duplicates:
            raise ValueError(f"Duplicate control names: {sorted(duplicates)}")
        for idx, entry in enumerate(self.entries):
            if entry.is_panel and idx + entry.panel_size >= len(self.entries):
                raise ValueError(
                    f"Panel {entry.name} declares {entry.panel_size} controls "
                    f"but only {len(self.entries) - idx - 1} follow it"
                )

    @classmethod
    def from_buttons(cls, buttons: Sequence[Any]) -> ControlDescriptorList:
        """Build the list from the flat name/default declaration notation."""
        entries = []
        idx = 0
        while idx < len(buttons):
            name = buttons[idx]
            if not isinstance(name, str):
                raise ValueError(
                    f"Expected a control name at position {idx}, got {name!r}"
                )
            width = 3 if name == PANEL_SENTINEL else 2
            if idx + width > len(buttons):
                raise ValueError(
                    f"Declaration of {name!r} at position {idx} is incomplete"
                )
            if name == PANEL_SENTINEL:
                entries.append(
                    ControlEntry(
                        name=buttons[idx + 1],
                        kind=ControlKind.PANEL,
                        panel_size=int(buttons[idx + 2]),
                    )
                )
            else:
                entries.append(ControlEntry(name=name, default=buttons[idx + 1]))
            idx += width
        return cls(entries=entries)

    def __iter__(self) -> Iterator[ControlEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, name: str) -> bool:
        return any(entry.name == name for entry in self.entries)

    def __getitem__(self, name: str) -> ControlEntry:
        return self.entries[self.find_entry(name)]

    def find_entry(self, name: str) -> int:
        """Index of the control with canonical name `name`.

        Raises
        ------
        UnknownControl
            If no control has that name.
        """
        for idx, entry in enumerate(self.entries):
            if entry.name == name:
                return idx
        raise UnknownControl(name)

    def kind_of(self, name: str) -> ControlKind:
        return self[name].kind

    def panel_bounds_of(self, name: str) -> int:
        """Index of the header entry of panel `name`.

        Raises
        ------
        UnknownControl
            If no control has that name.
        NotAPanel
            If the name is not a panel.
        """
        idx = self.find_entry(name)
        if not self.entries[idx].is_panel:
            raise NotAPanel(f"'{name}' does not correspond to a panel")
        return idx

    def panel_members(self, name: str) -> list[ControlEntry]:
        idx = self.panel_bounds_of(name)
        return self.entries[idx + 1 : idx + 1 + self.entries[idx].panel_size]

    def panel_of(self, name: str) -> Optional[ControlEntry]:
        """The panel header containing control `name`, if any."""
        target = self.find_entry(name)
        for idx, entry in enumerate(self.entries):
            if entry.is_panel and idx < target <= idx + entry.panel_size:
                return entry
        return None

    def is_visible(self, name: str) -> bool:
        """Whether the control is shown, taking its panel into account."""
        if self[name].hidden:
            return False
        panel = self.panel_of(name)
        return panel is None or not panel.hidden

    def is_enabled(self, name: str) -> bool:
        return not self[name].disabled

    @property
    def options(self) -> dict[str, Any]:
        """Current value of every (non-panel) control, by name."""
        return {e.name: e.value for e in self.entries if not e.is_panel}

    def set_value(self, name: str, value: Any) -> None:
        """Assign a control's current value, validated against its kind.

        A choice list also accepts one of its options as a plain string, which
        selects it by moving it to the front of the list.
        """
        entry = self[name]
        if entry.kind is ControlKind.CHOICE and isinstance(value, str):
            if value not in entry.value:
                raise InvalidAssignment(
                    f"'{value}' is not an option of {name}: {entry.value}"
                )
            value = [value] + [v for v in entry.value if v != value]
        entry.value = coerce_value(entry.kind, value, name)

    def set_hidden(self, name: str, state: bool) -> None:
        entry = self[name]
        if entry.hidden != state:
            logger.debug(f"Control {name}: hidden={state}")
            entry.hidden = state

    def set_disabled(self, name: str, state: bool) -> None:
        entry = self[name]
        if entry.disabled != state:
            logger.debug(f"Control {name}: disabled={state}")
            entry.disabled = state

    def set_panel_hidden(self, name: str, state: bool) -> None:
        idx = self.panel_bounds_of(name)
        entry = self.entries[idx]
        if entry.hidden != state:
            logger.debug(f"Panel {name}: hidden={state}")
            entry.hidden = state

