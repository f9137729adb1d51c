"""Checkbox-driven visibility/enablement of controls.

A `DependencyRule` links one checkbox to one target control. Rules are applied
in the order the model declares them; a later rule touching the same target
overrides an earlier one. Rules do not cascade within a pass: every checkbox
value is read before the first rule is applied, so a value assigned by one
rule is only seen by the next call to `resolve`.
"""

from __future__ import annotations

from typing import Iterable, Optional

from loguru import logger

from qmodel.types import (
    ControlKind,
    DependencyRule,
    EventKind,
    NotACheckbox,
    coerce_value,
)

from .controls import ControlDescriptorList


class ControlDependencyResolver:
    def __init__(self, controls: ControlDescriptorList):
        self.controls = controls

    def checkbox_state(self, name: str) -> bool:
        entry = self.controls[name]
        if entry.kind is not ControlKind.CHECKBOX:
            raise NotACheckbox(f"'{name}' is not a checkbox")
        return entry.value

    def apply_rule(self, rule: DependencyRule, checked: Optional[bool] = None) -> None:
        """Apply a single rule.

        Parameters
        ----------
        rule : DependencyRule
            Rule to apply.
        checked : bool, optional
            State of the source checkbox, read from the controls if not given.

        Raises
        ------
        UnknownControl
            If the source or target does not exist.
        NotACheckbox
            If the source is not a checkbox.
        NotAPanel
            If a show_hide_panel rule targets something that is not a panel.
        InvalidAssignment
            If `rule.set_value` does not fit the target's kind.
        """
        state = self.checkbox_state(rule.source)
        if checked is None:
            checked = state
        target = self.controls[rule.target]
        negative = rule.polarity.wants_negative(checked)

        if rule.event_kind is EventKind.ENABLE_DISABLE:
            if negative and rule.has_set_value:
                value = coerce_value(target.kind, rule.set_value, target.name)
                logger.debug(
                    f"Control {target.name}: value set to {value} before disabling"
                )
                target.value = value
            self.controls.set_disabled(rule.target, negative)
        elif rule.event_kind is EventKind.SHOW_HIDE_CONTROL:
            self.controls.set_hidden(rule.target, negative)
        elif rule.event_kind is EventKind.SHOW_HIDE_PANEL:
            self.controls.set_panel_hidden(rule.target, negative)
        else:
            raise ValueError(f"Unknown event kind: {rule.event_kind}")

    def resolve(self, rules: Iterable[DependencyRule]) -> None:
        """Apply `rules` in order against the current checkbox states."""
        rules = list(rules)
        states = {rule.source: self.checkbox_state(rule.source) for rule in rules}
        for rule in rules:
            self.apply_rule(rule, states[rule.source])
