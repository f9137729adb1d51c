"""Tests for control entries and the control descriptor list."""

import numpy as np
import pytest

from qmodel.model import ControlDescriptorList
from qmodel.types import (
    ControlEntry,
    ControlKind,
    InvalidAssignment,
    Marker,
    NotAPanel,
    UnknownControl,
    coerce_value,
    infer_kind,
)

BUTTONS = [
    "Method", ["Magnitude", "Complex"],
    "PANEL", "Regularization", 2,
    "UseL1", True,
    "Lambda", 0.1,
    "Range", [-4.0, 2.5, 15.0],
]


@pytest.fixture
def controls():
    return ControlDescriptorList.from_buttons(BUTTONS)


@pytest.mark.parametrize(
    "value, kind",
    [
        (True, ControlKind.CHECKBOX),
        (np.bool_(False), ControlKind.CHECKBOX),
        (3, ControlKind.SINGLE_VALUE),
        (0.5, ControlKind.SINGLE_VALUE),
        ([5], ControlKind.SINGLE_VALUE),
        ([1.0, 2.0], ControlKind.TABLE),
        (np.array([1, 2, 3]), ControlKind.TABLE),
        (["a", "b"], ControlKind.CHOICE),
    ],
)
def test_infer_kind(value, kind):
    assert infer_kind(value) is kind


@pytest.mark.parametrize("value", ["abc", None, [], [1, "a"]])
def test_infer_kind_rejects_unknown_shapes(value):
    with pytest.raises(InvalidAssignment):
        infer_kind(value)


@pytest.mark.parametrize(
    "kind, value",
    [
        (ControlKind.CHECKBOX, 1),
        (ControlKind.SINGLE_VALUE, [1, 2]),
        (ControlKind.SINGLE_VALUE, True),
        (ControlKind.TABLE, 3.0),
        (ControlKind.TABLE, [3.0]),
        (ControlKind.CHOICE, "a"),
    ],
)
def test_coerce_value_rejects_mismatch(kind, value):
    with pytest.raises(InvalidAssignment):
        coerce_value(kind, value)


def test_coerce_value_canonical_forms():
    assert coerce_value(ControlKind.TABLE, np.array([1, 2])) == (1.0, 2.0)
    assert coerce_value(ControlKind.SINGLE_VALUE, np.float64(0.5)) == 0.5
    assert type(coerce_value(ControlKind.SINGLE_VALUE, np.int64(2))) is int
    assert coerce_value(ControlKind.CHOICE, ("a", "b")) == ["a", "b"]


def test_entry_value_starts_at_default():
    entry = ControlEntry(name="Range", default=[1, 2, 3])
    assert entry.kind is ControlKind.TABLE
    assert entry.value == (1.0, 2.0, 3.0)
    assert entry.marker is Marker.NONE


def test_choice_value_is_a_separate_list():
    entry = ControlEntry(name="Method", default=["a", "b"])
    entry.value.append("c")
    assert entry.default == ["a", "b"]


def test_marker_hidden_wins_over_disabled():
    entry = ControlEntry(name="x", default=1.0, disabled=True)
    assert entry.marker is Marker.DISABLED
    entry.hidden = True
    assert entry.marker is Marker.HIDDEN


def test_from_buttons_layout(controls):
    assert [e.name for e in controls] == [
        "Method",
        "Regularization",
        "UseL1",
        "Lambda",
        "Range",
    ]
    assert controls["Regularization"].kind is ControlKind.PANEL
    assert controls["Regularization"].panel_size == 2
    assert controls.kind_of("Range") is ControlKind.TABLE


def test_from_buttons_rejects_non_name():
    with pytest.raises(ValueError):
        ControlDescriptorList.from_buttons(["a", 1.0, 2.0, 3.0])


def test_duplicate_names_rejected():
    with pytest.raises(ValueError) as exc_info:
        ControlDescriptorList.from_buttons(["a", 1.0, "a", 2.0])
    assert "Duplicate" in str(exc_info.value)


def test_panel_overflow_rejected():
    with pytest.raises(ValueError):
        ControlDescriptorList.from_buttons(["PANEL", "P", 3, "a", 1.0])


def test_find_entry_ignores_markers(controls):
    idx = controls.find_entry("Lambda")
    controls.set_disabled("Lambda", True)
    assert controls.find_entry("Lambda") == idx
    controls.set_hidden("Lambda", True)
    assert controls.find_entry("Lambda") == idx
    assert controls["Lambda"].marker is Marker.HIDDEN


def test_find_entry_unknown(controls):
    with pytest.raises(UnknownControl) as exc_info:
        controls.find_entry("Nope")
    assert "Nope" in str(exc_info.value)


def test_panel_bounds_of(controls):
    assert controls.panel_bounds_of("Regularization") == 1
    with pytest.raises(NotAPanel):
        controls.panel_bounds_of("Lambda")
    with pytest.raises(UnknownControl):
        controls.panel_bounds_of("Nope")


def test_panel_membership(controls):
    assert [e.name for e in controls.panel_members("Regularization")] == [
        "UseL1",
        "Lambda",
    ]
    assert controls.panel_of("Lambda").name == "Regularization"
    assert controls.panel_of("Range") is None
    assert controls.panel_of("Method") is None


def test_hidden_panel_hides_members(controls):
    controls.set_panel_hidden("Regularization", True)
    assert not controls.is_visible("Lambda")
    assert controls.is_visible("Range")
    # member markers themselves are untouched
    assert controls["Lambda"].marker is Marker.NONE


def test_options_and_set_value(controls):
    assert controls.options == {
        "Method": ["Magnitude", "Complex"],
        "UseL1": True,
        "Lambda": 0.1,
        "Range": (-4.0, 2.5, 15.0),
    }
    controls.set_value("Lambda", 0.2)
    assert controls.options["Lambda"] == 0.2
    with pytest.raises(InvalidAssignment):
        controls.set_value("UseL1", 0.2)
    assert controls["UseL1"].value is True


def test_dict_round_trip(controls):
    controls.set_disabled("Lambda", True)
    controls.set_value("Range", [1.0, 2.0])
    restored = ControlDescriptorList.from_dict(controls.to_dict())
    assert restored == controls
    assert restored["Regularization"].kind is ControlKind.PANEL


@pytest.mark.parametrize(
    "buttons",
    [
        ["Method", ["a", "b"], "Lambda"],
        ["PANEL", "Regularization"],
        ["UseL1", True, "PANEL", "Regularization"],
    ],
)
def test_from_buttons_incomplete_declaration(buttons):
    with pytest.raises(ValueError) as exc_info:
        ControlDescriptorList.from_buttons(buttons)
    assert "incomplete" in str(exc_info.value)


def test_choice_from_string_array():
    entry = ControlEntry(name="Method", default=np.array(["Magnitude", "Complex"]))
    assert entry.kind is ControlKind.CHOICE
    assert entry.value == ["Magnitude", "Complex"]
    assert all(type(v) is str for v in entry.value)


def test_select_choice_by_name(controls):
    assert controls["Method"].selection == "Magnitude"
    controls.set_value("Method", "Complex")
    assert controls["Method"].selection == "Complex"
    assert controls.options["Method"] == ["Complex", "Magnitude"]
    assert controls["Method"].default == ["Magnitude", "Complex"]


def test_select_unknown_choice(controls):
    with pytest.raises(InvalidAssignment):
        controls.set_value("Method", "Phase")
    assert controls["Method"].selection == "Magnitude"


def test_selection_only_for_choices(controls):
    assert controls["Lambda"].selection is None
