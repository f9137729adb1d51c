"""Quantitative susceptibility mapping, split-Bregman."""

from dataclasses import dataclass, field

from qmodel.model import AbstractModel, ControlDescriptorList
from qmodel.types import DependencyRule, EventKind, Polarity, ProtocolField

NEG = Polarity.ON_TRIGGERS_NEGATIVE
POS = Polarity.ON_TRIGGERS_POSITIVE


@dataclass(kw_only=True, repr=False)
class QsmSb(AbstractModel):
    """Susceptibility maps from GRE phase.

    Resolution is in mm, field strength in T and central frequency in Hz.
    """

    mri_inputs = ("PhaseGRE", "MagnGRE", "Mask")
    optional_inputs = ("MagnGRE",)

    # Split-Bregman needs both regularizers, so it forces them on before
    # locking them.
    dependency_rules = (
        DependencyRule(
            source="SHARP Filtering",
            target="SHARP Filter Size",
            event_kind=EventKind.ENABLE_DISABLE,
            polarity=POS,
        ),
        DependencyRule(
            source="SHARP Filtering",
            target="SHARP Filter Threshold",
            event_kind=EventKind.ENABLE_DISABLE,
            polarity=POS,
        ),
        DependencyRule(
            source="Split-Bregman",
            target="L1 Regularized",
            event_kind=EventKind.ENABLE_DISABLE,
            polarity=NEG,
            set_value=True,
        ),
        DependencyRule(
            source="Split-Bregman",
            target="L2 Regularized",
            event_kind=EventKind.ENABLE_DISABLE,
            polarity=NEG,
            set_value=True,
        ),
        DependencyRule(
            source="L1 Regularized",
            target="Lambda L1",
            event_kind=EventKind.ENABLE_DISABLE,
            polarity=POS,
        ),
        DependencyRule(
            source="L2 Regularized",
            target="Lambda L2",
            event_kind=EventKind.ENABLE_DISABLE,
            polarity=POS,
        ),
        DependencyRule(
            source="ReOptimize parameters",
            target="L1 Range",
            event_kind=EventKind.SHOW_HIDE_CONTROL,
            polarity=POS,
        ),
        DependencyRule(
            source="ReOptimize parameters",
            target="L2 Range",
            event_kind=EventKind.SHOW_HIDE_CONTROL,
            polarity=POS,
        ),
        DependencyRule(
            source="No Regularization",
            target="Regularization Parameters",
            event_kind=EventKind.SHOW_HIDE_PANEL,
            polarity=NEG,
        ),
    )

    prot: dict[str, ProtocolField] = field(
        default_factory=lambda: {
            "Resolution": ProtocolField(
                format=["xDim", "yDim", "zDim"], mat=[[0.6, 0.6, 0.6]]
            ),
            "Magnetization": ProtocolField(
                format=["FieldStrength", "CentralFreq"], mat=[[3, 127.74e6]]
            ),
        }
    )
    controls: ControlDescriptorList = field(
        default_factory=lambda: ControlDescriptorList.from_buttons(
            [
                "Derivative direction", ["forward", "backward"],
                "SHARP Filtering", True,
                "SHARP Filter Size", 12,
                "SHARP Filter Threshold", 0.05,
                "PANEL", "Regularization Selection", 4,
                "L1 Regularized", False,
                "L2 Regularized", True,
                "Split-Bregman", False,
                "No Regularization", False,
                "PANEL", "Regularization Parameters", 5,
                "ReOptimize parameters", False,
                "Lambda L1", 5.0,
                "Lambda L2", 0.01,
                "L1 Range", [-4.0, 2.5, 15.0],
                "L2 Range", [-3.0, 0.0, 15.0],
            ]
        )
    )
