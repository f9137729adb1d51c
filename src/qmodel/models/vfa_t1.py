"""Variable flip angle T1 mapping."""

from dataclasses import dataclass, field

from qmodel.model import AbstractModel, ControlDescriptorList
from qmodel.types import DependencyRule, EventKind, Polarity, ProtocolField


@dataclass(kw_only=True, repr=False)
class VfaT1(AbstractModel):
    """T1 from spoiled gradient echoes at several flip angles.

    Flip angles are in degrees, TR in ms.
    """

    mri_inputs = ("VFAData", "B1map", "Mask")
    optional_inputs = ("B1map", "Mask")
    dependency_rules = (
        DependencyRule(
            source="Use B1 map",
            target="B1 smoothing",
            event_kind=EventKind.SHOW_HIDE_CONTROL,
            polarity=Polarity.ON_TRIGGERS_POSITIVE,
        ),
    )

    prot: dict[str, ProtocolField] = field(
        default_factory=lambda: {
            "VFAData": ProtocolField(
                format=["FlipAngle", "TR"], mat=[[3, 15], [20, 15]]
            )
        }
    )
    controls: ControlDescriptorList = field(
        default_factory=lambda: ControlDescriptorList.from_buttons(
            [
                "Fitting method", ["Linear", "Nonlinear"],
                "Use B1 map", False,
                "B1 smoothing", 3,
            ]
        )
    )
