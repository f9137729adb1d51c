"""Inversion recovery T1 mapping."""

from dataclasses import dataclass, field

import numpy as np

from qmodel.model import AbstractModel, ControlDescriptorList
from qmodel.types import ProtocolField


def _default_prot() -> dict[str, ProtocolField]:
    return {
        "IRData": ProtocolField(
            format=["TI"],
            mat=np.array([350, 500, 650, 800, 950, 1100, 1250, 1400, 1700]),
        ),
        "TimingTable": ProtocolField(format=["TR"], mat=[[2500]]),
    }


@dataclass(kw_only=True, repr=False)
class InversionRecovery(AbstractModel):
    """T1 from a series of inversion times. TI and TR are in ms."""

    mri_inputs = ("IRData", "Mask")
    optional_inputs = ("Mask",)

    prot: dict[str, ProtocolField] = field(default_factory=_default_prot)
    controls: ControlDescriptorList = field(
        default_factory=lambda: ControlDescriptorList.from_buttons(
            [
                "method", ["Magnitude", "Complex"],
                "fitModel", ["Barral", "General"],
            ]
        )
    )
