"""Checks on input data before it is handed to a model."""

from typing import TYPE_CHECKING, Any, Mapping, Optional

import numpy as np

if TYPE_CHECKING:
    from .base import AbstractModel


def _is_empty(value: Any) -> bool:
    return value is None or np.size(value) == 0


def _shape4(value: Any) -> tuple[int, int, int, int]:
    """Spatial dims plus number of frames, padding missing dims with 1."""
    shape = np.shape(value)
    shape = tuple(shape) + (1,) * (4 - len(shape))
    return shape[0], shape[1], shape[2], int(np.prod(shape[3:]))


def sanity_check(model: "AbstractModel", data: Mapping[str, Any]) -> Optional[str]:
    """Check input data against a model's declared inputs and protocol.

    Parameters
    ----------
    model : AbstractModel
        Model declaring `mri_inputs`, `optional_inputs` and `prot`.
    data : Mapping[str, Any]
        Input arrays by name. Arrays are indexed (x, y, z, frames).

    Returns
    -------
    Optional[str]
        Error message, or None if the data is usable.
    """
    if not data:
        return "No input data provided"

    for name in model.mri_inputs:
        if name in model.optional_inputs:
            continue
        if name not in data or _is_empty(data[name]):
            return f"Cannot find required input called {name}"

    if not model.mri_inputs or model.mri_inputs[0] in model.optional_inputs:
        # a leading optional input gives nothing to compare against
        return None

    ref_name = model.mri_inputs[0]
    x, y, z, n_frames = _shape4(data[ref_name])
    for name, value in data.items():
        if name == ref_name or _is_empty(value):
            continue
        x_, y_, z_, _ = _shape4(value)
        if (x_, y_, z_) != (x, y, z):
            return (
                "Inputs not sampled the same way:\n"
                f"{ref_name} is {x}x{y}x{z}x{n_frames}.\n"
                f"{name} input is {x_}x{y_}x{z_}"
            )

    if ref_name in model.prot:
        n_rows = model.prot[ref_name].n_rows
        if n_rows != n_frames:
            return (
                f"Protocol has: {n_rows} rows. "
                f"And input volume {ref_name} has {n_frames} frames"
            )
    return None
