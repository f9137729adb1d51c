"""Acquisition protocol tables."""

from dataclasses import dataclass, field
from typing import Any

import numpy as np
from mashumaro import DataClassDictMixin


def _as_matrix(value: Any, n_columns: int) -> np.ndarray:
    mat = np.array(value, dtype=float)
    if mat.ndim == 0:
        mat = mat.reshape(1, 1)
    elif mat.ndim == 1:
        # a bare vector is a single column unless it is exactly one row wide
        if n_columns == 1:
            mat = mat.reshape(-1, 1)
        else:
            mat = mat.reshape(-1, n_columns) if mat.size else mat.reshape(0, n_columns)
    return mat


@dataclass(kw_only=True, eq=False, repr=False)
class ProtocolField(DataClassDictMixin):
    """A named table of acquisition parameters.

    Attributes
    ----------
    format : list[str]
        Column labels. A single string label is wrapped in a list.
    mat : np.ndarray
        2D matrix, one row per measurement, one column per label.
    """

    format: list[str]
    mat: np.ndarray = field(
        metadata={"serialize": lambda m: m.tolist(), "deserialize": np.array}
    )

    @classmethod
    def __pre_deserialize__(cls, d: dict[Any, Any]) -> dict[Any, Any]:
        # older snapshots store a scalar label rather than a list of labels
        if isinstance(d.get("format"), str):
            d = dict(d)
            d["format"] = [d["format"]]
        return d

    def __post_init__(self):
        if isinstance(self.format, str):
            self.format = [self.format]
        else:
            self.format = [str(label) for label in self.format]
        self.mat = _as_matrix(self.mat, len(self.format))
        if self.mat.ndim != 2 or self.mat.shape[1] != len(self.format):
            raise ValueError(
                f"Protocol matrix has shape {self.mat.shape} but "
                f"{len(self.format)} column labels were given: {self.format}"
            )

    @property
    def n_rows(self) -> int:
        return self.mat.shape[0]

    def copy(self) -> "ProtocolField":
        return ProtocolField(format=list(self.format), mat=self.mat.copy())

    def __eq__(self, other):
        if not isinstance(other, ProtocolField):
            return NotImplemented
        return self.format == other.format and np.array_equal(self.mat, other.mat)

    def __repr__(self):
        return f"ProtocolField(format={self.format}, mat=<Array {self.mat.shape}>)"
