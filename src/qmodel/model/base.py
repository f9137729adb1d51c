"""Properties and methods shared between all models.

A model is a kw-only dataclass. Its dataclass fields are its persisted
properties: subclasses add their own protocol tables and controls by
redeclaring `prot` and `controls` with a `default_factory`, and declare their
checkbox dependencies in the `dependency_rules` class attribute.

Protocols are held in *original* units at construction. Call
`scale_protocols("user")` before showing them, and wrap code that consumes
them (fitting, simulation) in `protocols_in_original_units()`.
"""

import re
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Iterator, Mapping, Optional

import numpy as np
from loguru import logger
from mashumaro import DataClassDictMixin

from qmodel._version import __version__
from qmodel.registry import UnitMappingRegistry, get_model_registry
from qmodel.types import (
    DependencyRule,
    EventKind,
    Polarity,
    ProtocolField,
    SchemaMismatchError,
    SerializationError,
)
from qmodel.util.defaults import SNAPSHOT_SUFFIX
from qmodel.util.provenance import EnvironmentInfoProvider, get_provenance

from . import snapshot as snapshot_store
from .controls import ControlDescriptorList
from .dependencies import ControlDependencyResolver
from .sanity import sanity_check
from .units import Direction, get_scaled_protocols


@dataclass(kw_only=True, repr=False)
class AbstractModel(DataClassDictMixin):
    """Base class of all models.

    Attributes
    ----------
    version : str
        Version of the software that created the model.
    model_name : str
        Defaults to the class name; selects the unit mappings.
    prot : dict[str, ProtocolField]
        Acquisition protocol tables.
    controls : ControlDescriptorList
        Interactive options of the model.
    original_prot_enabled : bool
        True while `prot` is in original units.
    env_details : dict[str, Any]
        Free-form environment details.
    """

    dependency_rules: ClassVar[tuple[DependencyRule, ...]] = ()
    mri_inputs: ClassVar[tuple[str, ...]] = ()
    optional_inputs: ClassVar[tuple[str, ...]] = ()

    version: str = field(default_factory=lambda: __version__)
    model_name: str = ""
    prot: dict[str, ProtocolField] = field(default_factory=dict)
    controls: ControlDescriptorList = field(default_factory=ControlDescriptorList)
    original_prot_enabled: bool = True
    env_details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.model_name:
            self.model_name = self.__class__.__name__

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(version={self.version}, "
            f"prot={list(self.prot)}, controls={len(self.controls)}, "
            f"original_prot_enabled={self.original_prot_enabled})"
        )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_snapshot(self) -> snapshot_store.ModelSnapshot:
        return snapshot_store.save(self)

    def from_snapshot(self, source: snapshot_store.SnapshotSource) -> "AbstractModel":
        """Return a copy of this model patched with `source`."""
        return snapshot_store.load(self, source)

    def save_obj(self, path: Optional[str | Path] = None) -> Path:
        """Save the model to ``<path>.qmodel.msgpack``.

        Any existing snapshot suffix on `path` is replaced, so the suffix is
        never doubled. Defaults to the class name in the working directory.
        """
        if path is None:
            path = self.__class__.__name__
        stem = re.sub(re.escape(SNAPSHOT_SUFFIX) + "$", "", str(path), flags=re.I)
        stem = re.sub(r"\.msgpack$", "", stem, flags=re.I)
        try:
            return snapshot_store.write_snapshot(
                self.to_snapshot(), stem + SNAPSHOT_SUFFIX
            )
        except (SerializationError, SchemaMismatchError) as e:
            raise type(e)(f"{self.__class__.__name__}:{e}") from e

    def load_obj(self, source: snapshot_store.SnapshotSource) -> "AbstractModel":
        """Load a snapshot (file, bytes or mapping) into a copy of this model."""
        try:
            return snapshot_store.load(self, source)
        except (SerializationError, SchemaMismatchError) as e:
            raise type(e)(f"{self.__class__.__name__}:{e}") from e

    # ------------------------------------------------------------------
    # Protocol units
    # ------------------------------------------------------------------

    def unit_registry(self) -> UnitMappingRegistry:
        return get_model_registry().get(self.model_name)

    def get_scaled_protocols(
        self,
        direction: Direction | str,
        registry: Optional[UnitMappingRegistry] = None,
    ) -> tuple[dict[str, ProtocolField], bool]:
        """Protocols converted to `direction` units, without modifying the model.

        Returns
        -------
        tuple[dict[str, ProtocolField], bool]
            (protocols, matching value of original_prot_enabled)
        """
        if registry is None:
            registry = self.unit_registry()
        return get_scaled_protocols(
            self.prot, registry, direction, self.original_prot_enabled
        )

    def scale_protocols(
        self,
        direction: Direction | str,
        registry: Optional[UnitMappingRegistry] = None,
    ) -> None:
        self.prot, self.original_prot_enabled = self.get_scaled_protocols(
            direction, registry
        )

    @contextmanager
    def protocols_in_original_units(
        self, registry: Optional[UnitMappingRegistry] = None
    ) -> Iterator[dict[str, ProtocolField]]:
        """Temporarily switch protocols to original units.

        The previous unit system is restored on exit, also on error.
        """
        was_original = self.original_prot_enabled
        self.scale_protocols(Direction.ORIGINAL, registry)
        try:
            yield self.prot
        finally:
            if not was_original:
                self.scale_protocols(Direction.USER, registry)

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    @property
    def options(self) -> dict[str, Any]:
        return self.controls.options

    def set_option(self, name: str, value: Any) -> None:
        self.controls.set_value(name, value)

    def get_checkbox_state(self, name: str) -> bool:
        return ControlDependencyResolver(self.controls).checkbox_state(name)

    def link_gui_state(
        self,
        checkbox: str,
        target: str,
        event_kind: EventKind | str,
        polarity: Polarity | str,
        set_value: Any = None,
    ) -> None:
        """Apply one checkbox -> target rule now, using the checkbox's value."""
        rule = DependencyRule(
            source=checkbox,
            target=target,
            event_kind=EventKind(event_kind),
            polarity=Polarity(polarity),
            set_value=set_value,
        )
        ControlDependencyResolver(self.controls).apply_rule(rule)

    def update_fields(self) -> "AbstractModel":
        """Apply the model's dependency rules to its controls."""
        ControlDependencyResolver(self.controls).resolve(self.dependency_rules)
        return self

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    def sanity_check(self, data: Mapping[str, np.ndarray]) -> Optional[str]:
        """Error message if `data` does not fit this model, else None."""
        msg = sanity_check(self, data)
        if msg is not None:
            logger.warning(f"{self.__class__.__name__} input error: {msg}")
        return msg

    @staticmethod
    def get_provenance(
        provider: Optional[EnvironmentInfoProvider] = None,
        extra: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        return get_provenance(provider, extra)
