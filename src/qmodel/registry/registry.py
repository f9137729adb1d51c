"""Unit mapping registry for model protocols.

Each model declares, per protocol table and per column label, the symbol shown
to users and the factor that converts original units into user units
(``user = original / scale_factor``).

Mappings are read from JSON documents of the form:

```json
{
    "InversionRecovery": {
        "Protocol": {
            "IRData": {"TI": {"Symbol": "(s)", "ScaleFactor": 1000}}
        }
    }
}
```

Search order for `load_model_registry`:
1. ~/.qmodel/model_registry.json (per-model sections override the defaults)
2. package default qmodel/registry/model_registry.json
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import simplejson as json
from loguru import logger

from qmodel.types.errors import UnknownUnitMapping
from qmodel.util import defaults

PACKAGE_REGISTRY_FILE = Path(__file__).parent / defaults.REGISTRY_FILENAME

_MODEL_REGISTRY: Optional[ModelRegistry] = None


@dataclass(frozen=True)
class UnitMapping:
    symbol: str
    scale_factor: float


@dataclass
class UnitMappingRegistry:
    """Read-only `(protocol, label) -> UnitMapping` lookup for one model."""

    model_name: str
    protocols: dict[str, dict[str, UnitMapping]] = field(default_factory=dict)

    def lookup(self, protocol_name: str, label: str) -> UnitMapping:
        """Get the unit mapping for a protocol column.

        Raises
        ------
        UnknownUnitMapping
            If the pair is not registered.
        """
        try:
            return self.protocols[protocol_name][label]
        except KeyError:
            raise UnknownUnitMapping(protocol_name, label, self.model_name) from None

    @classmethod
    def from_document(
        cls, model_name: str, section: dict[str, Any]
    ) -> UnitMappingRegistry:
        protocols = {}
        for prot_name, labels in section.get("Protocol", {}).items():
            protocols[prot_name] = {
                label: UnitMapping(
                    symbol=str(m["Symbol"]), scale_factor=float(m["ScaleFactor"])
                )
                for label, m in labels.items()
            }
        return cls(model_name=model_name, protocols=protocols)


@dataclass
class ModelRegistry:
    """Unit registries for every known model, keyed by model name."""

    models: dict[str, UnitMappingRegistry] = field(default_factory=dict)

    def register(self, registry: UnitMappingRegistry) -> None:
        self.models[registry.model_name] = registry

    def get(self, model_name: str) -> UnitMappingRegistry:
        """Get a model's unit registry. Unknown models get an empty one."""
        if model_name not in self.models:
            logger.warning(f"Model {model_name} has no registered unit mappings")
            return UnitMappingRegistry(model_name=model_name)
        return self.models[model_name]

    def names(self) -> list[str]:
        return sorted(self.models)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> ModelRegistry:
        return cls(
            models={
                name: UnitMappingRegistry.from_document(name, section)
                for name, section in document.items()
            }
        )


def validate_registry_document(document: Any) -> tuple[bool, str]:
    """Validate a unit registry document.

    Parameters
    ----------
    document : Any
        Parsed JSON document

    Returns
    -------
    tuple[bool, str]
        (is_valid, error_message)
    """
    if not isinstance(document, dict):
        return False, "Registry document must be a mapping of model names"
    for model_name, section in document.items():
        if not isinstance(section, dict) or "Protocol" not in section:
            return False, f"Missing 'Protocol' section for model {model_name}"
        for prot_name, labels in section["Protocol"].items():
            if not isinstance(labels, dict):
                return False, f"Invalid protocol entry {model_name}.{prot_name}"
            for label, mapping in labels.items():
                where = f"{model_name}.{prot_name}.{label}"
                if not isinstance(mapping, dict):
                    return False, f"Invalid unit mapping for {where}"
                if "Symbol" not in mapping or "ScaleFactor" not in mapping:
                    return False, f"Missing Symbol or ScaleFactor for {where}"
                try:
                    factor = float(mapping["ScaleFactor"])
                except (TypeError, ValueError):
                    return False, f"Non-numeric ScaleFactor for {where}"
                if factor == 0:
                    return False, f"Zero ScaleFactor for {where}"
    return True, ""


def _read_document(path: Path) -> dict[str, Any]:
    with open(path, "r") as f:
        document = json.load(f)
    is_valid, msg = validate_registry_document(document)
    if not is_valid:
        raise ValueError(f"Invalid unit registry {path}: {msg}")
    return document


def load_model_registry(config_dir: Optional[Path] = None) -> ModelRegistry:
    """Load the unit registry, user file first, then package defaults.

    Parameters
    ----------
    config_dir : Path, optional
        Directory holding the user registry file, defaults to ~/.qmodel

    Returns
    -------
    ModelRegistry
        Merged registry, user sections taking precedence per model.
    """
    if config_dir is None:
        config_dir = defaults.CONFIG_DIR
    user_file = Path(config_dir) / defaults.REGISTRY_FILENAME

    document = _read_document(PACKAGE_REGISTRY_FILE)
    if user_file.exists():
        logger.debug(f"Reading user unit registry {user_file}")
        document.update(_read_document(user_file))

    return ModelRegistry.from_document(document)


def get_model_registry(reload: bool = False) -> ModelRegistry:
    """Get the process-wide registry, loading it on first use."""
    global _MODEL_REGISTRY
    if _MODEL_REGISTRY is None or reload:
        _MODEL_REGISTRY = load_model_registry()
    return _MODEL_REGISTRY


def create_user_registry_file(file_path: Path) -> None:
    """Write a copy of the package default registry for editing."""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    logger.debug(f"Creating user unit registry at {file_path}")
    document = _read_document(PACKAGE_REGISTRY_FILE)
    with open(file_path, "w") as f:
        json.dump(document, f, indent=4)
