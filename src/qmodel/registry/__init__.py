"""Unit mapping registry for model protocols.

See Also
--------
qmodel.model.units : protocol unit conversion using these mappings
"""

from .registry import (
    ModelRegistry,
    UnitMapping,
    UnitMappingRegistry,
    create_user_registry_file,
    get_model_registry,
    load_model_registry,
    validate_registry_document,
)

__all__ = [
    "ModelRegistry",
    "UnitMapping",
    "UnitMappingRegistry",
    "create_user_registry_file",
    "get_model_registry",
    "load_model_registry",
    "validate_registry_document",
]
