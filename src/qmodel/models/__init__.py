"""
Concrete models.

`MODELS` maps model names to their classes, for the CLI and scripts:

```python
from qmodel.models import get_model_class
model = get_model_class("InversionRecovery")()
model.scale_protocols("user")
```
"""

from typing import Type

from qmodel.model import AbstractModel

from .inversion_recovery import InversionRecovery
from .qsm_sb import QsmSb
from .vfa_t1 import VfaT1

MODELS: dict[str, Type[AbstractModel]] = {
    cls.__name__: cls for cls in (InversionRecovery, QsmSb, VfaT1)
}


def get_model_class(name: str) -> Type[AbstractModel]:
    """Case-insensitive lookup of a model class by name."""
    for model_name, cls in MODELS.items():
        if model_name.lower() == name.lower():
            return cls
    raise ValueError(f"Unknown model '{name}'. Available: {', '.join(MODELS)}")


__all__ = ["MODELS", "InversionRecovery", "QsmSb", "VfaT1", "get_model_class"]
