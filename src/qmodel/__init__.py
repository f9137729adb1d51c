# -*- coding: utf-8 -*-
"""# qmodel

Shared machinery for quantitative imaging model objects:

- Versioned snapshots: models saved by an older (or newer) version load into
  the current model class, property by property (`qmodel.model.snapshot`).
- Protocol units: acquisition protocol tables convert between the units the
  fitting code uses and the units shown to users, exactly once per toggle
  (`qmodel.model.units`, `qmodel.registry`).
- Controls: a model's options, their visibility/enablement, and the checkbox
  rules linking them (`qmodel.model.controls`, `qmodel.model.dependencies`).

Example
-------
```python
from qmodel.models import InversionRecovery

model = InversionRecovery()
model.scale_protocols("user")
model.prot["IRData"].format  # ['TI(s)']
model.save_obj("ir")  # writes ir.qmodel.msgpack
restored = InversionRecovery().load_obj("ir.qmodel.msgpack")
```
"""

from ._version import __version__
