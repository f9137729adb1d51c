"""
Command-line interface for qmodel.

The CLI is built using the Click framework.

Examples
--------
Show the controls of a model with a checkbox toggled:
```bash
$ qmodel controls QsmSb --check Split-Bregman
```

Print the default protocols in user units:
```bash
$ qmodel convert InversionRecovery --to user
```

CLI Tree
--------

```
$ qmodel --tree
cli
└── controls
└── convert
└── inspect
└── models
└── registry
    └── install
└── save
```
"""

from .base import cli, tree_option

__all__ = ["cli", "tree_option"]
