# -*- coding: utf-8 -*-
"""
Utility functions and constants for qmodel.

- Logging configuration and management
- Default paths and constants
- Provenance records

Examples
--------
Start logging to stderr:
```python
from qmodel.util import start_log
start_log(log_to_file=False, log_to_stdout=True, log_level="DEBUG")
```

See Also
--------
qmodel.util.logging : Logging configuration
qmodel.util.provenance : Provenance records
"""

from .defaults import (
    CONFIG_DIR,
    DEFAULT_LOGLEVEL,
    REGISTRY_FILENAME,
    SINGLE_LINE_ERR_LOG,
    SNAPSHOT_SUFFIX,
    TEST_LOGLEVEL,
)
from .logging import (
    clear_log,
    format_error_response,
    get_log_filename,
    log_default_path,
    shutdown_log,
    start_log,
)
from .provenance import (
    EnvironmentInfo,
    EnvironmentInfoProvider,
    PlatformInfoProvider,
    get_provenance,
)

__all__ = [
    "CONFIG_DIR",
    "DEFAULT_LOGLEVEL",
    "REGISTRY_FILENAME",
    "SINGLE_LINE_ERR_LOG",
    "SNAPSHOT_SUFFIX",
    "TEST_LOGLEVEL",
    "EnvironmentInfo",
    "EnvironmentInfoProvider",
    "PlatformInfoProvider",
    "clear_log",
    "format_error_response",
    "get_log_filename",
    "get_provenance",
    "log_default_path",
    "shutdown_log",
    "start_log",
]
