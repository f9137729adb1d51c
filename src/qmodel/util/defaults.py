# -*- coding: utf-8 -*-

from pathlib import Path

DEFAULT_LOGLEVEL = "INFO"
TEST_LOGLEVEL = "TRACE"
SINGLE_LINE_ERR_LOG = False  # reformat tracebacks into a single line

CONFIG_DIR = Path.home() / ".qmodel"
REGISTRY_FILENAME = "model_registry.json"
SNAPSHOT_SUFFIX = ".qmodel.msgpack"
SOFTWARE_NAME = "qmodel"
