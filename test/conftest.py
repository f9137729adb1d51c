import pytest

import qmodel.registry.registry as registry_module
from qmodel.util import defaults


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Point the user config dir at a temp dir and drop the cached registry."""
    config_dir = tmp_path / ".qmodel"
    monkeypatch.setattr(defaults, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(registry_module, "_MODEL_REGISTRY", None)
    return config_dir
