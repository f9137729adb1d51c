import os

import pytest
from loguru import logger

from qmodel.util import (
    TEST_LOGLEVEL,
    clear_log,
    format_error_response,
    get_log_filename,
    log_default_path,
    shutdown_log,
    start_log,
)
from qmodel.util import logging as log_module


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "logs" / "session.log"
    yield path
    shutdown_log()


def test_start_log_to_file(log_file):
    start_log(log_to_file=True, log_path=str(log_file), log_level=TEST_LOGLEVEL)
    logger.trace("trace line")
    shutdown_log()
    text = log_file.read_text()
    assert "Log started at" in text
    assert "trace line" in text
    assert "Closing down log." in text
    assert get_log_filename() == os.path.abspath(log_file)


def test_level_filters_messages(log_file):
    start_log(log_to_file=True, log_path=str(log_file), log_level="WARNING")
    logger.info("quiet")
    logger.warning("loud")
    shutdown_log()
    text = log_file.read_text()
    assert "quiet" not in text
    assert "loud" in text


def test_clear_prev(log_file):
    log_file.parent.mkdir(parents=True)
    log_file.write_text("old session\n")
    start_log(log_to_file=True, log_path=str(log_file), clear_prev=False)
    shutdown_log()
    assert "old session" in log_file.read_text()

    start_log(log_to_file=True, log_path=str(log_file), clear_prev=True)
    shutdown_log()
    assert "old session" not in log_file.read_text()


def test_default_path(isolated_config_dir):
    assert log_default_path() == str(isolated_config_dir / "qmodel.log")
    start_log(log_to_file=True)
    shutdown_log()
    assert (isolated_config_dir / "qmodel.log").exists()


def test_clear_log(tmp_path):
    path = tmp_path / "old.log"
    path.write_text("x")
    clear_log(str(path))
    assert not path.exists()
    # missing files are ignored
    clear_log(str(path))


def test_format_error_response(monkeypatch):
    try:
        raise ValueError("bad value")
    except ValueError:
        multi = format_error_response()
        monkeypatch.setattr(log_module, "SINGLE_LINE_ERR_LOG", True)
        single = format_error_response()
    assert multi.startswith("Traceback")
    assert "ValueError: bad value" in multi
    assert "\n" not in single
    assert "ValueError: bad value" in single
