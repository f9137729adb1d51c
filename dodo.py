# -*- coding: utf-8 -*-
# pydoit task file for qmodel, run `doit list` from this dir.
# needs the test extras: pip install -e .[test]

from doit.action import CmdAction

TEST_DIR = "test/logic/"
FORMAT_TARGETS = ["src/qmodel", "test/", "examples/", "dodo.py"]


def _pytest_command(module="", keyword="", retry=False, print_logs=False):
    cmd = ["pytest", "--color=yes", "-vv"]
    if print_logs:
        cmd.append("--capture=no")
    if retry:
        cmd.append("--lf")
    if keyword:
        cmd.extend(["-k", f'"{keyword}"'])
    # e.g. module=snapshot -> test/logic/test_snapshot.py
    cmd.append(f"{TEST_DIR}test_{module}.py" if module else TEST_DIR)
    return " ".join(cmd)


def task_test_logic():
    """Run the qmodel test suite (test/logic/).

    doit test_logic -m units      # one module
    doit test_logic -k "choice"   # keyword filter
    doit test_logic -r            # previously failed only
    """

    def router(module, keyword, retry, print_logs):
        return _pytest_command(module, keyword, retry, print_logs)

    return {
        "actions": [CmdAction(router)],
        "params": [
            {"name": "module", "short": "m", "default": ""},
            {"name": "keyword", "short": "k", "default": ""},
            {"name": "retry", "short": "r", "default": False, "type": bool},
            {"name": "print_logs", "short": "p", "default": False, "type": bool},
        ],
        "verbosity": 2,
    }


def task_format():
    """Sort imports and format with ruff."""
    actions = []
    for target in FORMAT_TARGETS:
        actions.append(f"ruff check --select I --fix {target}")
        actions.append(f"ruff format {target}")
    return {"actions": actions, "verbosity": 2}
