import logging
import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from progression import ClanProgressState, ProgressionEngine  # noqa: E402


@pytest.fixture()
def engine():
    return ProgressionEngine()


@pytest.fixture()
def fresh_state():
    return ClanProgressState(experience=0, level=1)


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
