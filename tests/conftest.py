import logging
import os
import sys

import pytest

# The checker modules live at the repo root (flat layout); make them importable
# regardless of the directory pytest is started from.
REPO_ROOT = os.path.dirname(os.path.dirname(__file__))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)


@pytest.fixture(autouse=True)
def _quiet_checker_trace():
    """Keep the per-production debug trace out of captured logs."""
    logger = logging.getLogger("checker")
    previous = logger.level
    logger.setLevel(logging.INFO)
    yield
    logger.setLevel(previous)
