"""Pytest configuration for opticaldup tests."""

import logging
import sys
from pathlib import Path

import pytest

# Add src directory to Python path
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def reset_logging_after_test():
    """Reset opticaldup logger state after each test.

    This prevents test pollution from tests that call setup_logging(),
    which sets propagate=False and breaks caplog in subsequent tests.
    """
    yield
    app_logger = logging.getLogger("opticaldup")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
    app_logger.setLevel(logging.NOTSET)
    app_logger.propagate = True
