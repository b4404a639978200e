"""Utility functions (opticaldup)."""

from opticaldup.utils.logging import get_logger, setup_logging
from opticaldup.utils.progress import iter_progress

__all__ = ["get_logger", "setup_logging", "iter_progress"]
