"""Tests for exit_codes module."""

from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[2]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from opticaldup.cli.exit_codes import (
    EXIT_SUCCESS,
    EXIT_ERROR,
    EXIT_USAGE,
    EXIT_SIGINT,
    EXIT_SIGTERM,
)


class TestExitCodes:
    """Test exit code constants."""

    def test_values(self):
        assert EXIT_SUCCESS == 0
        assert EXIT_ERROR == 1
        assert EXIT_USAGE == 2
        assert EXIT_SIGINT == 128 + 2
        assert EXIT_SIGTERM == 128 + 15

    def test_exit_codes_are_unique(self):
        codes = [EXIT_SUCCESS, EXIT_ERROR, EXIT_USAGE, EXIT_SIGINT, EXIT_SIGTERM]
        assert len(set(codes)) == len(codes)
