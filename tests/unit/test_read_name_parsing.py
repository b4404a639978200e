"""Tests for read name parsing helpers."""

from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[2]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from opticaldup.core.read_name_parsing import (
    get_last_three_fields,
    parse_int_exact,
    rapid_parse_int,
    to_short,
)


class TestRapidParseInt:
    """Test cases for rapid_parse_int."""

    @pytest.mark.parametrize("suffix", ["", "A", "ACGT", ".1"])
    def test_positive_and_negative_with_suffix(self, suffix):
        """Integers in [-1000, 1000] parse regardless of a non-digit suffix."""
        for i in range(-1000, 1001):
            value, consumed = rapid_parse_int(str(i) + suffix)
            assert value == i
            assert consumed == len(str(i))

    def test_offset_and_end(self):
        """Parsing honours start and end offsets."""
        text = "RUN:7:1203:2886"
        assert rapid_parse_int(text, 6) == (1203, 4)
        assert rapid_parse_int(text, 6, 8) == (12, 2)

    def test_stops_at_delimiter(self):
        """A delimiter is an implicit terminator."""
        assert rapid_parse_int("17981:23325") == (17981, 5)

    @pytest.mark.parametrize("text", ["", "ABC", "-", "-x12", ":5"])
    def test_no_digits(self, text):
        """No digits at the offset reports (None, 0)."""
        assert rapid_parse_int(text) == (None, 0)

    def test_leading_zeros(self):
        """Leading zeros are accepted."""
        assert rapid_parse_int("000000000-ZZZZZ") == (0, 9)

    def test_empty_slice(self):
        """An empty slice has no digits."""
        assert rapid_parse_int("123", 2, 2) == (None, 0)


class TestGetLastThreeFields:
    """Test cases for get_last_three_fields."""

    @pytest.mark.parametrize("num_fields", range(1, 10))
    def test_field_counts(self, num_fields):
        """Return -1 below three fields, otherwise the count and last three values."""
        read_name = ":".join(str(i) for i in range(num_fields))
        tokens = [-1, -1, -1]

        result = get_last_three_fields(read_name, ":", tokens)

        if num_fields < 3:
            assert result == -1
        else:
            assert result == num_fields
            assert tokens == [num_fields - 3, num_fields - 2, num_fields - 1]

    def test_very_long_read_names(self):
        """Seven-field CASAVA 1.8 names yield the trailing tile/x/y."""
        tokens = [-1, -1, -1]
        assert get_last_three_fields("M01234:123:000000000-ZZZZZ:1:1105:17981:23325", ":", tokens) == 7
        assert tokens == [1105, 17981, 23325]
        assert get_last_three_fields("M01234:123:000000000-ZZZZZ:1:1109:22981:17995", ":", tokens) == 7
        assert tokens == [1109, 22981, 17995]

    def test_buffer_reused(self):
        """The same list is overwritten on every call."""
        tokens = [-1, -1, -1]
        get_last_three_fields("RUNID:7:1203:2886:82292", ":", tokens)
        first = tokens
        get_last_three_fields("RUNID:7:1:2:3", ":", tokens)
        assert tokens is first
        assert tokens == [1, 2, 3]

    def test_trailing_suffix(self):
        """A non-numeric suffix after the last number is ignored."""
        tokens = [-1, -1, -1]
        assert get_last_three_fields("RUNID:7:1203:2886:82292/1", ":", tokens) == 5
        assert tokens == [1203, 2886, 82292]

    def test_non_numeric_trailing_field(self):
        """A trailing field without digits makes the name non-conforming."""
        tokens = [-1, -1, -1]
        assert get_last_three_fields("RUNID:7:1203:abc:82292", ":", tokens) == -1

    def test_empty_string(self):
        """An empty name has a single empty field."""
        tokens = [-1, -1, -1]
        assert get_last_three_fields("", ":", tokens) == -1
        assert tokens == [-1, -1, -1]


class TestParseIntExact:
    """Test cases for parse_int_exact."""

    @pytest.mark.parametrize("text, expected", [("123", 123), ("-12", -12), ("0007", 7)])
    def test_whole_integers(self, text, expected):
        assert parse_int_exact(text) == expected

    @pytest.mark.parametrize("text", ["1_0", " 5", "5 ", "12a", "-", "+5", "", None])
    def test_rejects_partial_or_loose_integers(self, text):
        assert parse_int_exact(text) is None


class TestToShort:
    """Test cases for to_short."""

    def test_in_range_unchanged(self):
        for value in (-32768, -1, 0, 1203, 32767):
            assert to_short(value) == value

    def test_wraps_like_a_cast(self):
        assert to_short(32768) == -32768
        assert to_short(65535) == -1
        assert to_short(65536) == 0
        assert to_short(82292) == 16756
        assert to_short(-32769) == 32767
