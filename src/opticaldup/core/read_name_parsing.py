"""
Read Name Parsing - allocation-light helpers for tile/x/y extraction

These helpers run once per duplicate-flagged read, so they avoid the obvious
``read_name.split(":")`` + ``int()`` route: names are scanned by index, no
intermediate substrings or token lists are built, and the caller supplies a
3-slot list that receives the trailing fields.

Key functions:
- rapid_parse_int: signed integer prefix of a string slice
- get_last_three_fields: last three delimiter-separated integers of a read name
- to_short: two's complement wrap into the signed 16-bit range
- parse_int_exact: whole-string integer for custom regex groups
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from opticaldup.constants import SHORT_MAX


def rapid_parse_int(text: str, start: int = 0, end: Optional[int] = None) -> Tuple[Optional[int], int]:
    """
    Parse a signed integer prefix of ``text[start:end]``.

    Parsing stops at the first character that is not an ASCII digit, so
    trailing garbage ("1203ACGT", "17.1", "82292/1") is an implicit terminator.

    Args:
        text: String to read from
        start: Offset of the first character to consider
        end: Offset one past the last character to consider (default: len(text))

    Returns:
        ``(value, consumed)``; ``(None, 0)`` when no digit is found at ``start``
    """
    if end is None:
        end = len(text)

    i = start
    negative = False
    if i < end and text[i] == "-":
        negative = True
        i += 1

    value = 0
    digits_start = i
    while i < end:
        c = text[i]
        if "0" <= c <= "9":
            value = value * 10 + (ord(c) - 48)
            i += 1
        else:
            break

    if i == digits_start:
        return None, 0
    return (-value if negative else value), i - start


def get_last_three_fields(read_name: str, delim: str, tokens: List[int]) -> int:
    """
    Extract the last three ``delim``-separated integers of ``read_name``.

    One forward pass counts fields and keeps the boundaries of the most
    recent three; only those three are parsed. ``tokens`` must hold at least
    three slots and is overwritten in place (tile, x, y order).

    Args:
        read_name: Read name to scan
        delim: Single-character field delimiter
        tokens: Reusable output list of length >= 3

    Returns:
        Total number of fields, or -1 if there are fewer than three or one of
        the trailing three does not start with an integer
    """
    # (start, end) offsets of the three most recent complete fields
    a_start = a_end = b_start = b_end = c_start = c_end = -1
    field_start = 0
    num_fields = 0

    i = read_name.find(delim)
    while i != -1:
        a_start, a_end = b_start, b_end
        b_start, b_end = c_start, c_end
        c_start, c_end = field_start, i
        num_fields += 1
        field_start = i + 1
        i = read_name.find(delim, field_start)

    # Trailing field after the last delimiter
    a_start, a_end = b_start, b_end
    b_start, b_end = c_start, c_end
    c_start, c_end = field_start, len(read_name)
    num_fields += 1

    if num_fields < 3:
        return -1

    value, _ = rapid_parse_int(read_name, a_start, a_end)
    if value is None:
        return -1
    tokens[0] = value
    value, _ = rapid_parse_int(read_name, b_start, b_end)
    if value is None:
        return -1
    tokens[1] = value
    value, _ = rapid_parse_int(read_name, c_start, c_end)
    if value is None:
        return -1
    tokens[2] = value

    return num_fields


def to_short(value: int) -> int:
    """Wrap ``value`` into the signed 16-bit range (two's complement)."""
    value = int(value)
    if -SHORT_MAX - 1 <= value <= SHORT_MAX:
        return value
    return ((value + (SHORT_MAX + 1)) & 0xFFFF) - (SHORT_MAX + 1)


def parse_int_exact(text: Optional[str]) -> Optional[int]:
    """Parse ``text`` as a whole optionally signed decimal integer.

    Unlike ``int()`` this rejects underscores, surrounding whitespace and
    trailing characters; None is returned for anything that is not consumed
    completely.
    """
    if not text:
        return None
    value, consumed = rapid_parse_int(text)
    if value is None or consumed != len(text):
        return None
    return value
