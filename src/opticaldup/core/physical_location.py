"""Physical location records for optical duplicate detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from opticaldup.constants import UNSET
from opticaldup.core.read_name_parsing import to_short


class PhysicalLocationLike(Protocol):
    """Attributes the clusterer reads and writes on a location record.

    All values should default to -1 if unavailable. Read group and tile
    should only hold non-negative values; x and y may be negative.
    """

    read_group: int
    tile: int
    x: int
    y: int
    library_id: int
    is_optical_duplicate: bool


_SHORT_FIELDS = frozenset({"read_group", "tile", "x", "y", "library_id"})


@dataclass
class PhysicalLocation:
    """Location of one read (or read-pair end) on the flow cell.

    The integer fields are stored as signed 16-bit values: anything assigned
    to them, including through ``__init__``, is wrapped into that range.
    Coordinates above 32767 therefore alias onto smaller values.
    """

    read_group: int = UNSET
    tile: int = UNSET
    x: int = UNSET
    y: int = UNSET
    library_id: int = UNSET
    is_optical_duplicate: bool = False
    read_name: Optional[str] = None

    def __setattr__(self, name: str, value) -> None:
        if name in _SHORT_FIELDS:
            value = to_short(value)
        object.__setattr__(self, name, value)

    @property
    def has_location(self) -> bool:
        return self.tile >= 0
