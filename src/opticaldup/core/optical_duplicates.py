"""
Optical Duplicates - tile/x/y extraction and sort-and-sweep clustering

Given a set of reads already known to be duplicates of one another, decide
which of them are optical duplicates: reads whose clusters sit within a
pixel distance of an earlier read on the same tile of the same read group.

Key features:
- Fast colon-split path for conventional Illumina read names
- Custom regex path with exactly three capture groups (tile, x, y)
- Warn-once reporting of read names that do not fit the layout
- O(n log n + n*k) sweep over (read_group, tile, x, y)-sorted records
"""

from __future__ import annotations

import logging
import re
import threading
from enum import Enum
from typing import List, MutableSequence, Optional, Sequence

from opticaldup.constants import (
    ACCEPTED_FIELD_COUNTS,
    DEFAULT_OPTICAL_DUPLICATE_DISTANCE,
    DEFAULT_READ_NAME_REGEX,
    READ_NAME_DELIMITER,
    READ_NAME_REGEX_GROUPS,
    UNSET,
)
from opticaldup.core.physical_location import PhysicalLocationLike
from opticaldup.core.read_name_parsing import get_last_three_fields, parse_int_exact, to_short
from opticaldup.exceptions import ConfigurationError
from opticaldup.utils.logging import LogTemplates, get_logger


class ReadNameLayout(Enum):
    """How tile/x/y are pulled out of a read name."""

    DEFAULT = "default"
    CUSTOM = "custom"
    NONE = "none"


def compile_read_name_regex(read_name_regex: str) -> re.Pattern:
    """Compile a custom read name regex, requiring exactly three groups.

    Raises:
        ConfigurationError: If the regex does not compile or has the wrong group count
    """
    try:
        pattern = re.compile(read_name_regex)
    except re.error as e:
        raise ConfigurationError(f"Invalid READ_NAME_REGEX '{read_name_regex}': {e}")
    if pattern.groups != READ_NAME_REGEX_GROUPS:
        raise ConfigurationError(
            f"READ_NAME_REGEX '{read_name_regex}' must have exactly "
            f"{READ_NAME_REGEX_GROUPS} capture groups (tile, x, y), found {pattern.groups}"
        )
    return pattern


def _location_key(loc: PhysicalLocationLike) -> tuple[int, int, int, int]:
    return (loc.read_group, loc.tile, loc.x, loc.y)


def _sweep(locations: Sequence[PhysicalLocationLike], pixel_distance: int) -> List[bool]:
    """Flag optical duplicates in an already sorted sequence."""
    length = len(locations)
    flags = [False] * length

    for i in range(length):
        anchor = locations[i]
        if anchor.tile < 0 or flags[i]:
            continue

        x_limit = anchor.x + pixel_distance
        for j in range(i + 1, length):
            candidate = locations[j]
            if candidate.read_group != anchor.read_group or candidate.tile != anchor.tile:
                break
            # x is sorted within a (read_group, tile) run
            if candidate.x > x_limit:
                break
            if flags[j]:
                continue
            if abs(anchor.y - candidate.y) <= pixel_distance:
                flags[j] = True

    return flags


def find_optical_duplicates(
    locations: MutableSequence[PhysicalLocationLike],
    pixel_distance: int = DEFAULT_OPTICAL_DUPLICATE_DISTANCE,
) -> List[bool]:
    """
    Find which reads within a duplicate set are optical duplicates.

    Note: this reorders ``locations`` in place by (read_group, tile, x, y).
    The returned flags line up with the sorted order. Use
    :func:`find_optical_duplicates_preserving_order` to leave the input alone.

    The first record of a cluster in sort order is the anchor and is never
    flagged; a record is flagged when it is within ``pixel_distance`` of an
    anchor in both x and y. Comparisons are anchor-relative only, so a read
    close to a flagged read but not to its anchor stays unflagged.

    Args:
        locations: Records that are duplicates of one another
        pixel_distance: Inclusive maximum x and y offset

    Returns:
        One flag per record, True for optical duplicates
    """
    if hasattr(locations, "sort"):
        locations.sort(key=_location_key)
    else:
        locations[:] = sorted(locations, key=_location_key)

    flags = _sweep(locations, pixel_distance)
    for loc, flag in zip(locations, flags):
        loc.is_optical_duplicate = flag
    return flags


def find_optical_duplicates_preserving_order(
    locations: Sequence[PhysicalLocationLike],
    pixel_distance: int = DEFAULT_OPTICAL_DUPLICATE_DISTANCE,
) -> List[bool]:
    """
    Same classification as :func:`find_optical_duplicates` without reordering.

    Returns:
        One flag per record, aligned to the caller's order
    """
    order = sorted(range(len(locations)), key=lambda idx: _location_key(locations[idx]))
    sorted_flags = _sweep([locations[idx] for idx in order], pixel_distance)

    flags = [False] * len(locations)
    for position, idx in enumerate(order):
        flags[idx] = sorted_flags[position]
        locations[idx].is_optical_duplicate = sorted_flags[position]
    return flags


class OpticalDuplicateFinder:
    """Extract flow-cell locations from read names and find optical duplicates."""

    def __init__(
        self,
        read_name_regex: Optional[str] = DEFAULT_READ_NAME_REGEX,
        optical_duplicate_pixel_distance: int = DEFAULT_OPTICAL_DUPLICATE_DISTANCE,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        Args:
            read_name_regex: DEFAULT_READ_NAME_REGEX for the fast colon-split
                path, a regex with exactly three groups (tile, x, y), or None
                to disable location extraction
            optical_duplicate_pixel_distance: Inclusive pixel threshold
            logger: Receives at most one read-name mismatch warning

        Raises:
            ConfigurationError: If the regex is invalid or the distance negative
        """
        self.logger = logger or get_logger(self.__class__.__name__)
        self.read_name_regex = read_name_regex

        if optical_duplicate_pixel_distance is None or int(optical_duplicate_pixel_distance) < 0:
            raise ConfigurationError(
                f"Optical duplicate pixel distance must be >= 0, got {optical_duplicate_pixel_distance}"
            )
        self.optical_duplicate_pixel_distance = int(optical_duplicate_pixel_distance)

        self.read_name_pattern: Optional[re.Pattern] = None
        if read_name_regex is None:
            self.layout = ReadNameLayout.NONE
        elif read_name_regex == DEFAULT_READ_NAME_REGEX:
            self.layout = ReadNameLayout.DEFAULT
        else:
            self.layout = ReadNameLayout.CUSTOM
            self.read_name_pattern = compile_read_name_regex(read_name_regex)

        # Reused by every fast-path call; one finder per thread or process
        self._location_fields = [UNSET, UNSET, UNSET]

        self._warned_about_regex_not_matching = False
        self._warn_lock = threading.Lock()

    @property
    def warned_about_regex_not_matching(self) -> bool:
        return self._warned_about_regex_not_matching

    def _warn_once(self, read_name: str, hint: str) -> None:
        if self._warned_about_regex_not_matching:
            return
        with self._warn_lock:
            if self._warned_about_regex_not_matching:
                return
            self._warned_about_regex_not_matching = True
        self.logger.warning(
            LogTemplates.REGEX_MISMATCH.format(
                regex=self.read_name_regex, read_name=read_name, hint=hint
            )
        )

    def add_location_information(self, read_name: str, loc: PhysicalLocationLike) -> bool:
        """
        Extract tile/x/y from ``read_name`` into ``loc``.

        ``loc`` is left untouched when the name does not fit the layout.

        Args:
            read_name: Name of the read/cluster
            loc: Record that receives tile, x and y

        Returns:
            True if the read name held the location in parsable form
        """
        if self.layout is ReadNameLayout.DEFAULT:
            fields = self._location_fields
            num_fields = get_last_three_fields(read_name, READ_NAME_DELIMITER, fields)
            if num_fields not in ACCEPTED_FIELD_COUNTS:
                self._warn_once(
                    read_name,
                    "You may need to specify a READ_NAME_REGEX in order to correctly "
                    "identify optical duplicates.",
                )
                return False
            loc.tile = to_short(fields[0])
            loc.x = to_short(fields[1])
            loc.y = to_short(fields[2])
            return True

        if self.layout is ReadNameLayout.NONE:
            return False

        match = self.read_name_pattern.fullmatch(read_name)
        if match is not None:
            tile, x, y = (parse_int_exact(group) for group in match.groups())
            if tile is None or x is None or y is None:
                match = None
        if match is None:
            self._warn_once(read_name, "Your regex may not be correct.")
            return False

        loc.tile = to_short(tile)
        loc.x = to_short(x)
        loc.y = to_short(y)
        return True

    def find_optical_duplicates(self, locations: MutableSequence[PhysicalLocationLike]) -> List[bool]:
        """Flag optical duplicates using this finder's pixel distance.

        Reorders ``locations`` in place; see :func:`find_optical_duplicates`.
        """
        return find_optical_duplicates(locations, self.optical_duplicate_pixel_distance)
