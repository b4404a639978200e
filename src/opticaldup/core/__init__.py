"""Core location extraction and clustering (opticaldup)."""

from opticaldup.core.physical_location import PhysicalLocation, PhysicalLocationLike
from opticaldup.core.read_name_parsing import (
    get_last_three_fields,
    parse_int_exact,
    rapid_parse_int,
    to_short,
)
from opticaldup.core.optical_duplicates import (
    OpticalDuplicateFinder,
    ReadNameLayout,
    compile_read_name_regex,
    find_optical_duplicates,
    find_optical_duplicates_preserving_order,
)

__all__ = [
    "PhysicalLocation",
    "PhysicalLocationLike",
    "get_last_three_fields",
    "parse_int_exact",
    "rapid_parse_int",
    "to_short",
    "OpticalDuplicateFinder",
    "ReadNameLayout",
    "compile_read_name_regex",
    "find_optical_duplicates",
    "find_optical_duplicates_preserving_order",
]
