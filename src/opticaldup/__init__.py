"""opticaldup: optical duplicate detection for sequencing duplicate sets."""

from opticaldup.__version__ import __version__
from opticaldup.core.physical_location import PhysicalLocation
from opticaldup.core.optical_duplicates import (
    OpticalDuplicateFinder,
    find_optical_duplicates,
    find_optical_duplicates_preserving_order,
)

__all__ = [
    "__version__",
    "PhysicalLocation",
    "OpticalDuplicateFinder",
    "find_optical_duplicates",
    "find_optical_duplicates_preserving_order",
]
