"""opticaldup processing modules."""

from opticaldup.modules.duplicate_sets import MarkingStats, OpticalDuplicateMarker

__all__ = ["MarkingStats", "OpticalDuplicateMarker"]
