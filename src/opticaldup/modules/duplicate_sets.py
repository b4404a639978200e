"""
Duplicate Sets - optical duplicate marking over tables of duplicate sets

This module applies the optical duplicate finder to every duplicate set of a
tab-separated table. The table is produced upstream (the duplicate signature
computation is not done here) and holds one row per read:

    set_id  read_name                              [read_group]  [library]
    d1      M01234:123:000000000-ZZZZZ:1:1105:17981:23325  rg1   libA

Key features:
- Read-group and library labels mapped to small integer ids (first-seen order)
- One PhysicalLocation per row, classified within its set
- Output keeps the input row order and adds an ``optical_duplicate`` column
- Optional multi-process marking with one finder per worker process
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from multiprocessing import Pool
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from opticaldup.constants import (
    DEFAULT_OPTICAL_DUPLICATE_DISTANCE,
    DEFAULT_READ_NAME_REGEX,
    LIBRARY_COLUMN,
    OPTICAL_DUPLICATE_COLUMN,
    READ_GROUP_COLUMN,
    READ_NAME_COLUMN,
    SET_ID_COLUMN,
)
from opticaldup.core.optical_duplicates import (
    OpticalDuplicateFinder,
    find_optical_duplicates_preserving_order,
)
from opticaldup.core.physical_location import PhysicalLocation
from opticaldup.exceptions import FileFormatError, ValidationError
from opticaldup.utils.logging import LogTemplates, get_logger
from opticaldup.utils.progress import iter_progress

# (row positions, read names, read group ids, library ids)
SetTask = Tuple[List[int], List[str], List[int], List[int]]
# (row positions, optical duplicate flags, reads with a location)
SetResult = Tuple[List[int], List[bool], int]


@dataclass
class MarkingStats:
    """Statistics for a marking run."""

    total_sets: int = 0
    total_reads: int = 0
    located_reads: int = 0
    optical_duplicates: int = 0

    @property
    def located_percentage(self) -> float:
        if self.total_reads == 0:
            return 0.0
        return (self.located_reads / self.total_reads) * 100

    @property
    def optical_percentage(self) -> float:
        if self.total_reads == 0:
            return 0.0
        return (self.optical_duplicates / self.total_reads) * 100


def mark_duplicate_set(finder: OpticalDuplicateFinder, task: SetTask) -> SetResult:
    """Classify the reads of one duplicate set.

    Flags are returned in the task's row order.
    """
    positions, read_names, read_groups, libraries = task

    locations = []
    located = 0
    for read_name, read_group, library_id in zip(read_names, read_groups, libraries):
        loc = PhysicalLocation(read_group=read_group, library_id=library_id, read_name=read_name)
        if finder.add_location_information(read_name, loc):
            located += 1
        locations.append(loc)

    if len(locations) < 2:
        return positions, [False] * len(locations), located

    flags = find_optical_duplicates_preserving_order(
        locations, finder.optical_duplicate_pixel_distance
    )
    return positions, flags, located


# Per-process finder for multiprocessing
_worker_finder: Optional[OpticalDuplicateFinder] = None


def _init_worker(read_name_regex: Optional[str], pixel_distance: int) -> None:
    """Initialize the finder in a worker process."""
    global _worker_finder
    _worker_finder = OpticalDuplicateFinder(read_name_regex, pixel_distance)


def _mark_in_worker(task: SetTask) -> SetResult:
    if _worker_finder is None:
        raise RuntimeError("Marking worker not initialized (finder is None)")
    return mark_duplicate_set(_worker_finder, task)


class OpticalDuplicateMarker:
    """Mark optical duplicates in a table of duplicate sets."""

    REQUIRED_COLUMNS = (SET_ID_COLUMN, READ_NAME_COLUMN)

    def __init__(
        self,
        read_name_regex: Optional[str] = DEFAULT_READ_NAME_REGEX,
        pixel_distance: int = DEFAULT_OPTICAL_DUPLICATE_DISTANCE,
        threads: int = 1,
        enable_progress: bool = False,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.logger = logger or get_logger(self.__class__.__name__)
        # Validates the regex and distance up front, also for threaded runs
        self.finder = OpticalDuplicateFinder(read_name_regex, pixel_distance)
        self.threads = max(1, int(threads))
        self.enable_progress = enable_progress
        self.stats = MarkingStats()

    def load_duplicate_sets(self, input_file: Path) -> pd.DataFrame:
        """
        Load a duplicate-set table.

        Args:
            input_file: Tab-separated table with set_id and read_name columns

        Returns:
            DataFrame with string columns
        """
        input_file = Path(input_file)
        if not input_file.exists():
            raise FileFormatError(f"Duplicate set table not found: {input_file}", path=input_file)

        try:
            df = pd.read_csv(input_file, sep="\t", dtype=str)
        except pd.errors.EmptyDataError:
            raise FileFormatError(f"Duplicate set table is empty: {input_file}", path=input_file)
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise FileFormatError(f"Cannot parse duplicate set table {input_file}: {e}", path=input_file)

        missing = [col for col in self.REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise FileFormatError(
                f"Duplicate set table must contain columns {list(self.REQUIRED_COLUMNS)}. "
                f"Missing: {missing}. Found: {list(df.columns)}",
                path=input_file,
            )

        self.logger.info(LogTemplates.FILE_LOADED.format(count=len(df), path=input_file))
        return df

    def _build_tasks(self, df: pd.DataFrame) -> List[SetTask]:
        if df[SET_ID_COLUMN].isna().any():
            raise ValidationError("Every row needs a set_id")
        if df[READ_NAME_COLUMN].isna().any():
            raise ValidationError("Every row needs a read_name")

        read_group_ids = self._label_ids(df, READ_GROUP_COLUMN)
        library_ids = self._label_ids(df, LIBRARY_COLUMN)
        read_names = df[READ_NAME_COLUMN].tolist()

        tasks = []
        for positions in df.groupby(SET_ID_COLUMN, sort=False).indices.values():
            positions = [int(p) for p in positions]
            tasks.append(
                (
                    positions,
                    [read_names[p] for p in positions],
                    [read_group_ids[p] for p in positions],
                    [library_ids[p] for p in positions],
                )
            )
        return tasks

    @staticmethod
    def _label_ids(df: pd.DataFrame, column: str) -> List[int]:
        """Map a label column to integer ids; missing labels become -1."""
        if column not in df.columns:
            return [-1] * len(df)
        codes, _ = pd.factorize(df[column])
        return [int(code) for code in codes]

    def _run_tasks(self, tasks: Sequence[SetTask]):
        if self.threads > 1 and len(tasks) > 1:
            self.logger.debug(f"Marking {len(tasks)} sets with {self.threads} worker processes")
            with Pool(
                processes=self.threads,
                initializer=_init_worker,
                initargs=(
                    self.finder.read_name_regex,
                    self.finder.optical_duplicate_pixel_distance,
                ),
            ) as pool:
                chunksize = max(1, len(tasks) // (self.threads * 4))
                yield from iter_progress(
                    pool.imap(_mark_in_worker, tasks, chunksize=chunksize),
                    total=len(tasks),
                    desc="Marking",
                    enabled=self.enable_progress,
                )
        else:
            for task in iter_progress(tasks, total=len(tasks), desc="Marking", enabled=self.enable_progress):
                yield mark_duplicate_set(self.finder, task)

    def mark(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Classify every read of every duplicate set.

        Args:
            df: Table as returned by :meth:`load_duplicate_sets`

        Returns:
            Copy of ``df`` (same row order) with an ``optical_duplicate`` column
        """
        df = df.reset_index(drop=True)
        tasks = self._build_tasks(df)

        flags = [False] * len(df)
        for positions, set_flags, located in self._run_tasks(tasks):
            for position, flag in zip(positions, set_flags):
                flags[position] = flag
            self.stats.located_reads += located

        self.stats.total_sets += len(tasks)
        self.stats.total_reads += len(df)
        self.stats.optical_duplicates += sum(flags)

        result = df.copy()
        result[OPTICAL_DUPLICATE_COLUMN] = flags
        return result

    def write_results(self, df: pd.DataFrame, output_file: Path) -> None:
        """Write the marked table as TSV."""
        output_file = Path(output_file)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output_file, sep="\t", index=False)
        self.logger.info(
            LogTemplates.FILE_CREATED.format(path=output_file, size=output_file.stat().st_size)
        )

    def run(self, input_file: Path, output_file: Path) -> MarkingStats:
        """
        Load, mark and write a duplicate-set table.

        Returns:
            Marking statistics
        """
        df = self.load_duplicate_sets(input_file)
        marked = self.mark(df)
        self.write_results(marked, output_file)

        self.logger.info(
            LogTemplates.PROCESSING_STATS.format(
                input_count=self.stats.total_sets, output_count=self.stats.total_reads
            )
        )
        self.logger.info(
            LogTemplates.LOCATION_STATS.format(
                located=self.stats.located_reads,
                total=self.stats.total_reads,
                percent=self.stats.located_percentage,
            )
        )
        self.logger.info(
            LogTemplates.OPTICAL_STATS.format(
                optical=self.stats.optical_duplicates,
                total=self.stats.total_reads,
                percent=self.stats.optical_percentage,
            )
        )
        return self.stats
