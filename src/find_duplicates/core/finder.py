"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

finder.py
Implements the pipeline turning scanned files into ranked duplicate groups:
    identity → size → size (recheck) → full-content hash
"""
import time
import logging
from typing import List, Tuple, Optional

from find_duplicates.core.models import (
    FileInfo, DuplicateGroup, DetectionStats, Exclusion, ErrorPolicy, Stage as StageName)
from find_duplicates.core.grouper import FileGrouperImpl
from find_duplicates.core.hasher import HasherImpl
from find_duplicates.core.exclusion import compile_exclusions
from find_duplicates.core.scanner import FileScannerImpl
from find_duplicates.core.sorter import Sorter
from find_duplicates.core.interfaces import Stage, DuplicateFinder, Hasher, ProgressCallback
from find_duplicates.core.stages import IdentityStage, SizeStage, HashStage

logger = logging.getLogger(__name__)


# =============================
# Main Finder Class
# =============================
class DuplicateFinderImpl(DuplicateFinder):
    """
    Runs the detection stages in sequence, each fully materialising
    its output before the next starts, and collects statistics.
    """
    def __init__(
        self,
        hasher: Hasher = None,
        error_policy: ErrorPolicy = ErrorPolicy.ABORT,
        recheck_size: bool = True
    ):
        self.hasher = hasher or HasherImpl()
        self.error_policy = error_policy
        self.recheck_size = recheck_size

    def find_duplicates(
        self,
        files: List[FileInfo],
        progress_callback: Optional[ProgressCallback] = None,
        stats: Optional[DetectionStats] = None
    ) -> Tuple[List[DuplicateGroup], DetectionStats]:
        """
        Main detection pipeline.
        Args:
            files: Scanned file descriptors
            progress_callback: Reports progress per stage
            stats: Stats object to extend (a new one is created if omitted)
        Returns:
            Tuple[List[DuplicateGroup], DetectionStats]
        Raises:
            OSError: a file could not be read while hashing (ABORT policy)
        """
        stats = stats or DetectionStats()
        total_start_time = time.time()
        grouper = FileGrouperImpl(self.hasher, self.error_policy, stats)

        groups: List[List[FileInfo]] = [list(files)]
        for stage in self._build_pipeline(grouper):
            start_time = time.time()
            groups = stage.process(groups, progress_callback=progress_callback)
            duration = time.time() - start_time
            self._update_stats(stats, stage.name, duration, groups)
            logger.info(f"Stage '{stage.name}': {len(groups)} groups, "
                        f"{sum(len(g) for g in groups)} files, {duration:.3f}s")

        duplicates = [DuplicateGroup(size=group[0].size, files=group) for group in groups]
        duplicates = Sorter.sort_groups_by_waste(duplicates)

        stats.total_time += time.time() - total_start_time
        return duplicates, stats

    def _build_pipeline(self, grouper: FileGrouperImpl) -> List[Stage]:
        pipeline: List[Stage] = [IdentityStage(grouper), SizeStage(grouper)]
        if self.recheck_size:
            pipeline.append(SizeStage(grouper, name=StageName.SIZE_RECHECK.value))
        pipeline.append(HashStage(grouper))
        return pipeline

    @staticmethod
    def _update_stats(
        stats: DetectionStats,
        stage: str,
        duration: float,
        groups: List[List[FileInfo]]
    ):
        stats.update_stage(
            stage_name=stage,
            groups_found=len(groups),
            files_processed=sum(len(g) for g in groups),
            duration=duration
        )


def find_duplicate_groups(
    roots: List[str],
    exclusions: List[Exclusion],
    min_size: int,
    recurse: bool,
    error_policy: ErrorPolicy = ErrorPolicy.ABORT,
    progress_callback: Optional[ProgressCallback] = None,
    stats: Optional[DetectionStats] = None
) -> List[DuplicateGroup]:
    """
    Walk `roots` and return groups of byte-identical files, largest waste first.

    `exclusions` are used as given; callers wanting the built-in defaults
    prepend DEFAULT_EXCLUSIONS (FindParams.effective_exclusions does this).

    Raises:
        ExclusionPatternError: a rule is malformed (before any file system access)
        OSError: a directory or file could not be read (ABORT policy)
    """
    matchers = compile_exclusions(exclusions)
    stats = stats if stats is not None else DetectionStats()

    start_time = time.time()
    scanner = FileScannerImpl(
        roots=roots,
        matchers=matchers,
        min_size=min_size,
        recurse=recurse,
        error_policy=error_policy,
        stats=stats
    )
    files = scanner.scan(progress_callback=progress_callback)
    duration = time.time() - start_time
    stats.update_stage(StageName.WALK.value, 0, len(files), duration)
    stats.total_time += duration

    finder = DuplicateFinderImpl(error_policy=error_policy)
    groups, _ = finder.find_duplicates(files, progress_callback=progress_callback, stats=stats)
    return groups
