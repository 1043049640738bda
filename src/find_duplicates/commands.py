"""
Unified command orchestrator for duplicate searches.
This is the SINGLE source of truth for running a search, used by the CLI, the Qt worker
and library callers. No Qt/PySide6 dependencies, pure Python.
"""
import logging
from concurrent.futures import Executor, Future
from typing import List, Optional, Tuple

from find_duplicates.core.models import DuplicateGroup, DetectionStats, FindParams
from find_duplicates.core.finder import find_duplicate_groups
from find_duplicates.core.interfaces import ProgressCallback

logger = logging.getLogger(__name__)


class FindDuplicatesCommand:
    """
    Runs one complete search:
    1. Compile the effective exclusion rules (defaults + user rules)
    2. Walk the roots
    3. Narrow down to duplicate groups and rank them

    Usage:
        # Synchronously (CLI):
        groups, stats = FindDuplicatesCommand().execute(params)

        # On a background executor (GUI):
        future = FindDuplicatesCommand().submit(params, executor)
        future.add_done_callback(deliver_to_ui)
    """

    def execute(
            self,
            params: FindParams,
            progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[DuplicateGroup], DetectionStats]:
        """
        Execute the search with given parameters.

        Returns:
            Tuple of (duplicate_groups, statistics)

        Raises:
            ExclusionPatternError: a malformed exclusion rule (nothing was scanned)
            OSError: an unreadable directory or file aborted the search
        """
        stats = DetectionStats()
        logger.debug(f"Searching {params.roots} (min_size={params.min_size_bytes}, "
                     f"recurse={params.recurse}, policy={params.error_policy!r})")

        groups = find_duplicate_groups(
            params.roots,
            params.effective_exclusions(),
            params.min_size_bytes,
            params.recurse,
            error_policy=params.error_policy,
            progress_callback=progress_callback,
            stats=stats
        )
        return groups, stats

    def submit(
            self,
            params: FindParams,
            executor: Executor,
            progress_callback: Optional[ProgressCallback] = None
    ) -> "Future[Tuple[List[DuplicateGroup], DetectionStats]]":
        """
        Run `execute` on `executor`. The returned future resolves exactly once,
        with the full result or with the error that ended the search.
        """
        return executor.submit(self.execute, params, progress_callback)
