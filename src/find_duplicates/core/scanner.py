"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements the directory walk feeding the detection pipeline.
Features:
- Walks several roots, recursively or one level deep
- Prunes any entry whose full path matches an exclusion rule, before descending
- Admits regular files of at least `min_size` bytes
- Ignores symbolic links and special files (never followed, never admitted)
- Aborts on the first unreadable directory or entry unless told to skip
"""

import os
from typing import List, Optional, Iterable
import time
import logging

logger = logging.getLogger(__name__)

# Local imports
from find_duplicates.core.models import FileInfo, ErrorPolicy, DetectionStats, is_regular_file
from find_duplicates.core.interfaces import FileScanner, ProgressCallback
from find_duplicates.core.exclusion import ExclusionMatcher, is_excluded

PROGRESS_INTERVAL = 5000  # Report every 5,000 files


class FileScannerImpl(FileScanner):
    """
    Walks root directories and collects FileInfo records.

    Attributes:
        roots: Absolute root directories to walk
        matchers: Compiled exclusion rules
        min_size: Minimum file size in bytes (inclusive)
        recurse: Descend into subdirectories when True
        error_policy: Abort on the first I/O error, or skip and record it
    """

    def __init__(
        self,
        roots: List[str],
        matchers: Optional[List[ExclusionMatcher]] = None,
        min_size: int = 0,
        recurse: bool = True,
        error_policy: ErrorPolicy = ErrorPolicy.ABORT,
        stats: Optional[DetectionStats] = None
    ):
        self.roots = [os.path.abspath(root) for root in roots]
        self.matchers = matchers or []
        self.min_size = min_size
        self.recurse = recurse
        self.error_policy = error_policy
        self.stats = stats
        self._processed = 0
        self._progress_callback: Optional[ProgressCallback] = None

    def scan(self, progress_callback: Optional[ProgressCallback] = None) -> List[FileInfo]:
        """
        Walk every root in order and return the admitted files.
        Raises OSError on the first unreadable directory or entry (ABORT policy).
        """
        logger.debug(f"Starting scan of {len(self.roots)} root(s)")
        logger.debug(f"Filters: min_size={self.min_size}, recurse={self.recurse}, "
                     f"exclusions={len(self.matchers)}")

        found_files: List[FileInfo] = []
        self._processed = 0
        self._progress_callback = progress_callback
        start_time = time.time()

        for root in self.roots:
            if not os.path.isdir(root):
                logger.debug(f"Not a directory, nothing to scan: {root}")
                continue
            self._scan_dir(root, found_files)

        if progress_callback:
            progress_callback("Scanning", self._processed, None)

        elapsed_time = time.time() - start_time
        logger.debug(f"Total scan time: {elapsed_time:.2f} seconds")
        logger.debug(f"Scan completed. Found {len(found_files)} matching files.")
        return found_files

    def _scan_dir(self, directory: str, found_files: List[FileInfo]) -> None:
        try:
            entries = self._list_dir(directory)
        except OSError as e:
            self._handle_error(directory, e)
            return

        for entry in entries:
            path = entry.path

            if is_excluded(path, self.matchers):
                logger.debug(f"Skipping excluded path: {path}")
                continue

            try:
                stat_result = entry.stat(follow_symlinks=False)
            except OSError as e:
                self._handle_error(path, e)
                continue

            if entry.is_dir(follow_symlinks=False):
                if self.recurse:
                    self._scan_dir(path, found_files)
            elif is_regular_file(stat_result):
                self._process_file(path, stat_result, found_files)
            else:
                logger.debug(f"Skipping non-regular entry: {path}")

    @staticmethod
    def _list_dir(directory: str) -> Iterable[os.DirEntry]:
        # Sorted so the same tree always yields the same order
        with os.scandir(directory) as it:
            return sorted(it, key=lambda e: e.name)

    def _process_file(self, path: str, stat_result: os.stat_result, found_files: List[FileInfo]) -> None:
        self._processed += 1
        if self._progress_callback and self._processed % PROGRESS_INTERVAL == 0:
            self._progress_callback("Scanning", self._processed, None)

        if stat_result.st_size < self.min_size:
            logger.debug(f"Skipping {path} ({stat_result.st_size} bytes below minimum)")
            return

        found_files.append(FileInfo.from_stat(path, stat_result))

    def _handle_error(self, path: str, error: OSError) -> None:
        if self.error_policy is ErrorPolicy.SKIP:
            if self.stats is not None:
                self.stats.record_skipped(path, error)
            else:
                logger.warning(f"Skipping unreadable path {path}: {error}")
            return
        logger.error(f"Cannot read {path}: {error}")
        raise error


def walk(
    roots: List[str],
    matchers: Optional[List[ExclusionMatcher]] = None,
    min_size: int = 0,
    recurse: bool = True
) -> List[FileInfo]:
    """Walk `roots` with the default abort-on-error policy."""
    return FileScannerImpl(roots, matchers, min_size, recurse).scan()
