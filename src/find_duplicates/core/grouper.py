"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Identity dedup and key-based partitioning of FileInfo lists.
"""

import logging
import os
from typing import List, Dict, Any, Callable, Hashable, Optional
from collections import defaultdict

from find_duplicates.core.interfaces import FileGrouper, Hasher
from find_duplicates.core.models import FileInfo, ErrorPolicy, DetectionStats
from find_duplicates.core.hasher import HasherImpl

logger = logging.getLogger(__name__)


class FileGrouperImpl(FileGrouper):
    """
    Partitions files by size or by content hash.
    Uses an injected Hasher instance for flexibility and testability.
    """

    def __init__(
        self,
        hasher: Hasher = None,
        error_policy: ErrorPolicy = ErrorPolicy.ABORT,
        stats: Optional[DetectionStats] = None
    ):
        self.hasher = hasher or HasherImpl()
        self.error_policy = error_policy
        self.stats = stats

    def unique_by_identity(self, files: List[FileInfo]) -> List[FileInfo]:
        """
        Keep one entry per (device, inode), then one entry per path.
        A hardlinked file reached through two names is thus compared only once.
        """
        if len(files) <= 1:
            return list(files)
        files = self.unique_by(files, lambda f: f.identity)
        return self.unique_by(files, lambda f: os.path.normpath(os.path.abspath(f.path)))

    def group_by_size(self, files: List[FileInfo]) -> Dict[int, List[FileInfo]]:
        """Groups files by their size."""
        return self._group_by(files, lambda f: f.size)

    def group_by_hash(self, files: List[FileInfo]) -> Dict[bytes, List[FileInfo]]:
        """Groups files by full content hash."""
        return self._group_by(files, self._hash_or_skip)

    @staticmethod
    def unique_by(files: List[FileInfo], key_func: Callable[[FileInfo], Hashable]) -> List[FileInfo]:
        """
        Drop entries sharing a key. The last entry seen for a key wins;
        the key keeps the position of its first appearance.
        """
        unique: Dict[Hashable, FileInfo] = {}
        for file in files:
            unique[key_func(file)] = file
        return list(unique.values())

    def _hash_or_skip(self, file: FileInfo) -> Optional[bytes]:
        try:
            return self.hasher.compute_full_hash(file)
        except OSError as e:
            if self.error_policy is ErrorPolicy.SKIP:
                if self.stats is not None:
                    self.stats.record_skipped(file.path, e)
                else:
                    logger.warning(f"Skipping unreadable file {file.path}: {e}")
                return None
            logger.error(f"Cannot hash {file.path}: {e}")
            raise

    @staticmethod
    def _group_by(files: List[FileInfo], key_func: Callable[[FileInfo], Any]) -> Dict[Any, List[FileInfo]]:
        """
        Helper method to group files by any computed key.
        Files whose key is None are left out.
        Args:
            files: List of files to group
            key_func: Function that computes a hashable key from a FileInfo
        Returns:
            Dict[key, List[FileInfo]] holding only groups of 2+ files
        """
        groups = defaultdict(list)
        for file in files:
            key = key_func(file)
            if key is not None:
                groups[key].append(file)

        return {key: group for key, group in groups.items() if len(group) >= 2}
