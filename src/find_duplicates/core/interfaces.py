"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the detection engine.
These protocols rely on structural typing via `typing.Protocol`, so tests and
callers can swap in their own implementations without inheriting from anything.

Key Components:
---------------
- HashAlgorithm: Factory for incremental hash objects (SHA-256 by default).
- Hasher: Computes the full-content digest of a file.
- FileScanner: Walks directory trees and returns file descriptors.
- FileGrouper: Removes identity duplicates and partitions files by a key.
- Stage: One step of the detection pipeline.
- DuplicateFinder: The engine coordinating all stages.
"""

from typing import Protocol, List, Dict, Optional, Callable, Any, Tuple
from find_duplicates.core.models import (
    FileInfo,
    DuplicateGroup,
    DetectionStats,
)


ProgressCallback = Callable[[str, int, Optional[int]], None]


# ===== Interfaces =====

class HashAlgorithm(Protocol):
    """
    Interface for incremental hash algorithms.

    `new()` returns a fresh object exposing hashlib's `update()` / `digest()`.
    """
    name: str

    def new(self) -> Any:
        ...


class Hasher(Protocol):
    """Interface for hashing the content of a file."""
    def compute_full_hash(self, file: FileInfo) -> bytes: ...


class FileScanner(Protocol):
    """
    Interface for walking file systems and collecting file metadata.
    """
    def scan(
        self,
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[FileInfo]:
        """
        Walk the configured roots.

        Args:
            progress_callback: Optional callback for reporting progress (stage, current, total).

        Returns:
            Every regular file that passed the exclusion and size filters.
        """
        ...


class FileGrouper(Protocol):
    """
    Interface for narrowing down candidate files.
    """
    def unique_by_identity(self, files: List[FileInfo]) -> List[FileInfo]:
        """Collapse entries naming the same physical file, then the same path."""
        ...

    def group_by_size(self, files: List[FileInfo]) -> Dict[int, List[FileInfo]]:
        """Group files by their size in bytes."""
        ...

    def group_by_hash(self, files: List[FileInfo]) -> Dict[bytes, List[FileInfo]]:
        """Group files by their full content hash."""
        ...


# =============================
# Stage Interfaces
# =============================

class Stage(Protocol):
    """
    One pipeline step: takes candidate partitions, returns refined partitions.
    """
    name: str

    def process(
        self,
        groups: List[List[FileInfo]],
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[List[FileInfo]]:
        ...


class DuplicateFinder(Protocol):
    """
    Interface for the main detection engine.
    """
    def find_duplicates(
        self,
        files: List[FileInfo],
        progress_callback: Optional[ProgressCallback] = None,
        stats: Optional[DetectionStats] = None
    ) -> Tuple[List[DuplicateGroup], DetectionStats]:
        """
        Run identity, size and hash stages over already scanned files.

        Returns:
            A tuple containing:
                - Duplicate groups ranked by waste
                - Statistics collected during processing
        """
        ...
