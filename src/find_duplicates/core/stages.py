"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Pipeline stages of the duplicate detection engine.

STAGE CONTRACTS
---------------
Each stage implements `process(groups, progress_callback)`:
  • Accepts the partitions produced by the previous stage
  • Splits every partition independently and concatenates the results
  • Drops partitions of fewer than two files (except IdentityStage, which
    collapses a single flat list and never drops anything unique)
  • Reports progress via callback (stage name, processed count, total count)

PIPELINE
--------
IdentityStage → SizeStage → SizeStage (recheck) → HashStage

The second size pass cannot change anything; it is kept so the grouping
is re-validated right before the expensive hash stage.
"""

from typing import List, Optional
import logging

from find_duplicates.core.models import FileInfo, Stage as StageName
from find_duplicates.core.grouper import FileGrouperImpl
from find_duplicates.core.interfaces import Stage, ProgressCallback

logger = logging.getLogger(__name__)

Partitions = List[List[FileInfo]]


class IdentityStage(Stage):
    """Collapses hardlinks and repeated paths into a single partition."""
    name = StageName.IDENTITY.value

    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(
            self,
            groups: Partitions,
            progress_callback: Optional[ProgressCallback] = None
    ) -> Partitions:
        files = [file for group in groups for file in group]
        unique = self.grouper.unique_by_identity(files)
        if len(unique) != len(files):
            logger.debug(f"Collapsed {len(files) - len(unique)} entries sharing identity or path")

        if progress_callback:
            progress_callback(self.name, len(files), len(files))
        return [unique]


class SizeStage(Stage):
    """Splits partitions by exact byte length."""

    def __init__(self, grouper: FileGrouperImpl, name: str = StageName.SIZE.value):
        self.grouper = grouper
        self.name = name

    def process(
            self,
            groups: Partitions,
            progress_callback: Optional[ProgressCallback] = None
    ) -> Partitions:
        result = []
        for group in groups:
            result.extend(self.grouper.group_by_size(group).values())

        if progress_callback:
            total_files = sum(len(g) for g in groups)
            progress_callback(self.name, total_files, total_files)  # Instant progress
        return result


class HashStage(Stage):
    """Splits same-size partitions by full-content digest."""
    name = StageName.HASH.value

    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(
            self,
            groups: Partitions,
            progress_callback: Optional[ProgressCallback] = None
    ) -> Partitions:
        result = []
        total_files = sum(len(g) for g in groups)
        processed_files = 0

        for group in groups:
            result.extend(self.grouper.group_by_hash(group).values())

            processed_files += len(group)
            if progress_callback:
                progress_callback(self.name, processed_files, total_files)

        return result
