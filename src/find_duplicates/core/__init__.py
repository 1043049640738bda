"""
Core detection engine: scanner, hasher, grouper and pipeline orchestrator.

This package contains the foundation of find_duplicates:
- FileScannerImpl: directory walk with exclusion rules and a minimum size
- HasherImpl + Sha256AlgorithmImpl: streamed full-content SHA-256 hashing
- FileGrouperImpl: identity dedup, size and hash partitioning
- DuplicateFinderImpl: identity → size → size → hash pipeline
- find_duplicate_groups: one-call entry point from roots to ranked groups
- Models: FileInfo, DuplicateGroup, Exclusion and configuration objects

All components are pure Python with no GUI dependencies, suitable for CLI and server usage.
"""

from .models import (
    FileInfo, DuplicateGroup, DetectionStats, Exclusion, ExclusionKind,
    ErrorPolicy, FindParams, DEFAULT_EXCLUSIONS)
from .exclusion import ExclusionPatternError, compile_exclusions
from .scanner import FileScannerImpl, walk
from .grouper import FileGrouperImpl
from .hasher import HasherImpl, Sha256AlgorithmImpl
from .finder import DuplicateFinderImpl, find_duplicate_groups
from .sorter import Sorter
from .summary import DuplicationSummary, duplication_status

__all__ = [
    "FileScannerImpl",
    "walk",
    "FileGrouperImpl",
    "HasherImpl",
    "Sha256AlgorithmImpl",
    "DuplicateFinderImpl",
    "find_duplicate_groups",
    "FileInfo",
    "DuplicateGroup",
    "DetectionStats",
    "Exclusion",
    "ExclusionKind",
    "ExclusionPatternError",
    "ErrorPolicy",
    "FindParams",
    "DEFAULT_EXCLUSIONS",
    "compile_exclusions",
    "Sorter",
    "DuplicationSummary",
    "duplication_status",
]
