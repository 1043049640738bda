"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for file scanning and duplicate detection.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Tuple, Union, Callable
from enum import Enum
import logging
import os
import stat as stat_module

logger = logging.getLogger(__name__)


# =============================
# Enums
# =============================

class ExclusionKind(Enum):
    """How an exclusion rule was entered: a concrete directory or a glob pattern."""
    DIRECTORY = "directory"
    PATTERN = "pattern"


class ErrorPolicy(Enum):
    """
    What the engine does when a directory or file cannot be read.
    ABORT keeps the all-or-nothing behaviour: the first I/O error ends the run.
    SKIP logs the failure, records it in the stats and carries on.
    """
    ABORT = "abort"
    SKIP = "skip"

    def __repr__(self) -> str:
        return self.value


class Stage(str, Enum):
    WALK = "walk"
    IDENTITY = "identity"
    SIZE = "size"
    SIZE_RECHECK = "size-recheck"
    HASH = "hash"


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileInfo:
    """
    One regular file on disk at the moment of scanning.
    Built from a single metadata call and never modified afterwards.
    """
    path: str
    modified: float  # POSIX timestamp
    size: int  # in bytes
    disk_usage: int
    device: int
    inode: int

    @classmethod
    def from_stat(cls, path: str, stat_result: os.stat_result) -> "FileInfo":
        blocks = getattr(stat_result, "st_blocks", 0)
        block_size = getattr(stat_result, "st_blksize", 0)
        return cls(
            path=path,
            modified=stat_result.st_mtime,
            size=stat_result.st_size,
            disk_usage=blocks * block_size,
            device=stat_result.st_dev,
            inode=stat_result.st_ino,
        )

    @property
    def identity(self) -> Tuple[int, int]:
        """(device, inode) pair naming the physical file."""
        return self.device, self.inode

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def directory(self) -> str:
        return os.path.dirname(self.path)

    def __repr__(self):
        return f"<FileInfo path={self.path}, size={self.size}>"


@dataclass
class DuplicateGroup:
    """
    Two or more files with the same size, the same content hash
    and distinct (device, inode) identities.
    """
    size: int
    files: List[FileInfo]

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.files)

    @property
    def waste(self) -> int:
        """Total bytes taken by every copy in the group (size * count)."""
        return self.size * self.duplicate_count

    @property
    def redundant_count(self) -> int:
        """Copies that could go while keeping one."""
        return max(0, self.duplicate_count - 1)

    @property
    def redundant_size(self) -> int:
        return self.size * self.redundant_count

    def add_file(self, file: FileInfo) -> None:
        if file.size != self.size:
            raise ValueError("Cannot add file with different size to a group.")
        self.files.append(file)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def __repr__(self):
        return f"<DuplicateGroup size={self.size}, count={len(self.files)}>"


@dataclass(frozen=True)
class Exclusion:
    """
    A rule pruning the walk: either a directory path or a glob pattern.
    Both forms end up as one glob matched against full candidate paths.
    """
    kind: ExclusionKind
    value: str

    @classmethod
    def directory(cls, path: str) -> "Exclusion":
        return cls(ExclusionKind.DIRECTORY, path)

    @classmethod
    def pattern(cls, pattern: str) -> "Exclusion":
        return cls(ExclusionKind.PATTERN, pattern)

    def __str__(self) -> str:
        return self.value


DEFAULT_EXCLUSIONS: Tuple[Exclusion, ...] = (
    Exclusion.directory("/lost+found"),
    Exclusion.directory("/dev"),
    Exclusion.directory("/proc"),
    Exclusion.directory("/sys"),
    Exclusion.directory("/tmp"),
    Exclusion.pattern("*/.svn"),
    Exclusion.pattern("*/CVS"),
    Exclusion.pattern("*/.git"),
    Exclusion.pattern("*/.hg"),
    Exclusion.pattern("*/.bzr"),
    Exclusion.pattern("*/node_modules"),
    Exclusion.pattern("*/target"),
)


def is_regular_file(stat_result: os.stat_result) -> bool:
    return stat_module.S_ISREG(stat_result.st_mode)


class DetectionStats:
    """
    Statistics collected during one detection run.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}
        self.skipped: List[Tuple[str, str]] = []
        self._listeners: List[Callable[[str, Dict], None]] = []

    def add_listener(self, listener: Callable[[str, Dict], None]):
        """Adds a listener to receive updates when stats are updated."""
        self._listeners.append(listener)

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

        for listener in self._listeners:
            try:
                listener(stage_name, self.stage_stats[stage_name])
            except Exception:
                logger.exception("Error in stats event handler")

    def record_skipped(self, path: str, error: OSError) -> None:
        logger.warning(f"Skipping unreadable path {path}: {error}")
        self.skipped.append((path, str(error)))

    def print_summary(self) -> str:
        labels = {
            Stage.WALK.value: "Files found",
            Stage.IDENTITY.value: "Distinct files",
            Stage.SIZE.value: "Size groups",
            Stage.SIZE_RECHECK.value: "Size groups (recheck)",
            Stage.HASH.value: "Content hash groups",
        }

        lines = [
            "Detection statistics:",
            f"Total execution time: {self.total_time:.3f}s",
            "Stage: GROUPS / FILES / TIME",
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage, stage.title())
            lines.append(f"{label}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        if self.skipped:
            lines.append(f"Skipped (unreadable): {len(self.skipped)}")

        return "\n".join(lines)


"""
DTO for detection parameters with built-in validation.
Interface-agnostic: used by the CLI, the Qt worker and library callers.
"""
from typing import Optional
from find_duplicates.utils.convert_utils import ConvertUtils


@dataclass
class FindParams:
    """Parameters for one duplicate search with validation."""
    roots: List[str]
    exclusions: List[Exclusion] = field(default_factory=list)
    min_size_bytes: int = 1
    recurse: bool = True
    error_policy: ErrorPolicy = ErrorPolicy.ABORT
    use_default_exclusions: bool = True

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.roots:
            raise ValueError("No search paths specified")

        if any(not root for root in self.roots):
            raise ValueError("Search path cannot be empty")

        if self.min_size_bytes < 0:
            raise ValueError("Minimum size cannot be negative")

        self.roots = [os.path.abspath(root) for root in self.roots]

    def effective_exclusions(self) -> List[Exclusion]:
        """User exclusions with the built-in defaults in front."""
        if not self.use_default_exclusions:
            return list(self.exclusions)
        return list(DEFAULT_EXCLUSIONS) + list(self.exclusions)

    @staticmethod
    def from_human_readable(
            roots: List[str],
            min_size_str: str = "1",
            excluded_dirs: Optional[List[str]] = None,
            excluded_patterns: Optional[List[str]] = None,
            recurse: bool = True,
            error_policy: ErrorPolicy = ErrorPolicy.ABORT,
            use_default_exclusions: bool = True,
    ) -> 'FindParams':
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing or GUI input conversion.
        """
        exclusions = [Exclusion.directory(d) for d in (excluded_dirs or [])]
        exclusions += [Exclusion.pattern(p) for p in (excluded_patterns or [])]

        return FindParams(
            roots=list(roots),
            exclusions=exclusions,
            min_size_bytes=ConvertUtils.human_to_bytes(min_size_str),
            recurse=recurse,
            error_policy=error_policy,
            use_default_exclusions=use_default_exclusions,
        )
