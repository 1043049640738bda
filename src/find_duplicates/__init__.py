"""
find-duplicates: locate byte-identical files across directory trees.

Core features:
- Multi-stage detection: identity (device, inode) → size → full SHA-256 content hash
- Glob exclusion rules with built-in defaults for VCS, build and system directories
- Safe deletion to system trash (via send2trash), with per-file error reporting
- Optional Qt worker with PySide6 (install with [gui] extra)
- CLI interface for headless/server usage
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("find-duplicates")
except Exception:
    try:
        import tomllib  # Python 3.11+
    except ImportError:
        import tomli as tomllib  # Python < 3.11: pip install tomli

    with open("pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Public API: only what users should import directly
from find_duplicates.commands import FindDuplicatesCommand
from find_duplicates.core import (
    FindParams, FileInfo, DuplicateGroup, Exclusion, ErrorPolicy, DEFAULT_EXCLUSIONS,
    ExclusionPatternError, find_duplicate_groups, duplication_status)
from find_duplicates.utils.convert_utils import ConvertUtils
from find_duplicates.services import DuplicateService, FileService, KeepStrategy

__all__ = [
    "FindDuplicatesCommand",
    "FindParams",
    "FileInfo",
    "DuplicateGroup",
    "Exclusion",
    "ErrorPolicy",
    "DEFAULT_EXCLUSIONS",
    "ExclusionPatternError",
    "find_duplicate_groups",
    "duplication_status",
    "ConvertUtils",
    "DuplicateService",
    "FileService",
    "KeepStrategy",
    "__version__",
]
