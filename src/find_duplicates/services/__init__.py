"""File operations and duplicate group review services."""

from .file_service import FileService, DeletionReport
from .duplicate_service import DuplicateService, KeepStrategy

__all__ = ["FileService", "DeletionReport", "DuplicateService", "KeepStrategy"]
