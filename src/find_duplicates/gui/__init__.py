"""
GUI integration built on PySide6 (optional dependency, install with [gui] extra).
"""

from .worker import DuplicateSearchWorker, WorkerSignals

__all__ = ["DuplicateSearchWorker", "WorkerSignals"]
