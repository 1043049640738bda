"""
Qt worker runnable following the QRunnable + QThreadPool pattern.
Runs one duplicate search off the UI thread and reports back exactly once.
"""
from PySide6.QtCore import QRunnable, QObject, Signal
from find_duplicates.core.models import FindParams
from find_duplicates.commands import FindDuplicatesCommand


class WorkerSignals(QObject):
    """Separate QObject to hold signals (QRunnable cannot emit signals directly)."""
    progress = Signal(str, int, object)  # stage, current, total
    finished = Signal(list, object)      # duplicate_groups, stats
    error = Signal(str)


class DuplicateSearchWorker(QRunnable):
    """
    Worker runnable that performs one search in the thread pool.
    Emits `finished` with the full result or `error` with a message, never both.
    A search cannot be interrupted; it runs to completion or to its first error.
    """
    def __init__(self, params: FindParams):
        super().__init__()
        self.params = params
        self.command = FindDuplicatesCommand()
        self.signals = WorkerSignals()
        self.setAutoDelete(True)  # Critical: auto-delete after run() completes

    def emit_progress(self, stage: str, current: int, total=None):
        try:
            self.signals.progress.emit(stage, current, total)
        except RuntimeError:
            # Receiver was destroyed while the search was running
            pass

    def run(self):
        """Main execution method. Runs in thread pool thread."""
        try:
            groups, stats = self.command.execute(
                self.params,
                progress_callback=self.emit_progress
            )
        except Exception as e:
            self.signals.error.emit(f"{type(e).__name__}: {str(e)}")
            return
        self.signals.finished.emit(groups, stats)
