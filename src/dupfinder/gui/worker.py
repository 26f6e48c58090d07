"""
Qt worker runnable — follows modern Qt pattern: QRunnable + QThreadPool.
Accepts ScanParams for unified configuration.

Progress is not pushed through signals: the window polls `worker.progress`
with a QTimer, so workers never block on the GUI thread.
"""
from PySide6.QtCore import QRunnable, QObject, Signal
from dupfinder.core.channel import ProgressState, CancellationToken
from dupfinder.core.models import ScanParams
from dupfinder.commands import ScanCommand


class WorkerSignals(QObject):
    """Separate QObject to hold signals (QRunnable cannot emit signals directly)."""
    finished = Signal(object, object)    # duplicate_groups, stats
    error = Signal(str)


class ScanWorker(QRunnable):
    """
    Worker runnable that performs one scan in the thread pool.
    Owns a fresh ProgressState and CancellationToken; neither is reused.
    Automatically deleted after execution (setAutoDelete=True).
    """
    def __init__(self, params: ScanParams):
        super().__init__()
        self.params = params
        self.command = ScanCommand()
        self.signals = WorkerSignals()
        self.progress = ProgressState()
        self.cancel_token = CancellationToken()
        self.setAutoDelete(True)  # Critical: auto-delete after run() completes

    def stop(self):
        """Signals the scan to stop; hashes already running still finish."""
        self.cancel_token.signal()

    def is_stopped(self) -> bool:
        """Returns True if the worker has been requested to stop."""
        return self.cancel_token.is_signaled()

    def run(self):
        """Main execution method. Runs in thread pool thread."""
        try:
            groups, stats = self.command.execute(
                self.params,
                progress=self.progress,
                cancel=self.cancel_token
            )
        except Exception as e:
            # Emitted even after stop(): every run ends with finished or error
            try:
                self.signals.error.emit(f"{type(e).__name__}: {str(e)}")
            except RuntimeError:
                pass
            return

        # Partial results after stop() are still delivered
        try:
            self.signals.finished.emit(groups, stats)
        except RuntimeError:
            # Receiver already destroyed (window closed during scan)
            pass
