"""
GUI components built on PySide6 (optional dependency).
"""

from .worker import ScanWorker, WorkerSignals
from .main_window import MainWindow

__all__ = ["MainWindow", "ScanWorker", "WorkerSignals"]
