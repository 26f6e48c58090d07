"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License
main_window.py
DupFinder GUI Application
A PySide6 interface for picking a directory, running a scan and browsing duplicate groups.
"""
from typing import Any, Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QProgressBar, QFileDialog, QMessageBox,
)
from PySide6.QtCore import QSettings, QThreadPool, QTimer
from dupfinder.core.grouper import to_duplicate_groups
from dupfinder.core.models import ScanParams, ScanStats
from dupfinder.gui.custom_widgets.duplicate_groups_tree import DuplicateGroupsTree
from dupfinder.gui.worker import ScanWorker

# Progress bar resolution and polling cadence
PROGRESS_STEPS = 1000
PROGRESS_POLL_MS = 50


class SettingsManager:
    def __init__(self):
        self.settings = QSettings("InitumSoft", "DupFinder")

    def save_settings(self, key: str, value: Any):
        self.settings.setValue(key, value)

    def load_settings(self, key: str, default: Any = None) -> Any:
        return self.settings.value(key, default)


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("DupFinder")
        self.resize(800, 600)

        self.dir_to_scan = ""
        self.worker: Optional[ScanWorker] = None  # Current worker, holds the cancellation token
        self.settings_manager = SettingsManager()

        self.progress_timer = QTimer(self)
        self.progress_timer.setInterval(PROGRESS_POLL_MS)
        self.progress_timer.timeout.connect(self.poll_progress)

        self.setup_ui()
        self.setup_connections()
        self.restore_settings()

    def setup_ui(self):
        central = QWidget(self)
        layout = QVBoxLayout(central)

        layout.addWidget(QLabel("Select a directory to scan:"))
        self.choose_dir_button = QPushButton("Choose Directory")
        layout.addWidget(self.choose_dir_button)

        self.current_dir_label = QLabel()
        layout.addWidget(self.current_dir_label)

        buttons = QHBoxLayout()
        self.start_button = QPushButton("Start Search")
        self.stop_button = QPushButton("Stop Search")
        buttons.addWidget(self.start_button)
        buttons.addWidget(self.stop_button)
        layout.addLayout(buttons)

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, PROGRESS_STEPS)
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setFixedHeight(24)
        layout.addWidget(self.progress_bar)

        self.groups_tree = DuplicateGroupsTree(self)
        layout.addWidget(self.groups_tree)

        self.setCentralWidget(central)
        self.update_controls()

    def setup_connections(self):
        self.choose_dir_button.clicked.connect(self.select_root_folder)
        self.start_button.clicked.connect(self.start_search)
        self.stop_button.clicked.connect(self.stop_search)

    def set_directory(self, path: str):
        self.dir_to_scan = path
        self.current_dir_label.setText(f"Current Directory: {path}")
        self.groups_tree.set_groups([])
        self.update_controls()

    def select_root_folder(self):
        dir_path = QFileDialog.getExistingDirectory(self, "Select Root Folder", self.dir_to_scan)
        if dir_path:
            self.set_directory(dir_path)

    def is_searching(self) -> bool:
        return self.worker is not None

    def update_controls(self):
        searching = self.is_searching()
        self.start_button.setEnabled(bool(self.dir_to_scan) and not searching)
        self.stop_button.setEnabled(searching)
        self.choose_dir_button.setEnabled(not searching)

    def start_search(self):
        if not self.dir_to_scan:
            QMessageBox.warning(self, "Input Error", "Please, select folder to scan!")
            return
        if self.is_searching():
            return

        try:
            params = ScanParams(root_dir=self.dir_to_scan)
        except ValueError as e:
            QMessageBox.warning(self, "Input Error", str(e))
            return

        self.groups_tree.set_groups([])
        self.progress_bar.setValue(0)

        # Launch worker via thread pool
        self.worker = ScanWorker(params)
        self.worker.signals.finished.connect(self.on_search_finished)
        self.worker.signals.error.connect(self.on_search_error)
        QThreadPool.globalInstance().start(self.worker)

        self.progress_timer.start()
        self.update_controls()

    def stop_search(self):
        if self.worker:
            self.worker.stop()
        # Resetting the bar is the observer's job; the engine leaves progress as is
        self.progress_bar.setValue(0)

    def poll_progress(self):
        if not self.worker or self.worker.is_stopped():
            return
        self.progress_bar.setValue(int(self.worker.progress.get() * PROGRESS_STEPS))

    def _finish(self):
        self.progress_timer.stop()
        self.worker = None  # Release reference - worker auto-deleted by pool
        self.update_controls()

    def on_search_finished(self, duplicate_groups: dict, stats: ScanStats):
        cancelled = stats is not None and stats.cancelled
        self._finish()
        self.progress_bar.setValue(0 if cancelled else PROGRESS_STEPS)
        self.groups_tree.set_groups(to_duplicate_groups(duplicate_groups))

        if stats is not None:
            self.statusBar().showMessage(
                f"{'Cancelled — partial result. ' if cancelled else ''}"
                f"{stats.groups_found} duplicate groups, {stats.files_hashed} files hashed "
                f"in {stats.total_time:.2f}s"
            )

    def on_search_error(self, error_message: str):
        # No dialog for a scan the user already stopped or abandoned
        stopped = self.worker is None or self.worker.is_stopped()
        self._finish()
        self.progress_bar.setValue(0)
        if stopped:
            self.statusBar().showMessage(f"Stopped: {error_message}")
            return
        QMessageBox.critical(self, "Error", f"Error occurred:\n{error_message}")

    def closeEvent(self, event):
        # Request cancellation of running worker
        if self.worker:
            self.worker.stop()
            self.worker = None
        self.progress_timer.stop()
        self.save_settings()
        super().closeEvent(event)

    def save_settings(self):
        self.settings_manager.save_settings("root_dir", self.dir_to_scan)

    def restore_settings(self):
        root_dir = self.settings_manager.load_settings("root_dir", "")
        if root_dir:
            self.set_directory(str(root_dir))
