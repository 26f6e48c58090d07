"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

duplicate_groups_tree.py

UI component for displaying duplicate file groups.
One collapsible node per fingerprint, one child per path.
"""

import os

from PySide6.QtWidgets import QTreeWidget, QTreeWidgetItem, QMenu, QApplication, QWidget
from PySide6.QtGui import QAction, QDesktopServices
from PySide6.QtCore import Qt, QUrl, Signal
from dupfinder.core.models import DuplicateGroup


class DuplicateGroupsTree(QTreeWidget):
    """
    A tree widget that displays duplicate groups.

    Signals:
        path_selected (str): Emitted when a file item is clicked.
    """
    path_selected = Signal(str)

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self.setHeaderLabels(["Duplicate groups"])
        self.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.customContextMenuRequested.connect(self.show_context_menu)
        self.itemClicked.connect(self.on_item_clicked)
        self.current_groups: list[DuplicateGroup] = []

    def set_groups(self, groups: list[DuplicateGroup]):
        """Displays a list of duplicate groups in the UI."""
        self.current_groups = groups
        self._populate_tree()

    def _populate_tree(self):
        self.clear()
        for idx, group in enumerate(self.current_groups, 1):
            title = f"📁 Group {idx} | Files: {group.duplicate_count} | Hash: {group.fingerprint}"
            group_item = QTreeWidgetItem([title])
            group_item.setFlags(Qt.ItemFlag.ItemIsEnabled)
            for path in group.paths:
                child = QTreeWidgetItem([path])
                child.setToolTip(0, f"Path: {path}")
                child.setData(0, Qt.ItemDataRole.UserRole, path)
                group_item.addChild(child)
            self.addTopLevelItem(group_item)

    def on_item_clicked(self, item, _column=0):
        """Emits signal when a file item is clicked."""
        path = item.data(0, Qt.ItemDataRole.UserRole)
        if path:
            self.path_selected.emit(path)

    def show_context_menu(self, point):
        """Shows context menu on right-click."""
        item = self.itemAt(point)
        path = item.data(0, Qt.ItemDataRole.UserRole) if item else None
        if not path:
            return

        menu = QMenu(self)
        copy_action = QAction("Copy Path", self)
        reveal_action = QAction("Open Containing Folder", self)

        copy_action.triggered.connect(lambda _: QApplication.clipboard().setText(path))
        reveal_action.triggered.connect(
            lambda _: QDesktopServices.openUrl(QUrl.fromLocalFile(os.path.dirname(path)))
        )

        menu.addAction(copy_action)
        menu.addAction(reveal_action)
        menu.exec(self.viewport().mapToGlobal(point))
