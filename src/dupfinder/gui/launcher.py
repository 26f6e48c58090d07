#!/usr/bin/env python3
"""
GUI launcher — entry point for dupfinder-gui command.
Optionally takes a directory to preselect: dupfinder-gui ~/Downloads
"""
import os
import sys
from PySide6.QtWidgets import QApplication
from dupfinder.gui.main_window import MainWindow


def main():
    app = QApplication(sys.argv)
    app.setApplicationName("DupFinder")
    app.setOrganizationName("InitumSoft")

    window = MainWindow()
    args = app.arguments()[1:]
    if args and os.path.isdir(args[0]):
        window.set_directory(os.path.abspath(args[0]))
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
