"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements recursive file discovery.
Features:
- Uses os.walk for fast traversal; a symlinked root is followed, symbolic links below it never are
- Accepts only regular files (symlinks, devices, pipes and sockets are skipped)
- Best-effort: unreadable directories and broken entries are skipped, never raised
- Returns a List containing discovered files
"""

import os
import stat
import time
import logging
from pathlib import Path
from typing import List, Optional

from dupfinder.core.models import FileEntry
from dupfinder.core.interfaces import FileScanner
from dupfinder.core.channel import CancellationToken

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Scans a directory tree recursively and collects regular files.

    Attributes:
        root_dir: Root directory to scan (a single regular file is also accepted)
    """

    def __init__(self, root_dir: str):
        self.root_dir = root_dir

    def scan(self, cancel: Optional[CancellationToken] = None) -> List[FileEntry]:
        """
        Single-pass scanner with debug logging.
        Returns every regular file found under the root, in no particular order.
        An empty, missing or unreadable root yields an empty list.
        """
        logger.debug("Starting scan operation")
        logger.debug(f"Root directory: {self.root_dir}")

        found_files: List[FileEntry] = []

        if cancel and cancel.is_signaled():
            logger.debug("Scan cancelled before start")
            return found_files

        root_path = Path(self.root_dir)
        # The root is followed if it is a symlink; entries below it are not
        try:
            root_stat = os.stat(root_path)
        except OSError as e:
            logger.warning(f"Cannot access root {self.root_dir}: {e}")
            return found_files

        # Root is itself a file
        if not stat.S_ISDIR(root_stat.st_mode):
            if stat.S_ISREG(root_stat.st_mode):
                found_files.append(FileEntry(path=str(root_path), size=root_stat.st_size))
            else:
                logger.debug(f"Skipping special file: {root_path}")
            return found_files

        start_time = time.time()

        for root, dirs, files in os.walk(str(root_path), onerror=self._on_walk_error, followlinks=False):
            # Check for cancellation at each directory level
            if cancel and cancel.is_signaled():
                logger.debug("Scan interrupted by cancellation")
                break

            # os.walk lists symlinked directories in dirs; never descend into them
            dirs[:] = [d for d in dirs if not os.path.islink(os.path.join(root, d))]

            for filename in files:
                entry = self._process_file(Path(root) / filename)
                if entry:
                    found_files.append(entry)

        elapsed_time = time.time() - start_time
        logger.debug(f"Total scan time: {elapsed_time:.2f} seconds")
        logger.debug(f"Scan completed. Found {len(found_files)} files.")

        return found_files

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.debug(f"Skipping unreadable directory {error.filename}: {error.strerror}")

    @staticmethod
    def _process_file(path: Path) -> Optional[FileEntry]:
        """
        Return a FileEntry if path is a regular file, else None.
        Args:
            path: Path object pointing to the candidate
        Returns:
            Optional[FileEntry]: FileEntry for regular files, None otherwise
        """
        try:
            st = os.lstat(path)
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return None

        if stat.S_ISLNK(st.st_mode):
            logger.debug(f"Skipping symbolic link: {path}")
            return None

        if not stat.S_ISREG(st.st_mode):
            logger.debug(f"Skipping special file: {path}")
            return None

        return FileEntry(path=str(path), size=st.st_size)
