"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/coordinator.py
Concurrent scan engine: traversal -> parallel hashing -> duplicate filtering.

FLOW
----
1. Claim the CancellationToken (tokens are single-use)
2. Materialize the file list via the scanner (N files; N = 0 returns {} at once)
3. Submit one hashing task per file to a bounded ThreadPoolExecutor
4. Each task polls the token first; once it is signaled no new file is opened
5. A successful digest is appended to the shared DuplicateIndex, a failed
   open/read drops the file (reason kept in ScanStats.failed_paths)
6. Every processed file advances the shared ProgressState to processed / N
7. After all workers exit, the index snapshot is filtered to groups of 2+

CANCELLATION
------------
Cooperative and per-file. Hashes already running finish and are recorded;
tasks still queued are cancelled or return without touching their file.
The engine never resets progress; that is the observer's job.
"""

import os
import time
import logging
from concurrent.futures import ThreadPoolExecutor, wait, FIRST_COMPLETED
from typing import Callable, Optional

from dupfinder.core.channel import ProgressState, CancellationToken
from dupfinder.core.grouper import filter_duplicates
from dupfinder.core.hasher import HasherImpl
from dupfinder.core.interfaces import Coordinator, FileScanner, Hasher
from dupfinder.core.models import DuplicateGroups, DuplicateIndex, FileEntry, ScanStats
from dupfinder.core.scanner import FileScannerImpl

logger = logging.getLogger(__name__)

# How often the dispatcher re-checks the token while workers are busy
CANCEL_POLL_INTERVAL = 0.05


def default_worker_count() -> int:
    return os.cpu_count() or 4


class ScanCoordinator(Coordinator):
    """
    Fans hashing out across a worker pool and aggregates results into a DuplicateIndex.

    Attributes:
        hasher: Shared Hasher used by every worker
        max_workers: Upper bound of the thread pool
        stats: ScanStats of the most recent run (None before the first run)
    """

    def __init__(
        self,
        hasher: Optional[Hasher] = None,
        max_workers: Optional[int] = None,
        scanner_factory: Callable[[str], FileScanner] = FileScannerImpl
    ):
        if max_workers is not None and max_workers < 1:
            raise ValueError("Worker count must be at least 1")
        self.hasher = hasher or HasherImpl()
        self.max_workers = max_workers or default_worker_count()
        self.scanner_factory = scanner_factory
        self.stats: Optional[ScanStats] = None

    def run(
        self,
        root: str,
        progress_sink: ProgressState,
        cancel: CancellationToken
    ) -> DuplicateGroups:
        """
        Scan root and return fingerprint -> paths for every fingerprint shared by 2+ files.
        Never raises for filesystem problems; a cancelled scan returns a partial result.

        Raises:
            RuntimeError: If the cancellation token was already used by another scan.
        """
        cancel.claim()

        stats = ScanStats()
        self.stats = stats
        start_time = time.time()

        entries = self.scanner_factory(root).scan(cancel)
        total = len(entries)
        stats.files_total = total
        logger.debug(f"Discovered {total} files under {root}")

        if total == 0:
            stats.cancelled = cancel.is_signaled()
            stats.total_time = time.time() - start_time
            return {}

        index = DuplicateIndex()

        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="dupfinder-hash") as executor:
            pending = {
                executor.submit(self._process_entry, entry, index, progress_sink, cancel, stats, total)
                for entry in entries
            }
            while pending:
                _, pending = wait(pending, timeout=CANCEL_POLL_INTERVAL, return_when=FIRST_COMPLETED)
                if pending and cancel.is_signaled():
                    # Drop queued tasks; running ones are allowed to finish
                    for future in pending:
                        future.cancel()
                    logger.debug("Cancellation requested, waiting for running hashes")
                    break
        # Leaving the executor block waits for every running task: quiescence

        groups = filter_duplicates(index.snapshot())

        stats.cancelled = cancel.is_signaled()
        stats.files_skipped = total - stats.files_processed
        stats.groups_found = len(groups)
        stats.total_time = time.time() - start_time

        logger.debug(
            f"Scan finished: {stats.files_hashed} hashed, {stats.files_failed} unreadable, "
            f"{stats.files_skipped} skipped, {stats.groups_found} duplicate groups"
        )
        return groups

    def _process_entry(
        self,
        entry: FileEntry,
        index: DuplicateIndex,
        progress_sink: ProgressState,
        cancel: CancellationToken,
        stats: ScanStats,
        total: int
    ) -> bool:
        """
        Hash a single file and record the outcome.
        Returns False if the file was skipped because of cancellation.
        """
        if cancel.is_signaled():
            return False

        try:
            fingerprint = self.hasher.compute_digest(entry.path)
        except OSError as e:
            logger.debug(f"Dropping unreadable file {entry.path}: {e}")
            processed = stats.record_failed(entry.path, str(e))
        except Exception as e:
            logger.exception(f"Unexpected error while hashing {entry.path}")
            processed = stats.record_failed(entry.path, f"{type(e).__name__}: {e}")
        else:
            index.record(fingerprint, entry.path)
            processed = stats.record_hashed(entry.size)

        progress_sink.advance(done=processed, total=total)
        return True
