"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/session.py
Scan lifecycle owned by the caller: IDLE -> RUNNING -> {COMPLETED, CANCELLED, FAILED}.

A session runs the coordinator on a background thread so the caller stays
responsive and can poll progress. Each scan gets a fresh ProgressState and
CancellationToken; reset() prepares new ones for the next scan.
"""

import threading
import logging
from typing import Callable, Optional

from dupfinder.core.channel import ProgressState, CancellationToken
from dupfinder.core.coordinator import ScanCoordinator
from dupfinder.core.interfaces import Coordinator
from dupfinder.core.models import DuplicateGroups, ScanState, ScanStats

logger = logging.getLogger(__name__)


class ScanSession:
    """
    Handle for one scan at a time.

    Usage:
        session = ScanSession()
        session.start("/data")
        while session.is_running():
            draw(session.progress)
        groups = session.result
    """

    def __init__(
        self,
        coordinator: Optional[Coordinator] = None,
        on_finished: Optional[Callable[['ScanSession'], None]] = None
    ):
        self.coordinator = coordinator or ScanCoordinator()
        self.on_finished = on_finished
        self.progress_state = ProgressState()
        self.cancel_token = CancellationToken()
        self.result: Optional[DuplicateGroups] = None
        self.error: Optional[BaseException] = None
        self.root: Optional[str] = None
        self._state = ScanState.IDLE
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._done = threading.Event()

    @property
    def state(self) -> ScanState:
        with self._lock:
            return self._state

    @property
    def progress(self) -> float:
        return self.progress_state.get()

    @property
    def stats(self) -> Optional[ScanStats]:
        return getattr(self.coordinator, "stats", None)

    def is_running(self) -> bool:
        return self.state == ScanState.RUNNING

    def start(self, root: str) -> None:
        """Start scanning root in the background. Only allowed from IDLE."""
        with self._lock:
            if self._state != ScanState.IDLE:
                raise RuntimeError(f"Cannot start a scan from state '{self._state.value}'; call reset() first")
            self._state = ScanState.RUNNING
            self.root = root
            self._done.clear()

        self._thread = threading.Thread(target=self._run, name="dupfinder-scan", daemon=True)
        self._thread.start()

    def cancel(self) -> None:
        """Request cooperative cancellation. Ignored unless a scan is running."""
        if self.is_running():
            logger.debug("Cancellation requested for running scan")
            self.cancel_token.signal()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the scan reaches a terminal state. Returns False on timeout."""
        if self._thread is None:
            return self.state.is_terminal
        return self._done.wait(timeout)

    def reset(self) -> None:
        """Return a finished session to IDLE with a fresh progress state and token."""
        with self._lock:
            if self._state == ScanState.RUNNING:
                raise RuntimeError("Cannot reset a running scan; cancel it and wait first")
            self._state = ScanState.IDLE
            self.progress_state = ProgressState()
            self.cancel_token = CancellationToken()
            self.result = None
            self.error = None
            self.root = None
            self._thread = None
            self._done.clear()

    def _run(self) -> None:
        try:
            result = self.coordinator.run(self.root, self.progress_state, self.cancel_token)
        except Exception as e:
            logger.exception("Scan failed")
            final_state = ScanState.FAILED
            self.error = e
        else:
            self.result = result
            final_state = ScanState.CANCELLED if self.cancel_token.is_signaled() else ScanState.COMPLETED

        with self._lock:
            self._state = final_state
        self._done.set()

        if self.on_finished:
            try:
                self.on_finished(self)
            except Exception as e:
                logger.error(f"Error in scan finished handler: {e}")

    def __repr__(self):
        return f"<ScanSession state={self.state.value}, progress={self.progress:.3f}>"
