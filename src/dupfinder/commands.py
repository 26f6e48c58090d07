"""
Unified command orchestrator for duplicate scans.
This is the SINGLE source of truth for business logic — used by both GUI and CLI.
No Qt/PySide6 dependencies — pure Python.
"""
import logging
from typing import Optional, Tuple

from dupfinder.core.channel import ProgressState, CancellationToken
from dupfinder.core.coordinator import ScanCoordinator
from dupfinder.core.hasher import HasherImpl, get_algorithm
from dupfinder.core.models import DuplicateGroups, ScanParams, ScanStats

logger = logging.getLogger(__name__)


class ScanCommand:
    """
    Orchestrates the entire scan workflow:
    1. Build hasher and coordinator from ScanParams
    2. Run the coordinator with progress/cancellation support
    3. Return duplicate groups with statistics

    Usage:
        # For GUI (progress bar polls the shared state):
        progress, cancel = ProgressState(), CancellationToken()
        groups, stats = ScanCommand().execute(params, progress=progress, cancel=cancel)

        # For CLI (cancel from a SIGINT handler):
        groups, stats = ScanCommand().execute(params, cancel=token)
    """

    def __init__(self):
        self.coordinator: Optional[ScanCoordinator] = None

    @staticmethod
    def build_coordinator(params: ScanParams) -> ScanCoordinator:
        hasher = HasherImpl(get_algorithm(params.algorithm), chunk_size=params.chunk_size)
        return ScanCoordinator(hasher=hasher, max_workers=params.workers)

    def execute(
            self,
            params: ScanParams,
            progress: Optional[ProgressState] = None,
            cancel: Optional[CancellationToken] = None
    ) -> Tuple[DuplicateGroups, ScanStats]:
        """
        Execute one scan with given parameters.

        Args:
            params: Validated scan parameters
            progress: Shared progress state (fresh one created when omitted)
            cancel: Single-use cancellation token (fresh one created when omitted)

        Returns:
            Tuple of (duplicate_groups, statistics)

        Raises:
            RuntimeError: If the cancellation token was already used
        """
        self.coordinator = self.build_coordinator(params)
        logger.debug(
            f"Scanning {params.root_dir} with {params.algorithm.value}, "
            f"{self.coordinator.max_workers} workers, chunk {params.chunk_size}B"
        )

        groups = self.coordinator.run(
            params.root_dir,
            progress if progress is not None else ProgressState(),
            cancel if cancel is not None else CancellationToken()
        )
        return groups, self.coordinator.stats

    def get_stats(self) -> ScanStats:
        """Get statistics of the last execution."""
        if not self.coordinator or self.coordinator.stats is None:
            raise RuntimeError("Execute command first before accessing stats")
        return self.coordinator.stats
