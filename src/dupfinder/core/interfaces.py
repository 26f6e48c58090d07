"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate finder.
These protocols enforce structural typing using Python's `typing.Protocol` to ensure
consistency across modules while maintaining flexibility and modularity.

Key Components:
---------------
- HashAccumulator: Running hash state fed chunk by chunk.
- HashAlgorithm: Standardized interface for hash functions (e.g., SHA-256, xxHash).
- Hasher: Interface for computing the full-content fingerprint of a file.
- FileScanner: Interface for enumerating regular files under a root.
- Coordinator: Interface for the concurrent scan engine.
"""

from typing import Protocol, List, Optional
from dupfinder.core.models import FileEntry, DuplicateGroups
from dupfinder.core.channel import ProgressState, CancellationToken


# ===== Interfaces =====

class HashAccumulator(Protocol):
    def update(self, data: bytes) -> None: ...
    def hexdigest(self) -> str: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-256 or xxHash
    without affecting the rest of the scan logic.
    """
    name: str

    def new(self) -> HashAccumulator:
        """Returns a fresh accumulator for one file."""
        ...


class Hasher(Protocol):
    """Interface for fingerprinting a file's full content."""
    def compute_digest(self, path: str) -> str: ...


class FileScanner(Protocol):
    """
    Interface for scanning file systems and collecting regular files.

    Methods:
        scan: Returns every regular file reachable from the configured root.
    """
    def scan(self, cancel: Optional[CancellationToken] = None) -> List[FileEntry]:
        """
        Scan files from the configured directory.

        Args:
            cancel: Optional token; when signaled the walk stops early.

        Returns:
            List of FileEntry objects, in no particular order.
        """
        ...


class Coordinator(Protocol):
    """
    Interface for the scan engine.

    Fans hashing out across a worker pool, reports progress and honours
    cooperative cancellation.
    """
    def run(
        self,
        root: str,
        progress_sink: ProgressState,
        cancel: CancellationToken
    ) -> DuplicateGroups:
        """
        Run one scan.

        Args:
            root: Directory (or single file) to scan.
            progress_sink: Shared progress, advanced once per processed file.
            cancel: Single-use token polled before each file.

        Returns:
            Fingerprint -> paths for every fingerprint shared by 2+ files.
        """
        ...
