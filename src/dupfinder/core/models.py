"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for content-based duplicate detection.
"""

import os
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from dupfinder.utils.convert_utils import ConvertUtils


# Fingerprint -> paths that produced it
DuplicateGroups = Dict[str, List[str]]

DEFAULT_CHUNK_SIZE = 4096


# =============================
# Enums
# =============================

class HashAlgorithmName(Enum):
    """
    Hash algorithm used to fingerprint file contents.
    Fixed for the lifetime of a scan.
    """
    SHA256 = "sha256"
    XXH64 = "xxh64"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            HashAlgorithmName.SHA256: "SHA-256",
            HashAlgorithmName.XXH64: "xxHash64",
        }
        return mapping.get(self, self.value)

    @property
    def description(self) -> str:
        """Detailed description for help text."""
        mapping = {
            HashAlgorithmName.SHA256:
                "256-bit cryptographic hash (default, negligible collision risk)",
            HashAlgorithmName.XXH64:
                "64-bit non-cryptographic hash (faster, higher collision risk)",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class SortOrder(Enum):
    SHORTEST_PATH = "shortest-path"
    SHORTEST_FILENAME = "shortest-filename"
    ALPHABETICAL = "alphabetical"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            SortOrder.SHORTEST_PATH: "Shortest Path",
            SortOrder.SHORTEST_FILENAME: "Shortest Filename",
            SortOrder.ALPHABETICAL: "Alphabetical",
        }
        return mapping.get(self, self.value)


class ScanState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ScanState.COMPLETED, ScanState.CANCELLED, ScanState.FAILED)


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileEntry:
    """
    A regular, readable file found during traversal.
    Immutable; discarded once it has been hashed.
    """
    path: str
    size: int = 0

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def __repr__(self):
        return f"<FileEntry path={self.path}, size={self.size}>"


@dataclass
class DuplicateGroup:
    """
    Files sharing one content fingerprint.
    Presentation form of a single DuplicateGroups entry.
    """
    fingerprint: str
    paths: List[str]

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.paths)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def __repr__(self):
        return f"<DuplicateGroup fingerprint={self.fingerprint[:12]}, count={len(self.paths)}>"


class DuplicateIndex:
    """
    Fingerprint -> paths mapping shared by all workers of one scan.

    Every mutation goes through record(), which performs the
    read-or-create-then-append under a single lock so concurrent workers
    never lose an entry. Entries are never removed.
    """

    def __init__(self):
        self._entries: Dict[str, List[str]] = {}
        self._lock = threading.Lock()

    def record(self, fingerprint: str, path: str) -> None:
        with self._lock:
            self._entries.setdefault(fingerprint, []).append(path)

    def snapshot(self) -> DuplicateGroups:
        """Copy of the current contents; later record() calls do not affect it."""
        with self._lock:
            return {fp: list(paths) for fp, paths in self._entries.items()}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, fingerprint: str) -> bool:
        with self._lock:
            return fingerprint in self._entries

    def __repr__(self):
        return f"<DuplicateIndex fingerprints={len(self)}>"


class ScanStats:
    """
    Statistics and diagnostics collected during a single scan.

    failed_paths is a side channel only: files listed there never appear in
    the duplicate index and no error is raised for them.
    """

    def __init__(self):
        self.files_total: int = 0
        self.files_hashed: int = 0
        self.files_failed: int = 0
        self.files_skipped: int = 0
        self.bytes_hashed: int = 0
        self.groups_found: int = 0
        self.total_time: float = 0.0
        self.cancelled: bool = False
        self.failed_paths: Dict[str, str] = {}
        self._lock = threading.Lock()

    def record_hashed(self, size: int) -> int:
        """Count a hashed file; returns the number of files processed so far."""
        with self._lock:
            self.files_hashed += 1
            self.bytes_hashed += size
            return self.files_hashed + self.files_failed

    def record_failed(self, path: str, reason: str) -> int:
        """Count an unreadable file; returns the number of files processed so far."""
        with self._lock:
            self.files_failed += 1
            self.failed_paths[path] = reason
            return self.files_hashed + self.files_failed

    @property
    def files_processed(self) -> int:
        return self.files_hashed + self.files_failed

    def print_summary(self) -> str:
        lines = [
            "📊 Scan Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            f"📁 Files discovered: {self.files_total}",
            f"🔍 Files hashed: {self.files_hashed} ({ConvertUtils.bytes_to_human(self.bytes_hashed)}, "
            f"{ConvertUtils.throughput_to_human(self.bytes_hashed, self.total_time)})",
        ]
        if self.files_failed:
            lines.append(f"⚠️ Unreadable files: {self.files_failed}")
        if self.cancelled:
            lines.append(f"⏹ Skipped after cancellation: {self.files_skipped}")
        lines.append(f"📄 Duplicate groups: {self.groups_found}")
        return "\n".join(lines)

    def __repr__(self):
        return (f"<ScanStats total={self.files_total}, hashed={self.files_hashed}, "
                f"failed={self.files_failed}, skipped={self.files_skipped}>")


"""
DTO for scan parameters with built-in validation.
Interface-agnostic — used by both GUI and CLI.
"""

@dataclass
class ScanParams:
    """Parameters for a scan with validation."""
    root_dir: str
    algorithm: HashAlgorithmName = HashAlgorithmName.SHA256
    workers: Optional[int] = None
    chunk_size: int = DEFAULT_CHUNK_SIZE
    sort_order: SortOrder = field(default=SortOrder.SHORTEST_PATH)

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.workers is not None and self.workers < 1:
            raise ValueError("Worker count must be at least 1")

        if self.chunk_size < 1:
            raise ValueError("Chunk size must be at least 1 byte")

        if isinstance(self.algorithm, str):
            self.algorithm = HashAlgorithmName(self.algorithm.lower())

    @staticmethod
    def from_human_readable(
            root_dir: str,
            chunk_size_str: str = "4K",
            algorithm: HashAlgorithmName = HashAlgorithmName.SHA256,
            workers: Optional[int] = None,
            sort_order: SortOrder = SortOrder.SHORTEST_PATH,
    ) -> 'ScanParams':
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing or GUI input conversion.
        """
        return ScanParams(
            root_dir=root_dir,
            algorithm=algorithm,
            workers=workers,
            chunk_size=ConvertUtils.parse_chunk_size(chunk_size_str),
            sort_order=sort_order,
        )
