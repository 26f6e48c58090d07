"""
Core duplicate detection engine — scanner, hasher, coordinator, and result filter.

This package contains the performance-critical foundation of dupfinder:
- FileScannerImpl: recursive discovery of regular files
- HasherImpl + SHA256AlgorithmImpl / XXHashAlgorithmImpl: streaming full-content hashing
- ScanCoordinator: concurrent hashing with progress reporting and cooperative cancellation
- filter_duplicates: reduction of the fingerprint index to duplicate groups
- ScanSession: background scan lifecycle for interactive callers
- Models: FileEntry, DuplicateIndex, DuplicateGroup, ScanStats and configuration objects

All components are pure Python with no GUI dependencies — suitable for CLI and server usage.
"""

from .models import (
    FileEntry, DuplicateGroup, DuplicateGroups, DuplicateIndex, ScanStats, ScanParams,
    ScanState, SortOrder, HashAlgorithmName, DEFAULT_CHUNK_SIZE)
from .channel import ProgressState, CancellationToken
from .hasher import HasherImpl, SHA256AlgorithmImpl, XXHashAlgorithmImpl, get_algorithm, hash_file
from .scanner import FileScannerImpl
from .grouper import filter_duplicates, to_duplicate_groups
from .sorter import Sorter
from .coordinator import ScanCoordinator
from .session import ScanSession

__all__ = [
    "FileEntry",
    "DuplicateGroup",
    "DuplicateGroups",
    "DuplicateIndex",
    "ScanStats",
    "ScanParams",
    "ScanState",
    "SortOrder",
    "HashAlgorithmName",
    "DEFAULT_CHUNK_SIZE",
    "ProgressState",
    "CancellationToken",
    "HasherImpl",
    "SHA256AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "get_algorithm",
    "hash_file",
    "FileScannerImpl",
    "filter_duplicates",
    "to_duplicate_groups",
    "Sorter",
    "ScanCoordinator",
    "ScanSession",
]
