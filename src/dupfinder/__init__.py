"""
DupFinder — find duplicate files by content, with optional GUI.

Core features:
- Recursive discovery of regular files (symlinks and special files are skipped)
- Concurrent full-content hashing (SHA-256 by default, xxHash64 optional)
- Live progress and cooperative cancellation with partial results
- Optional GUI with PySide6 (install with [gui] extra)
- CLI interface for headless/server usage
"""

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("dupfinder")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from dupfinder.commands import ScanCommand
from dupfinder.core import (
    ScanParams, ScanSession, ScanCoordinator, ScanState, ScanStats, SortOrder, HashAlgorithmName,
    ProgressState, CancellationToken, DuplicateGroup, filter_duplicates)
from dupfinder.utils.convert_utils import ConvertUtils

__all__ = [
    "ScanCommand",
    "ScanParams",
    "ScanSession",
    "ScanCoordinator",
    "ScanState",
    "ScanStats",
    "SortOrder",
    "HashAlgorithmName",
    "ProgressState",
    "CancellationToken",
    "DuplicateGroup",
    "filter_duplicates",
    "ConvertUtils",
    "__version__",
]
