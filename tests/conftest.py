"""
Shared fixtures for duplicate finder tests.
Creates isolated temporary directories with controlled test files.
"""
import hashlib
import os
import sys
import tempfile
from pathlib import Path
from typing import Dict

import pytest

# Add src/ to sys.path so 'dupfinder' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

CONTENT_A = b"A" * 1024
CONTENT_B = b"B" * 2048

running_as_root = hasattr(os, "geteuid") and os.geteuid() == 0

requires_permissions = pytest.mark.skipif(
    sys.platform == "win32" or running_as_root,
    reason="file permission bits are not enforced for root or on Windows"
)


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for duplicate scenarios:
    - 3 identical files (two in root, one in subdir)
    - 2 identical files with different content
    - 2 unique files
    - 1 empty file (singleton, must not form a group)
    """
    files = {}

    # Duplicate set #1 (1KB of 'A')
    files["dup1_a"] = temp_dir / "dup1_a.txt"
    files["dup1_b"] = temp_dir / "dup1_b.txt"
    files["dup1_a"].write_bytes(CONTENT_A)
    files["dup1_b"].write_bytes(CONTENT_A)

    # Duplicate pair #2 (2KB of 'B')
    files["dup2_a"] = temp_dir / "dup2_a.bin"
    files["dup2_b"] = temp_dir / "renamed_copy.dat"
    files["dup2_a"].write_bytes(CONTENT_B)
    files["dup2_b"].write_bytes(CONTENT_B)

    # Unique files
    files["unique1"] = temp_dir / "unique1.txt"
    files["unique1"].write_bytes(b"C" * 1500)
    files["unique2"] = temp_dir / "unique2.txt"
    files["unique2"].write_bytes(b"D" * 2500)

    # Empty file
    files["empty"] = temp_dir / "empty.txt"
    files["empty"].write_bytes(b"")

    # Subdirectory with a third copy of set #1
    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup_in_subdir.txt"
    files["sub_dup"].write_bytes(CONTENT_A)

    return files


@pytest.fixture
def hello_world_dir(temp_dir) -> Path:
    """a.txt = 'hello', b.txt = 'hello', c.txt = 'world'."""
    (temp_dir / "a.txt").write_bytes(b"hello")
    (temp_dir / "b.txt").write_bytes(b"hello")
    (temp_dir / "c.txt").write_bytes(b"world")
    return temp_dir


@pytest.fixture
def many_files(temp_dir) -> Path:
    """100 files forming 50 duplicate pairs, for concurrency and cancellation tests."""
    for i in range(50):
        content = f"payload-{i}-".encode() * 64
        (temp_dir / f"pair{i}_a.bin").write_bytes(content)
        (temp_dir / f"pair{i}_b.bin").write_bytes(content)
    return temp_dir
