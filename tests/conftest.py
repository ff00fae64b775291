"""
Shared fixtures for duplicate search tests.
Creates isolated temporary directories with controlled test files.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files:
    - 2 identical files + 1 more copy in a subdirectory (3-file duplicate group)
    - 2 identical files of another size (2-file duplicate group)
    - 2 unique files (different sizes)
    - 1 same-size-but-different file next to the 2KB pair
    - 2 empty files (must be filtered by scanner)
    """
    files = {}

    # Duplicate group #1 (1KB of 'A')
    content_a = b"A" * 1024
    files["dup1_a"] = temp_dir / "dup1_a.txt"
    files["dup1_b"] = temp_dir / "dup1_b.txt"
    files["dup1_a"].write_bytes(content_a)
    files["dup1_b"].write_bytes(content_a)

    # Duplicate pair #2 (2KB of 'B')
    content_b = b"B" * 2048
    files["dup2_a"] = temp_dir / "dup2_a.bin"
    files["dup2_b"] = temp_dir / "dup2_b.bin"
    files["dup2_a"].write_bytes(content_b)
    files["dup2_b"].write_bytes(content_b)

    # Same size as pair #2, different content
    files["same_size"] = temp_dir / "same_size.bin"
    files["same_size"].write_bytes(b"Z" * 2048)

    # Unique files
    files["unique1"] = temp_dir / "unique1.txt"
    files["unique1"].write_bytes(b"C" * 1500)
    files["unique2"] = temp_dir / "unique2.txt"
    files["unique2"].write_bytes(b"D" * 2500)

    # Empty files (filtered by scanner - 0 bytes)
    files["empty1"] = temp_dir / "empty1.txt"
    files["empty1"].write_bytes(b"")
    files["empty2"] = temp_dir / "empty2.txt"
    files["empty2"].write_bytes(b"")

    # Subdirectory with duplicates
    subdir = temp_dir / "subdir" / "deeper"
    subdir.mkdir(parents=True)
    files["sub_dup"] = subdir / "dup_in_subdir.dat"
    files["sub_dup"].write_bytes(content_a)  # Same as dup1_a/b

    return files
