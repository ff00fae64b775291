"""
Unit tests for HasherImpl and the pluggable hash algorithms.
Verifies head+tail window rules, full streaming hashes, and read failures.
"""
import hashlib
import os
from types import SimpleNamespace

import blake3
import pytest
import xxhash

from twinfind.core.hasher import (
    HasherImpl, Blake3AlgorithmImpl, Sha256AlgorithmImpl, XXHashAlgorithmImpl,
    get_algorithm, PARTIAL_WINDOW
)
from twinfind.core.models import FileRecord, HashAlgorithmName


def _record(path) -> FileRecord:
    return FileRecord(path=str(path), size=path.stat().st_size)


class TestAlgorithms:
    @pytest.mark.parametrize("name, impl", [
        (HashAlgorithmName.BLAKE3, Blake3AlgorithmImpl),
        (HashAlgorithmName.SHA256, Sha256AlgorithmImpl),
        (HashAlgorithmName.XXH128, XXHashAlgorithmImpl),
    ])
    def test_registry_returns_matching_impl(self, name, impl):
        algorithm = get_algorithm(name)
        assert isinstance(algorithm, impl)
        assert algorithm.name == name.value

    def test_unknown_algorithm_rejected(self):
        with pytest.raises(ValueError):
            get_algorithm("md5")  # type: ignore[arg-type]


class TestPartialHash:
    """Head + tail sampling with a 4096-byte window."""

    def test_window_is_4kb(self):
        assert PARTIAL_WINDOW == 4096

    def test_small_file_hashes_whole_content_once(self, tmp_path):
        """File ≤ window: head covers everything, tail is skipped."""
        content = b"hello"
        path = tmp_path / "small.txt"
        path.write_bytes(content)

        digest = HasherImpl(Sha256AlgorithmImpl()).compute_partial_hash(_record(path))

        assert digest == hashlib.sha256(content).hexdigest()

    def test_exact_window_size_has_no_tail(self, tmp_path):
        content = bytes(range(256)) * 16  # 4096 bytes
        path = tmp_path / "exact.bin"
        path.write_bytes(content)

        digest = HasherImpl(Sha256AlgorithmImpl()).compute_partial_hash(_record(path))

        assert digest == hashlib.sha256(content).hexdigest()

    def test_tail_only_covers_bytes_after_head(self, tmp_path):
        """5000-byte file: head 4096 bytes, tail the remaining 904 bytes, no overlap."""
        content = bytes(i % 251 for i in range(5000))
        path = tmp_path / "medium.bin"
        path.write_bytes(content)

        digest = HasherImpl(Sha256AlgorithmImpl()).compute_partial_hash(_record(path))

        expected = hashlib.sha256(content[:4096] + content[4096:]).hexdigest()
        assert digest == expected

    def test_large_file_uses_head_and_tail_windows(self, tmp_path):
        content = bytes(i % 251 for i in range(20000))
        path = tmp_path / "large.bin"
        path.write_bytes(content)

        digest = HasherImpl(Sha256AlgorithmImpl()).compute_partial_hash(_record(path))

        expected = hashlib.sha256(content[:4096] + content[-4096:]).hexdigest()
        assert digest == expected

    def test_middle_difference_is_invisible(self, tmp_path):
        """Files differing only outside head and tail share a fingerprint."""
        head, tail = b"H" * 4096, b"T" * 4096
        a = tmp_path / "a.bin"
        b = tmp_path / "b.bin"
        a.write_bytes(head + b"x" * 1808 + tail)
        b.write_bytes(head + b"y" * 1808 + tail)

        hasher = HasherImpl()
        assert hasher.compute_partial_hash(_record(a)) == hasher.compute_partial_hash(_record(b))
        assert hasher.compute_full_hash(_record(a)) != hasher.compute_full_hash(_record(b))

    def test_custom_window(self, tmp_path):
        content = b"abcdefghij"
        path = tmp_path / "c.txt"
        path.write_bytes(content)

        digest = HasherImpl(Sha256AlgorithmImpl(), window=3).compute_partial_hash(_record(path))

        assert digest == hashlib.sha256(b"abc" + b"hij").hexdigest()

    def test_missing_file_raises_oserror(self, tmp_path):
        """Failures propagate so the grouper can drop exactly this file."""
        record = FileRecord(path=str(tmp_path / "gone.bin"), size=10)
        with pytest.raises(OSError):
            HasherImpl().compute_partial_hash(record)

    def test_file_shrunk_before_head_read(self, tmp_path, monkeypatch):
        """fstat still reports the old size; the head read comes up short, the tail finds nothing."""
        content = b"x" * 100
        path = tmp_path / "shrunk.bin"
        path.write_bytes(content)
        record = _record(path)

        with monkeypatch.context() as m:
            m.setattr(os, "fstat", lambda fd: SimpleNamespace(st_size=20000))
            digest = HasherImpl(Sha256AlgorithmImpl()).compute_partial_hash(record)

        assert digest == hashlib.sha256(content).hexdigest()

    def test_file_shrunk_before_tail_read(self, tmp_path, monkeypatch):
        """Reported 9000 bytes, only 6000 left: the tail is truncated to what was read."""
        content = bytes(i % 251 for i in range(6000))
        path = tmp_path / "shrunk.bin"
        path.write_bytes(content)
        record = _record(path)

        with monkeypatch.context() as m:
            m.setattr(os, "fstat", lambda fd: SimpleNamespace(st_size=9000))
            digest = HasherImpl(Sha256AlgorithmImpl()).compute_partial_hash(record)

        # tail starts at 9000 - 4096 = 4904 and reads until the real end
        expected = hashlib.sha256(content[:4096] + content[4904:]).hexdigest()
        assert digest == expected

    @pytest.mark.parametrize("size", [0, 1, 4096, 5000, 8192, 100000])
    def test_partial_bytes(self, size):
        assert HasherImpl.partial_bytes(size) == min(size, 8192)


class TestFullHash:
    @pytest.mark.parametrize("algorithm, reference", [
        (Blake3AlgorithmImpl(), lambda data: blake3.blake3(data).hexdigest()),
        (Sha256AlgorithmImpl(), lambda data: hashlib.sha256(data).hexdigest()),
        (XXHashAlgorithmImpl(), lambda data: xxhash.xxh3_128(data).hexdigest()),
    ])
    def test_matches_one_shot_digest(self, tmp_path, algorithm, reference):
        """Chunked streaming yields the same digest as hashing everything at once."""
        content = bytes(i % 253 for i in range(200_000))
        path = tmp_path / "data.bin"
        path.write_bytes(content)

        hasher = HasherImpl(algorithm, chunk_size=1000)

        assert hasher.compute_full_hash(_record(path)) == reference(content)

    def test_same_content_same_hash(self, tmp_path):
        content = b"test content " * 1000
        a = tmp_path / "a"
        b = tmp_path / "nested_b"
        a.write_bytes(content)
        b.write_bytes(content)

        hasher = HasherImpl()
        assert hasher.compute_full_hash(_record(a)) == hasher.compute_full_hash(_record(b))

    def test_deleted_file_raises_oserror(self, tmp_path):
        path = tmp_path / "deleted.txt"
        path.write_bytes(b"content")
        record = _record(path)
        path.unlink()

        with pytest.raises(OSError):
            HasherImpl().compute_full_hash(record)

    def test_invalid_sizes_rejected(self):
        with pytest.raises(ValueError):
            HasherImpl(window=0)
        with pytest.raises(ValueError):
            HasherImpl(chunk_size=0)
