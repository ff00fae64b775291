"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements file hashing using FileRecord objects and pluggable hash algorithms.

HasherImpl computes two kinds of digests:
- partial fingerprint: head window + tail window fed into one hash instance
- full hash: the whole file streamed in fixed-size chunks

Read failures are NOT swallowed here: OSError propagates so that the grouper
can drop exactly the file that failed.
"""

import hashlib
import logging
import os
from typing import Dict, Type

import blake3
import xxhash

from twinfind.core.interfaces import Hasher, HashAlgorithm, HashObject
from twinfind.core.models import FileRecord, HashAlgorithmName

logger = logging.getLogger(__name__)

PARTIAL_WINDOW = 4096  # bytes read from the head and from the tail
FULL_HASH_CHUNK_SIZE = 64 * 1024


# Use the same way to implement and use any other hashing algorithm
class Blake3AlgorithmImpl(HashAlgorithm):
    name = HashAlgorithmName.BLAKE3.value

    @staticmethod
    def new() -> HashObject:
        return blake3.blake3()


class Sha256AlgorithmImpl(HashAlgorithm):
    name = HashAlgorithmName.SHA256.value

    @staticmethod
    def new() -> HashObject:
        return hashlib.sha256()


class XXHashAlgorithmImpl(HashAlgorithm):
    """xxHash3-128. Fast, but not a cryptographic hash."""
    name = HashAlgorithmName.XXH128.value

    @staticmethod
    def new() -> HashObject:
        return xxhash.xxh3_128()


_ALGORITHMS: Dict[HashAlgorithmName, Type[HashAlgorithm]] = {
    HashAlgorithmName.BLAKE3: Blake3AlgorithmImpl,
    HashAlgorithmName.SHA256: Sha256AlgorithmImpl,
    HashAlgorithmName.XXH128: XXHashAlgorithmImpl,
}


def get_algorithm(name: HashAlgorithmName) -> HashAlgorithm:
    """Returns the algorithm implementation registered for the given name."""
    try:
        return _ALGORITHMS[name]()
    except KeyError:
        raise ValueError(f"Unsupported hash algorithm: {name!r}")


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Stateless between calls, so a single instance is shared by all worker threads.
    """

    def __init__(
        self,
        algorithm: HashAlgorithm = None,
        window: int = PARTIAL_WINDOW,
        chunk_size: int = FULL_HASH_CHUNK_SIZE
    ):
        if window <= 0:
            raise ValueError("Partial hash window must be positive")
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.algorithm = algorithm or Blake3AlgorithmImpl()
        self.window = window
        self.chunk_size = chunk_size

    def compute_partial_hash(self, file: FileRecord) -> str:
        """
        Hashes up to `window` bytes from the start of the file and, when the file
        is longer than what the head read covered, up to `window` bytes from the end.
        Overlapping bytes are never read twice. A file that shrank after fstat
        yields short reads; only the bytes actually read are hashed.
        """
        with open(file.path, 'rb') as f:
            length = os.fstat(f.fileno()).st_size
            head = f.read(self.window)

            tail = b''
            tail_size = max(0, min(self.window, length - len(head)))
            if tail_size:
                f.seek(length - tail_size)
                tail = f.read(tail_size)

        digest = self.algorithm.new()
        digest.update(head)
        digest.update(tail)
        return digest.hexdigest()

    def compute_full_hash(self, file: FileRecord) -> str:
        """Streams the entire file through the hash in `chunk_size` pieces."""
        digest = self.algorithm.new()
        with open(file.path, 'rb') as f:
            for chunk in iter(lambda: f.read(self.chunk_size), b''):
                digest.update(chunk)
        return digest.hexdigest()

    @staticmethod
    def partial_bytes(size: int, window: int = PARTIAL_WINDOW) -> int:
        """Bytes a partial hash reads for a file of the given size."""
        return min(size, 2 * window)
