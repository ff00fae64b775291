"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate search.
These protocols enforce structural typing using Python's `typing.Protocol` to ensure
consistency across modules while maintaining flexibility and modularity.

Key Components:
---------------
- HashAlgorithm: Factory for incremental hash objects (BLAKE3, SHA-256, xxHash).
- Hasher: Interface for computing the partial fingerprint and the full hash of a file.
- FileScanner: Interface for scanning directories and returning file records.
- FileGrouper: Interface for grouping files by size or hash values.
- Deduplicator: Interface for the engine coordinating all stages.
"""

from typing import Protocol, List, Dict, Optional, Callable, Any
from twinfind.core.models import FileRecord, DuplicateGroup

ProgressCallback = Callable[[str, int, Optional[int]], None]


# ===== Interfaces =====

class HashObject(Protocol):
    """Incremental hash state as exposed by hashlib, blake3 and xxhash."""
    def update(self, data: bytes) -> Any: ...
    def hexdigest(self) -> str: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like BLAKE3, SHA-256 or xxHash
    without affecting the rest of the pipeline.
    """
    name: str

    @staticmethod
    def new() -> HashObject:
        """Returns a fresh incremental hash object."""
        ...


class Hasher(Protocol):
    """Interface for hashing a sample or the whole content of a file."""
    def compute_partial_hash(self, file: FileRecord) -> str: ...
    def compute_full_hash(self, file: FileRecord) -> str: ...


class FileScanner(Protocol):
    """
    Interface for scanning file systems and collecting file metadata.
    """
    def scan(
        self,
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[FileRecord]:
        """
        Scan files from the configured directory.

        Args:
            progress_callback: Optional callback for reporting progress (stage, current, total).

        Returns:
            Records for every accessible regular file with size > 0.
        """
        ...


class FileGrouper(Protocol):
    """
    Interface for grouping files based on size or content hashes.
    Returned mappings only contain keys shared by 2+ files.
    """
    def group_by_size(self, files: List[FileRecord]) -> Dict[int, List[FileRecord]]:
        """Group files by their size in bytes."""
        ...

    def group_by_partial_hash(
        self,
        files: List[FileRecord],
        on_progress: Optional[Callable[[int], None]] = None
    ) -> Dict[str, List[FileRecord]]:
        """Group files by head+tail fingerprint."""
        ...

    def group_by_full_hash(
        self,
        files: List[FileRecord],
        on_progress: Optional[Callable[[int], None]] = None
    ) -> Dict[str, List[FileRecord]]:
        """Group files by their full content hash."""
        ...


class Deduplicator(Protocol):
    """
    Interface for the duplicate search engine.

    Coordinates the stages (size → partial hash → full hash).
    """
    def find_duplicates(
        self,
        files: List[FileRecord],
        metrics: Any = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        """
        Run the pipeline over already scanned files.

        Args:
            files: Records produced by the scanner.
            metrics: Optional MetricsCollector fed with per-stage results.
            progress_callback: Optional callback for progress updates (stage, current, total).

        Returns:
            Confirmed duplicate groups.
        """
        ...
