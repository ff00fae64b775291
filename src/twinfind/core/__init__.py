"""
Core duplicate search engine — scanner, hasher, grouper, stages and metrics.

This package contains the performance-critical foundation of twinfind:
- FileScannerImpl: parallel directory traversal producing non-empty file records
- HasherImpl + Blake3/Sha256/XXHash algorithms: head+tail fingerprint and full content hash
- FileGrouperImpl: parallel key computation folded into size and hash groups
- DeduplicatorImpl: staged pipeline (size → partial hash → full hash)
- MetricsCollector: counters and per-stage timings of a run
- Models: FileRecord, DuplicateGroup, RunMetrics and configuration objects

All components are pure Python with no presentation dependencies.
"""

from .scanner import FileScannerImpl
from .grouper import FileGrouperImpl
from .hasher import (
    HasherImpl, Blake3AlgorithmImpl, Sha256AlgorithmImpl, XXHashAlgorithmImpl,
    get_algorithm, PARTIAL_WINDOW, FULL_HASH_CHUNK_SIZE)
from .deduplicator import DeduplicatorImpl
from .metrics import MetricsCollector
from .models import (
    FileRecord, DuplicateGroup, HashAlgorithmName, RunMetrics, ScanParams, Stage)

__all__ = [
    "FileScannerImpl",
    "FileGrouperImpl",
    "HasherImpl",
    "Blake3AlgorithmImpl",
    "Sha256AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "get_algorithm",
    "PARTIAL_WINDOW",
    "FULL_HASH_CHUNK_SIZE",
    "DeduplicatorImpl",
    "MetricsCollector",
    "FileRecord",
    "DuplicateGroup",
    "HashAlgorithmName",
    "RunMetrics",
    "ScanParams",
    "Stage",
]
