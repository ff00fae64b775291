"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models and configuration for the duplicate search pipeline.
"""

import os
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, List, Optional, Union


# =============================
# Enums
# =============================

class HashAlgorithmName(Enum):
    """
    Hash algorithm used for both the partial fingerprint and the full hash.
    """
    BLAKE3 = "blake3"
    SHA256 = "sha256"
    XXH128 = "xxh128"

    @property
    def display_name(self) -> str:
        """Human-readable name for help text."""
        mapping = {
            HashAlgorithmName.BLAKE3: "BLAKE3",
            HashAlgorithmName.SHA256: "SHA-256",
            HashAlgorithmName.XXH128: "xxHash3-128",
        }
        return mapping.get(self, self.value)

    @property
    def is_cryptographic(self) -> bool:
        return self is not HashAlgorithmName.XXH128

    def __repr__(self) -> str:
        return self.value


class Stage(str, Enum):
    SCAN = "Scan + size grouping"
    PARTIAL = "Partial hash"
    FULL = "Full hash"

    @classmethod
    def get_all(cls):
        return [cls.SCAN, cls.PARTIAL, cls.FULL]


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileRecord:
    """
    A regular, non-empty file discovered by the scanner.
    Immutable: hashing stages never write back into it.
    """
    path: str
    size: int  # in bytes

    def __repr__(self):
        return f"<FileRecord path={self.path}, size={self.size}>"


@dataclass
class DuplicateGroup:
    """
    A group of files built by one pipeline stage.
    Depending on the stage the members are candidates (same size or same
    fingerprint) or confirmed duplicates (same full hash).
    `size` is None for a fingerprint group whose members differ in size.
    """
    size: Optional[int]
    files: List[FileRecord]

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]

    @property
    def reclaimable_bytes(self) -> int:
        """Bytes freed by keeping a single copy."""
        if not self.files or self.size is None:
            return 0
        return self.size * (len(self.files) - 1)

    def __repr__(self):
        return f"<DuplicateGroup size={self.size}, count={len(self.files)}>"


@dataclass
class RunMetrics:
    """
    Counters and timings describing one run.
    Field order is the order used by every report format.
    """
    total_files: int = 0
    total_bytes: int = 0
    candidate_groups: int = 0
    partial_groups: int = 0
    duplicate_groups: int = 0
    duplicate_files: int = 0
    reclaimable_bytes: int = 0
    bytes_hashed_partial: int = 0
    bytes_hashed_full: int = 0
    time_stage1_secs: float = 0.0
    time_stage2_secs: float = 0.0
    time_stage3_secs: float = 0.0
    time_total_secs: float = 0.0

    def to_dict(self) -> Dict[str, Union[int, float]]:
        return asdict(self)

    def print_summary(self) -> str:
        lines = [
            "📊 Run Statistics:",
            f"Total Execution Time: {self.time_total_secs:.3f}s\n",
            "Stage: GROUPS / TIME",
            f"📁 {Stage.SCAN.value}: {self.candidate_groups} / {self.time_stage1_secs:.3f}s",
            f"📄 {Stage.PARTIAL.value}: {self.partial_groups} / {self.time_stage2_secs:.3f}s",
            f"🔍 {Stage.FULL.value}: {self.duplicate_groups} / {self.time_stage3_secs:.3f}s",
        ]
        return "\n".join(lines)


"""
DTO for run parameters with built-in validation.
Interface-agnostic — used by the CLI and by library callers.
"""

@dataclass
class ScanParams:
    """Parameters for a duplicate search with validation."""
    root_dir: str
    max_workers: Optional[int] = None
    algorithm: HashAlgorithmName = field(default=HashAlgorithmName.BLAKE3)

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("Worker count must be at least 1")

        if isinstance(self.algorithm, str):
            try:
                self.algorithm = HashAlgorithmName(self.algorithm.strip().lower())
            except ValueError:
                raise ValueError(f"Unknown hash algorithm: '{self.algorithm}'")

    @property
    def worker_count(self) -> int:
        """Effective pool size: explicit value or the number of CPU cores."""
        return self.max_workers or os.cpu_count() or 1
