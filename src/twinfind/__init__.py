"""
twinfind — finds groups of byte-for-byte identical files.

Core features:
- Staged filtering: size → head+tail fingerprint → full content hash
- Data-parallel scanning and hashing on a thread pool
- BLAKE3 (default), SHA-256 or xxHash3-128 digests
- Run metrics: counts, bytes read per stage and per-stage timings
- CLI with txt / csv / json reports
"""

# Get version
from importlib.metadata import version as _version, PackageNotFoundError

try:
    __version__ = _version("twinfind")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API — only what users should import directly
from twinfind.commands import DeduplicationCommand
from twinfind.core import ScanParams, HashAlgorithmName, FileRecord, DuplicateGroup, RunMetrics
from twinfind.utils.convert_utils import ConvertUtils
from twinfind.services.report_service import ReportService, OutputFormat

__all__ = [
    "DeduplicationCommand",
    "ScanParams",
    "HashAlgorithmName",
    "FileRecord",
    "DuplicateGroup",
    "RunMetrics",
    "ConvertUtils",
    "ReportService",
    "OutputFormat",
    "__version__",
]
