"""
Unified command orchestrator for the duplicate search.
This is the SINGLE entry point for the engine — used by the CLI and by library callers.
"""
import logging
from typing import List, Optional, Tuple

from twinfind.core.deduplicator import DeduplicatorImpl
from twinfind.core.grouper import FileGrouperImpl
from twinfind.core.hasher import HasherImpl, get_algorithm
from twinfind.core.interfaces import ProgressCallback
from twinfind.core.metrics import MetricsCollector
from twinfind.core.models import DuplicateGroup, FileRecord, RunMetrics, ScanParams, Stage
from twinfind.core.scanner import FileScannerImpl

logger = logging.getLogger(__name__)


class DeduplicationCommand:
    """
    Orchestrates the whole run:
    1. Scan the root directory
    2. Run size → partial hash → full hash
    3. Finalize metrics

    Usage:
        params = ScanParams(root_dir="/data")
        groups, metrics = DeduplicationCommand().execute(params)
    """

    def __init__(self):
        self.files: List[FileRecord] = []

    def execute(
            self,
            params: ScanParams,
            progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[DuplicateGroup], RunMetrics]:
        """
        Execute the duplicate search with given parameters.

        Args:
            params: Validated run parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Tuple of (duplicate_groups, metrics)

        Raises:
            RuntimeError: If the root directory cannot be scanned
        """
        workers = params.worker_count
        hasher = HasherImpl(get_algorithm(params.algorithm))
        grouper = FileGrouperImpl(hasher, max_workers=workers)
        scanner = FileScannerImpl(params.root_dir, max_workers=workers)

        logger.debug(f"Starting run: root={params.root_dir}, workers={workers}, "
                     f"algorithm={params.algorithm.value}")

        metrics = MetricsCollector(window=hasher.window)
        metrics.start_run()

        with metrics.time_stage(Stage.SCAN):
            self.files = scanner.scan(progress_callback=progress_callback)
        metrics.record_scan(self.files)

        groups = DeduplicatorImpl(grouper).find_duplicates(
            self.files,
            metrics=metrics,
            progress_callback=progress_callback
        )

        return groups, metrics.finish()
