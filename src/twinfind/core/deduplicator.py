"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

deduplicator.py
Implements the staged duplicate search over FileRecord objects:
    size → partial (head + tail) hash → full hash
Stages run strictly one after another; work inside a stage is parallel.
"""
import logging
from typing import List, Optional

from twinfind.core.grouper import FileGrouperImpl
from twinfind.core.interfaces import Deduplicator, ProgressCallback
from twinfind.core.metrics import MetricsCollector
from twinfind.core.models import FileRecord, DuplicateGroup, Stage
from twinfind.core.stages import SizeStageImpl, PartialHashStage, FullHashStage

logger = logging.getLogger(__name__)


# =============================
# Main Deduplicator Class
# =============================
class DeduplicatorImpl(Deduplicator):
    """
    Runs the three grouping stages and feeds their results to a MetricsCollector.
    """
    def __init__(self, grouper: FileGrouperImpl = None):
        self.grouper = grouper or FileGrouperImpl()

    def find_duplicates(
        self,
        files: List[FileRecord],
        metrics: Optional[MetricsCollector] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        """
        Main pipeline.
        Args:
            files: Records produced by the scanner
            metrics: Collector to update; a private one is used when omitted
            progress_callback: Reports progress per stage.
        Returns:
            Confirmed duplicate groups, largest files first
        """
        metrics = metrics or MetricsCollector()

        with metrics.time_stage(Stage.SCAN):
            groups = SizeStageImpl(self.grouper).process(files, progress_callback=progress_callback)
        metrics.record_candidates(groups)
        logger.info(f"{len(groups)} groups of files with identical sizes")

        with metrics.time_stage(Stage.PARTIAL):
            groups = PartialHashStage(self.grouper).process(groups, progress_callback=progress_callback)
        metrics.record_partial(groups)
        logger.info(f"{len(groups)} groups after partial hash check")

        with metrics.time_stage(Stage.FULL):
            groups = FullHashStage(self.grouper).process(groups, progress_callback=progress_callback)
        logger.info(f"{len(groups)} groups of duplicate files")

        # Largest first, ties broken by path for stable reports
        groups.sort(key=lambda g: (-g.size, g.files[0].path))
        metrics.record_duplicates(groups)
        return groups
