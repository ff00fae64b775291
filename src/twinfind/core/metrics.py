"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/metrics.py
Collects counters and per-stage timings for one run.
Only reads what the stages already produced; never touches pipeline results.
"""

import time
from contextlib import contextmanager
from typing import Callable, Dict, List, Optional

from twinfind.core.hasher import HasherImpl, PARTIAL_WINDOW
from twinfind.core.models import DuplicateGroup, FileRecord, RunMetrics, Stage


class MetricsCollector:
    """
    Accumulates a RunMetrics record while the pipeline runs.

    Usage:
        metrics = MetricsCollector()
        metrics.start_run()
        with metrics.time_stage(Stage.SCAN):
            files = scanner.scan()
        metrics.record_scan(files)
        ...
        result = metrics.finish()
    """

    def __init__(self, window: int = PARTIAL_WINDOW, clock: Callable[[], float] = time.perf_counter):
        self.window = window
        self._clock = clock
        self._run_start: Optional[float] = None
        self._stage_times: Dict[Stage, float] = {stage: 0.0 for stage in Stage.get_all()}
        self.metrics = RunMetrics()

    def start_run(self) -> None:
        self._run_start = self._clock()

    @contextmanager
    def time_stage(self, stage: Stage):
        """Adds the wall-clock time of the block to the stage total."""
        start_time = self._clock()
        try:
            yield
        finally:
            self._stage_times[stage] += self._clock() - start_time

    def record_scan(self, files: List[FileRecord]) -> None:
        self.metrics.total_files = len(files)
        self.metrics.total_bytes = sum(f.size for f in files)

    def record_candidates(self, groups: List[DuplicateGroup]) -> None:
        """Size groups entering the partial hash stage."""
        self.metrics.candidate_groups = len(groups)
        self.metrics.bytes_hashed_partial = sum(
            HasherImpl.partial_bytes(f.size, self.window) for g in groups for f in g.files
        )

    def record_partial(self, groups: List[DuplicateGroup]) -> None:
        """Fingerprint groups entering the full hash stage."""
        self.metrics.partial_groups = len(groups)
        self.metrics.bytes_hashed_full = sum(f.size for g in groups for f in g.files)

    def record_duplicates(self, groups: List[DuplicateGroup]) -> None:
        self.metrics.duplicate_groups = len(groups)
        self.metrics.duplicate_files = sum(len(g.files) for g in groups)
        self.metrics.reclaimable_bytes = sum(g.reclaimable_bytes for g in groups)

    def stage_time(self, stage: Stage) -> float:
        return self._stage_times[stage]

    def finish(self) -> RunMetrics:
        """Copies the stage timings into the record and closes the run clock."""
        self.metrics.time_stage1_secs = self._stage_times[Stage.SCAN]
        self.metrics.time_stage2_secs = self._stage_times[Stage.PARTIAL]
        self.metrics.time_stage3_secs = self._stage_times[Stage.FULL]
        if self._run_start is not None:
            self.metrics.time_total_secs = self._clock() - self._run_start
        else:
            self.metrics.time_total_secs = sum(self._stage_times.values())
        return self.metrics
