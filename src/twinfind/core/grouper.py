"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Implements file grouping strategies using FileRecord objects and Hasher.

Hash keys are computed on a thread pool; every worker returns an independent
(file, key) pair and the grouping dict is filled afterwards on the calling
thread, so no map is ever mutated concurrently.
"""

import logging
import os
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from typing import List, Dict, Tuple, Any, Callable, Iterable, Optional

from twinfind.core.interfaces import FileGrouper, Hasher
from twinfind.core.models import FileRecord
from twinfind.core.hasher import HasherImpl

logger = logging.getLogger(__name__)

_FAILED = object()


class FileGrouperImpl(FileGrouper):
    """
    A concrete implementation of FileGrouper.
    Uses an injected Hasher instance for flexibility and testability.
    """

    def __init__(self, hasher: Hasher = None, max_workers: Optional[int] = None):
        self.hasher = hasher or HasherImpl()
        self.max_workers = max_workers or os.cpu_count() or 1

    def group_by_size(self, files: List[FileRecord]) -> Dict[int, List[FileRecord]]:
        """Groups files by their size. Pure and sequential, no I/O."""
        pairs = ((f, f.size) for f in files)
        return self._fold(pairs)

    def group_by_partial_hash(
        self,
        files: List[FileRecord],
        on_progress: Optional[Callable[[int], None]] = None
    ) -> Dict[str, List[FileRecord]]:
        """Groups files by head+tail fingerprint alone; a group may mix sizes."""
        return self._group_by(files, self.hasher.compute_partial_hash, on_progress)

    def group_by_full_hash(
        self,
        files: List[FileRecord],
        on_progress: Optional[Callable[[int], None]] = None
    ) -> Dict[str, List[FileRecord]]:
        """Groups files by full content hash."""
        return self._group_by(files, self.hasher.compute_full_hash, on_progress)

    def _group_by(
        self,
        files: List[FileRecord],
        key_func: Callable[[FileRecord], Any],
        on_progress: Optional[Callable[[int], None]] = None
    ) -> Dict[Any, List[FileRecord]]:
        """
        Computes keys in parallel, then groups them on this thread.
        Files whose key raised OSError are left out.
        Args:
            files: List of files to group
            key_func: Function that computes a hashable key from a FileRecord
            on_progress: Called with the number of files handled so far
        Returns:
            Dict[key, List[FileRecord]] with 2+ files per key
        """
        if not files:
            return {}

        def safe_key(file: FileRecord):
            try:
                return file, key_func(file)
            except OSError as e:
                logger.debug(f"Skipping {file.path}: {e}")
                return file, _FAILED

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            pairs = list(self._track(executor.map(safe_key, files), on_progress))

        skipped_files = sum(1 for _, key in pairs if key is _FAILED)
        if skipped_files > 0:
            logger.warning(f"Skipped {skipped_files} files due to read errors")

        return self._fold((f, key) for f, key in pairs if key is not _FAILED)

    @staticmethod
    def _track(pairs: Iterable, on_progress: Optional[Callable[[int], None]]):
        processed = 0
        for pair in pairs:
            processed += 1
            if on_progress:
                on_progress(processed)
            yield pair

    @staticmethod
    def _fold(pairs: Iterable[Tuple[FileRecord, Any]]) -> Dict[Any, List[FileRecord]]:
        """Sequential reduce into key → files, dropping keys held by a single file."""
        groups = defaultdict(list)
        for file, key in pairs:
            groups[key].append(file)

        return {key: group for key, group in groups.items() if len(group) >= 2}
