"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Pipeline stages of the duplicate search.

CLASS HIERARCHY
---------------
SizeStageImpl      : Groups scanned files by exact size
HashStageBase      : Shared flatten → parallel hash → regroup logic
PartialHashStage   : Head+tail fingerprint pre-filter (groups may mix sizes)
FullHashStage      : Full-content confirmation; its output is final

STAGE CONTRACTS
---------------
Each stage implements `process()`:
  • Accepts the complete output of the previous stage
  • Returns groups of 2+ files; membership only ever shrinks, the
    number of groups may grow when a fingerprint group splits
  • Reports progress via callback (stage name, processed count, total count)
    from the calling thread only
"""

from typing import List, Optional

from twinfind.core.grouper import FileGrouperImpl
from twinfind.core.interfaces import ProgressCallback
from twinfind.core.models import FileRecord, DuplicateGroup, Stage


class SizeStageImpl:
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(
            self,
            files: List[FileRecord],
            progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        """
        Group by file size.
        Returns list of DuplicateGroups with 2+ files of same size.
        """
        size_groups = self.grouper.group_by_size(files)
        groups = [
            DuplicateGroup(size=size, files=files_list)
            for size, files_list in size_groups.items()
        ]

        if progress_callback:
            total_files = len(files)
            progress_callback(Stage.SCAN.value, total_files, total_files)

        return groups


class HashStageBase:
    """
    Base class for hash stages.
    All files of all incoming groups are hashed as one batch, so the pool
    stays busy regardless of how the files are spread across groups.
    """

    stage = None

    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def get_stage_name(self) -> str:
        return self.stage.value

    def _group_files(self, files: List[FileRecord], on_progress) -> List[DuplicateGroup]:
        raise NotImplementedError

    def process(
            self,
            groups: List[DuplicateGroup],
            progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        files = [f for group in groups for f in group.files]
        total_files = len(files)

        def on_progress(processed: int) -> None:
            if progress_callback:
                progress_callback(self.get_stage_name(), processed, total_files)

        return self._group_files(files, on_progress)


class PartialHashStage(HashStageBase):
    stage = Stage.PARTIAL

    def _group_files(self, files: List[FileRecord], on_progress) -> List[DuplicateGroup]:
        hash_groups = self.grouper.group_by_partial_hash(files, on_progress=on_progress)
        return [
            DuplicateGroup(size=self._common_size(files_list), files=files_list)
            for files_list in hash_groups.values()
        ]

    @staticmethod
    def _common_size(files: List[FileRecord]) -> Optional[int]:
        """Shared size of the members, or None when a fingerprint spans sizes."""
        sizes = {f.size for f in files}
        return sizes.pop() if len(sizes) == 1 else None


class FullHashStage(HashStageBase):
    stage = Stage.FULL

    def _group_files(self, files: List[FileRecord], on_progress) -> List[DuplicateGroup]:
        hash_groups = self.grouper.group_by_full_hash(files, on_progress=on_progress)
        return [
            DuplicateGroup(size=files_list[0].size, files=sorted(files_list, key=lambda f: f.path))
            for files_list in hash_groups.values()
        ]
