"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements parallel directory scanning.
Features:
- Iterative traversal: each directory is one task on a thread pool, no recursion
- Symbolic links (files and directories) are never followed
- Zero-byte files are dropped here, not later
- Unreadable entries and subdirectories are skipped; only the root can fail the scan
"""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, FIRST_COMPLETED, wait
from pathlib import Path
from typing import List, Optional, Tuple

from twinfind.core.interfaces import FileScanner, ProgressCallback
from twinfind.core.models import FileRecord, Stage

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Scans a directory tree and returns a record per accessible regular file.

    Attributes:
        root_dir: Root directory to scan
        max_workers: Size of the thread pool reading directories and metadata
    """

    def __init__(self, root_dir: str, max_workers: Optional[int] = None):
        self.root_dir = root_dir
        self.max_workers = max_workers or os.cpu_count() or 1

    def scan(self, progress_callback: Optional[ProgressCallback] = None) -> List[FileRecord]:
        """
        Walks the tree with one pool task per directory.
        Results arrive in no particular order and are collected before returning.
        """
        logger.debug(f"Root directory: {self.root_dir}")
        root_path = Path(self.root_dir)

        if not root_path.exists():
            error_msg = f"Directory does not exist: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)
        if not root_path.is_dir():
            error_msg = f"Not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)

        start_time = time.time()

        # The root is listed synchronously so that its failure is fatal
        try:
            found_files, subdirs = self._list_directory(str(root_path))
        except OSError as e:
            error_msg = f"Cannot read directory {self.root_dir}: {e}"
            logger.error(error_msg)
            raise RuntimeError(error_msg) from e

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            pending = {executor.submit(self._scan_directory, d) for d in subdirs}
            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    dir_files, dir_subdirs = future.result()
                    found_files.extend(dir_files)
                    pending.update(executor.submit(self._scan_directory, d) for d in dir_subdirs)

                if progress_callback:
                    progress_callback(Stage.SCAN.value, len(found_files), None)

        elapsed_time = time.time() - start_time
        logger.debug(f"Total scan time: {elapsed_time:.2f} seconds")
        logger.info(f"Scan completed. Found {len(found_files)} non-empty files.")
        return found_files

    def _scan_directory(self, path: str) -> Tuple[List[FileRecord], List[str]]:
        """Lists a non-root directory; an unreadable one counts as empty."""
        try:
            return self._list_directory(path)
        except OSError as e:
            logger.debug(f"Skipping inaccessible directory {path}: {e}")
            return [], []

    def _list_directory(self, path: str) -> Tuple[List[FileRecord], List[str]]:
        """
        Reads one directory level.
        Returns:
            (records for regular files in it, paths of its real subdirectories)
        """
        files = []
        subdirs = []
        with os.scandir(path) as entries:
            for entry in entries:
                try:
                    if entry.is_symlink():
                        logger.debug(f"Skipping symbolic link: {entry.path}")
                        continue
                    if entry.is_dir(follow_symlinks=False):
                        subdirs.append(entry.path)
                        continue
                except OSError as e:
                    logger.debug(f"Could not check type of {entry.path}: {e}")
                    continue

                record = self._process_entry(entry)
                if record:
                    files.append(record)
        return files, subdirs

    @staticmethod
    def _process_entry(entry: os.DirEntry) -> Optional[FileRecord]:
        """
        Returns a FileRecord if the entry is a readable, non-empty regular file.
        """
        try:
            if not entry.is_file(follow_symlinks=False):
                return None
            size = entry.stat(follow_symlinks=False).st_size
        except OSError as e:
            logger.debug(f"Could not get size of {entry.path}: {e}")
            return None

        if size == 0:
            logger.debug(f"Skipping zero-byte file: {entry.path}")
            return None

        return FileRecord(path=entry.path, size=size)
