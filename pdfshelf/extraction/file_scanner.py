"""
File scanner for recursive PDF discovery.

Expands a mix of file and directory arguments into the PDF files to
index, with generator-based iteration and filtering by extension and size.
Walk errors are logged and skipped so one unreadable directory does not
stop a scan.
"""

import os
from pathlib import Path
from typing import Iterable, Iterator, List, Union

from ..core import get_config, get_logger
from ..utils import get_file_size_mb

logger = get_logger(__name__)


class FileScanner:
    """
    Discovers PDF files under a set of paths.

    Uses generator-based iteration for memory efficiency when
    processing large collections.
    """

    def __init__(
        self,
        extensions: List[str] = None,
        max_file_size_mb: float = None
    ):
        """
        Initialize the file scanner.

        Args:
            extensions: List of file extensions to include (e.g., [".pdf"]).
                        Compared case-insensitively.
            max_file_size_mb: Skip files larger than this size.
        """
        config = get_config()

        self.extensions = extensions or config.extraction.supported_extensions
        self.max_file_size_mb = max_file_size_mb or config.extraction.max_file_size_mb

        self.extensions = [ext.lower() for ext in self.extensions]

    def scan(self, paths: Iterable[Union[str, Path]]) -> Iterator[Path]:
        """
        Yield the matching files under paths.

        Files given directly are yielded if they match; directories are
        walked recursively.

        Args:
            paths: Files and directories to scan.

        Yields:
            Path objects for each matching file.
        """
        for path in paths:
            path = Path(path)

            if path.is_dir():
                yield from self._walk(path)
            elif path.exists():
                if self._accept(path):
                    yield path
            else:
                logger.error(f"Path does not exist: {path}")

    def _walk(self, root: Path) -> Iterator[Path]:
        """Recursively yield matching files under root."""
        logger.info(f"Scanning directory: {root}")

        file_count = 0

        for dirpath, dirnames, filenames in os.walk(root, onerror=self._on_walk_error):
            dirnames.sort()

            for filename in sorted(filenames):
                filepath = Path(dirpath) / filename

                if not self._accept(filepath):
                    continue

                file_count += 1

                if file_count % 1000 == 0:
                    logger.info(f"Discovered {file_count} files...")

                yield filepath

        logger.info(f"Scan complete: {file_count} files found in {root}")

    def _accept(self, filepath: Path) -> bool:
        """Return True if filepath has a supported extension and size."""
        if filepath.suffix.lower() not in self.extensions:
            return False

        try:
            size_mb = get_file_size_mb(filepath)
        except OSError as e:
            logger.warning(f"Cannot access file {filepath}: {e}")
            return False

        if size_mb > self.max_file_size_mb:
            logger.debug(f"Skipping large file ({size_mb}MB): {filepath.name}")
            return False

        return True

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.warning(f"walk error {error.filename}: {error}")
