"""
Main indexing pipeline for pdfshelf.

Orchestrates the indexing workflow: scanning paths, reading each PDF once,
skipping content already indexed, extracting text, cover, page count and
title in parallel, and storing the result with progress tracking.
"""

from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from ..core import (
    get_config,
    get_logger,
    ExtractionError,
    ReaderAbortError,
    ReaderInitError,
    MalformedEncodingAbort
)
from ..database import init_schema, reset_schema, PDFRepository
from ..extraction import FileScanner, PDFDocument, PDFExtractor
from ..title import TitleEngine

logger = get_logger(__name__)


@dataclass
class IndexingStats:
    """Statistics from an indexing run."""
    files_scanned: int = 0
    files_indexed: int = 0
    files_duplicate: int = 0
    files_failed: int = 0
    pages_indexed: int = 0
    titles_found: int = 0
    title_errors: int = 0
    errors: List[str] = field(default_factory=list)


@dataclass
class ExtractedDocument:
    """Everything extracted from one PDF, ready to be stored."""
    path: Path
    sig: str
    pages: int
    text: Optional[str]
    cover: bytes
    title: str


class IndexBuilder:
    """
    Orchestrates the PDF indexing pipeline.

    Documents are processed one at a time; the extraction tasks of one
    document run side by side under a shared timeout. A failing document
    is logged and counted, never fatal to the run.
    """

    def __init__(
        self,
        reset: bool = False,
        progress_callback: Callable[[int, int, str], None] = None,
        engine: TitleEngine = None
    ):
        """
        Initialize the index builder.

        Args:
            reset: If True, drop and recreate the database schema.
            progress_callback: Optional callback(current, total, filename)
                              called during indexing for progress updates.
            engine: Title engine. Built from config when omitted.
        """
        self.config = get_config()
        self.reset = reset
        self.progress_callback = progress_callback

        self.scanner = FileScanner()
        self.extractor = PDFExtractor()
        self.repository = PDFRepository()

        # built here, before any worker thread reads the dictionary
        self.engine = engine or TitleEngine(settings=self.config.title)

        extraction = self.config.extraction
        self.timeout = extraction.timeout_seconds
        self.max_text_bytes = extraction.max_text_mb * 1024 * 1024
        self.max_cover_bytes = extraction.max_cover_mb * 1024 * 1024
        self.log_every = self.config.indexing.log_progress_every

    def add_paths(self, paths: Iterable[Union[str, Path]]) -> IndexingStats:
        """
        Index every PDF found under paths.

        Args:
            paths: Files and directories to add.

        Returns:
            IndexingStats with counts and any errors encountered.
        """
        stats = IndexingStats()

        logger.info("Starting indexing pipeline")

        if self.reset:
            reset_schema()
        else:
            init_schema()

        pdf_files = list(self.scanner.scan(paths))
        stats.files_scanned = len(pdf_files)

        logger.info(f"Found {stats.files_scanned} PDF files to process")

        for i, filepath in enumerate(pdf_files):
            if self.progress_callback:
                self.progress_callback(i + 1, stats.files_scanned, filepath.name)

            try:
                self._add_file(filepath, stats)

            except ExtractionError as e:
                stats.files_failed += 1
                error_msg = f"{filepath}: {e.message}"
                stats.errors.append(error_msg)
                logger.warning(f"Failed to extract: {error_msg}")

            except OSError as e:
                stats.files_failed += 1
                error_msg = f"{filepath}: {e}"
                stats.errors.append(error_msg)
                logger.error(f"Cannot read file: {error_msg}")

            if (i + 1) % self.log_every == 0:
                logger.info(
                    f"Progress: {i + 1}/{stats.files_scanned} files "
                    f"({stats.files_indexed} indexed, {stats.files_failed} failed)"
                )

        logger.info(
            f"Indexing complete: {stats.files_indexed} files indexed, "
            f"{stats.files_duplicate} duplicates, {stats.files_failed} failures"
        )

        return stats

    def _add_file(self, filepath: Path, stats: IndexingStats) -> None:
        """Index one file, updating stats."""
        pdf = PDFDocument.from_path(filepath)
        sig = pdf.signature()

        if self.repository.exists_signature(sig):
            stats.files_duplicate += 1
            logger.info(f"Duplicate: {filepath}")
            return

        document = self.extract_document(filepath, pdf.data, sig, stats)

        self.repository.insert(
            path=document.path,
            pages=document.pages,
            sig=document.sig,
            text=document.text,
            title=document.title,
            cover=document.cover
        )

        stats.files_indexed += 1
        stats.pages_indexed += document.pages
        if document.title:
            stats.titles_found += 1

    def extract_document(
        self,
        filepath: Path,
        data: bytes,
        sig: str,
        stats: IndexingStats = None
    ) -> ExtractedDocument:
        """
        Run the extraction tasks of one document in parallel.

        Args:
            filepath: Path of the PDF, for records and messages.
            data: Raw PDF bytes.
            sig: Signature of data.
            stats: Optional stats to count title failures in.

        Returns:
            The extracted document.

        Raises:
            ExtractionError: If text, cover or page count extraction fails,
                             or the tasks exceed the timeout.
        """
        executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="extract")

        try:
            text_future = executor.submit(self.extractor.extract_text, data, self.max_text_bytes)
            cover_future = executor.submit(self.extractor.cover, data, self.max_cover_bytes)
            pages_future = executor.submit(self.extractor.page_count, data)
            title_future = executor.submit(self.extractor.extract_title, data, self.engine)

            futures = [text_future, cover_future, pages_future, title_future]
            _, not_done = wait(futures, timeout=self.timeout)

            if not_done:
                raise ExtractionError(
                    f"Extraction timed out after {self.timeout}s",
                    filepath=str(filepath)
                )

            text = self._result(text_future, filepath)
            cover = self._result(cover_future, filepath)
            pages = self._result(pages_future, filepath)
            title = self._title_result(title_future, filepath, stats)

        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        return ExtractedDocument(
            path=filepath,
            sig=sig,
            pages=pages,
            text=text,
            cover=cover,
            title=title
        )

    @staticmethod
    def _result(future, filepath: Path):
        """Result of an extraction task, tagged with the file on failure."""
        try:
            return future.result()
        except ExtractionError as e:
            if e.filepath in (None, "<bytes>"):
                e.filepath = str(filepath)
            raise

    @staticmethod
    def _title_result(future, filepath: Path, stats: Optional[IndexingStats]) -> str:
        """Title of a document; reader failures degrade to an empty title."""
        try:
            return future.result()

        except MalformedEncodingAbort as e:
            logger.info(f"title error {filepath}: {e.message}")

        except (ReaderInitError, ReaderAbortError) as e:
            logger.warning(f"title error {filepath}: {e.message}")

        if stats is not None:
            stats.title_errors += 1
        return ""
