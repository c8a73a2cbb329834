"""
pypdf-based extraction backend.

Fast text extraction suitable for most standard PDF files, plus page
counting and cover generation. Handles encryption detection and empty
password decryption.
"""

import io
from pathlib import Path
from typing import List, Tuple

from pypdf import PdfReader, PdfWriter

from ..core import get_logger, ExtractionError
from .source import PDFSource, open_source, source_name

logger = get_logger(__name__)


# US Letter, in points
BLANK_PAGE_WIDTH = 612
BLANK_PAGE_HEIGHT = 792


class PyPDFBackend:
    """
    PDF extraction using the pypdf library.

    Provides fast text extraction, page counting and first-page covers
    with basic encryption handling.
    """

    name = "pypdf"

    def _open_reader(self, source: PDFSource) -> PdfReader:
        """Open a reader, decrypting with an empty password if needed."""
        reader = PdfReader(open_source(source))

        if reader.is_encrypted:
            try:
                reader.decrypt("")
            except Exception:
                raise ExtractionError(
                    "PDF is encrypted and cannot be decrypted",
                    filepath=source_name(source)
                )

        return reader

    def extract(self, source: PDFSource) -> List[Tuple[int, str]]:
        """
        Extract text from all pages of a PDF.

        Args:
            source: Path to the PDF file or its raw bytes.

        Returns:
            List of (page_number, text) tuples. Page numbers are 1-indexed.

        Raises:
            ExtractionError: If extraction fails completely.
        """
        name = source_name(source)
        results = []

        try:
            reader = self._open_reader(source)

            total_pages = len(reader.pages)
            logger.debug(f"Processing {total_pages} pages: {name}")

            for page_num, page in enumerate(reader.pages, start=1):
                try:
                    text = page.extract_text() or ""

                    if text.strip():
                        results.append((page_num, text))
                    else:
                        logger.debug(f"Empty page {page_num} in {name}")

                except Exception as e:
                    logger.warning(
                        f"Failed to extract page {page_num} from {name}: {e}"
                    )

        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(
                f"pypdf extraction failed: {e}",
                filepath=name
            )

        return results

    def page_count(self, source: PDFSource) -> int:
        """
        Count the pages of a PDF.

        Args:
            source: Path to the PDF file or its raw bytes.

        Returns:
            Number of pages.
        """
        try:
            return len(self._open_reader(source).pages)
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(
                f"Failed to count pages: {e}",
                filepath=source_name(source)
            )

    def cover(self, source: PDFSource, max_bytes: int = None) -> bytes:
        """
        Build a single-page PDF holding the first page of source.

        Args:
            source: Path to the PDF file or its raw bytes.
            max_bytes: Largest acceptable cover. Bigger covers are replaced
                       by a blank page.

        Returns:
            PDF bytes of the cover.

        Raises:
            ExtractionError: If the document has no page or cannot be read.
        """
        name = source_name(source)

        try:
            reader = self._open_reader(source)

            if len(reader.pages) == 0:
                raise ExtractionError("PDF has no pages", filepath=name)

            writer = PdfWriter()
            writer.add_page(reader.pages[0])
            data = self._write(writer)

        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(
                f"Failed to build cover: {e}",
                filepath=name
            )

        if max_bytes is not None and len(data) > max_bytes:
            logger.debug(f"Cover of {name} is {len(data)} bytes, using blank page")
            return self.blank_page()

        return data

    def blank_page(self) -> bytes:
        """Single blank page PDF used when no usable cover exists."""
        writer = PdfWriter()
        writer.add_blank_page(width=BLANK_PAGE_WIDTH, height=BLANK_PAGE_HEIGHT)
        return self._write(writer)

    @staticmethod
    def _write(writer: PdfWriter) -> bytes:
        """Serialize a writer to bytes."""
        buffer = io.BytesIO()
        writer.write(buffer)
        return buffer.getvalue()


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        print("Usage: python -m pdfshelf.extraction.pypdf_backend <pdf_file>")
        sys.exit(1)

    pdf_path = Path(sys.argv[1])
    if not pdf_path.exists():
        print(f"File not found: {pdf_path}")
        sys.exit(1)

    backend = PyPDFBackend()

    try:
        pages = backend.extract(pdf_path)
        print(f"Extracted {len(pages)} pages from {pdf_path.name}")
        print(f"Page count: {backend.page_count(pdf_path)}")
        print(f"Cover size: {len(backend.cover(pdf_path))} bytes")

    except ExtractionError as e:
        print(f"Extraction error: {e.message}")
