"""
pdfplumber-based extraction backend.

Better handling of complex layouts and multi-column documents, and the
source of positioned glyph runs for title inference. Slower than pypdf
but more accurate for difficult PDFs.
"""

import re
from pathlib import Path
from typing import List, Tuple

import pdfplumber

from ..core import (
    get_logger,
    ExtractionError,
    ReaderInitError,
    ReaderAbortError,
    MalformedEncodingAbort
)
from ..title import TextRun
from ..title.sanitizer import REPLACEMENT_CHAR
from .source import PDFSource, open_source, source_name

logger = get_logger(__name__)


# Reader messages that point at a corrupt encoded string literal
MALFORMED_ENCODING_MARKERS = (
    "malformed hex string",
    "non-hexadecimal digit",
    "odd-length string",
    "invalid hex",
)

# pdfminer renders a glyph without a unicode mapping as "(cid:N)"
UNMAPPED_GLYPH_PATTERN = re.compile(r"^\(cid:\d+\)$")


class PDFPlumberBackend:
    """
    PDF extraction using the pdfplumber library.

    Provides more accurate text extraction for complex layouts and
    exposes the first page as positioned text runs.
    """

    name = "pdfplumber"

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
            with pdfplumber.open(open_source(source)) as pdf:
                total_pages = len(pdf.pages)
                logger.debug(f"Processing {total_pages} pages: {name}")

                for page_num, page in enumerate(pdf.pages, start=1):
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

        except Exception as e:
            raise ExtractionError(
                f"pdfplumber extraction failed: {e}",
                filepath=name
            )

        return results

    def first_page_runs(self, source: PDFSource) -> List[TextRun]:
        """
        Read the glyph runs of the first page, in content-stream order.

        Every failure of the underlying reader is turned into a typed error
        here and nowhere else: opening failures become ReaderInitError,
        failures while walking the page become ReaderAbortError, or
        MalformedEncodingAbort when a corrupt string literal is the cause.
        A document without pages or a page without text yields no runs.

        Args:
            source: Path to the PDF file or its raw bytes.

        Returns:
            One TextRun per glyph.

        Raises:
            ReaderInitError: If no reader can be built from source.
            ReaderAbortError: If the reader aborts on the first page.
        """
        name = source_name(source)

        try:
            pdf = pdfplumber.open(open_source(source))
        except Exception as e:
            raise ReaderInitError(f"can't init reader: {e}", filepath=name)

        try:
            with pdf:
                if not pdf.pages:
                    return []
                return [self._char_to_run(char) for char in pdf.pages[0].chars]

        except Exception as e:
            raise self._abort_error(e, name)

    @staticmethod
    def _char_to_run(char: dict) -> TextRun:
        """Convert a pdfplumber char object to a TextRun."""
        x0 = float(char["x0"])
        matrix = char.get("matrix")

        # the text matrix carries the baseline, y0 is the glyph box bottom
        y = float(matrix[5]) if matrix else float(char["y0"])

        text = char.get("text") or ""
        if UNMAPPED_GLYPH_PATTERN.match(text):
            text = REPLACEMENT_CHAR

        return TextRun(
            text=text,
            font=char.get("fontname") or "",
            font_size=float(char.get("size") or 0.0),
            x=x0,
            y=y,
            width=float(char.get("width", float(char["x1"]) - x0))
        )

    @staticmethod
    def _abort_error(error: Exception, name: str) -> ReaderAbortError:
        """Classify an abort raised while walking the first page."""
        message = str(error) or error.__class__.__name__

        if any(marker in message.lower() for marker in MALFORMED_ENCODING_MARKERS):
            return MalformedEncodingAbort(
                "reader aborted: malformed hex string",
                filepath=name,
                details={"reason": message}
            )

        return ReaderAbortError(
            f"reader aborted: {message}",
            filepath=name,
            details={"reason": message, "type": error.__class__.__name__}
        )


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        print("Usage: python -m pdfshelf.extraction.pdfplumber_backend <pdf_file>")
        sys.exit(1)

    pdf_path = Path(sys.argv[1])
    if not pdf_path.exists():
        print(f"File not found: {pdf_path}")
        sys.exit(1)

    backend = PDFPlumberBackend()

    try:
        runs = backend.first_page_runs(pdf_path)
        print(f"First page of {pdf_path.name}: {len(runs)} runs")

        for run in runs[:20]:
            print(f"  {run.font_size:6.2f} {run.font:<30} ({run.x:7.2f}, {run.y:7.2f}) {run.text!r}")

    except ExtractionError as e:
        print(f"Extraction error: {e.message}")
