"""
Pytest fixtures and configuration for the test suite.

Provides temporary directories, generated sample PDFs, and temporary
configurations so tests never touch a real index.
"""

import json
import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Callable, Generator, List, Tuple

import sys
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))


# (font_size, x, y, text)
Line = Tuple[float, float, float, str]


def build_pdf(*pages: List[Line]) -> bytes:
    """Build a PDF with one page per argument, using Helvetica text lines."""
    return build_pdf_streams(*(
        "".join(
            f"BT /F1 {size} Tf {x} {y} Td ({text}) Tj ET\n"
            for size, x, y, text in lines
        ).encode("latin-1")
        for lines in pages
    ))


def build_pdf_streams(*contents: bytes) -> bytes:
    """
    Build a PDF with one page per raw content stream, with Helvetica as /F1.

    Object offsets in the cross-reference table are computed from the
    generated bytes, so the file opens without repair.
    """
    font_id = 3
    page_ids = [4 + 2 * i for i in range(len(contents))]

    kids = " ".join(f"{page_id} 0 R" for page_id in page_ids)
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {len(contents)} >>".encode("ascii"),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica /Encoding /WinAnsiEncoding >>",
    ]

    for page_id, content in zip(page_ids, contents):
        objects.append(
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Contents {page_id + 1} 0 R "
            f"/Resources << /Font << /F1 {font_id} 0 R >> >> >>".encode("ascii")
        )
        objects.append(
            f"<< /Length {len(content)} >>\nstream\n".encode("ascii")
            + content
            + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets = []

    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode("ascii") + body + b"\nendobj\n"

    xref_offset = len(out)
    size = len(objects) + 1

    out += f"xref\n0 {size}\n".encode("ascii")
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode("ascii")

    out += (
        f"trailer\n<< /Size {size} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode("ascii")

    return bytes(out)


TITLE_PAGE = [
    (24, 72, 700, "Design of Systems"),
    (10, 72, 650, "Search engines index documents quickly"),
    (10, 72, 636, "and return ranked results to their users"),
]

HELLO_PAGE = [
    (12, 100, 700, "Hello World"),
]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory, cleaned up after test.
    """
    tmp = tempfile.mkdtemp(prefix="pdfshelf_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_config(temp_dir: Path) -> Generator[Path, None, None]:
    """
    Create a temporary config.json for testing.

    Args:
        temp_dir: Temporary directory fixture.

    Yields:
        Path to temporary config file.
    """
    config_dir = temp_dir / "config"
    config_dir.mkdir()

    output_dir = temp_dir / "output"
    output_dir.mkdir()

    logs_dir = output_dir / "logs"
    logs_dir.mkdir()

    config_data = {
        "paths": {
            "database_path": str(output_dir / "test.db"),
            "logs_directory": str(logs_dir)
        },
        "extraction": {
            "primary_backend": "pypdf",
            "fallback_backend": "pdfplumber",
            "max_file_size_mb": 100,
            "max_text_mb": 10,
            "max_cover_mb": 5,
            "timeout_seconds": 60,
            "supported_extensions": [".pdf"]
        },
        "indexing": {
            "log_progress_every": 5
        },
        "title": {
            "dictionary_ratio": 0.2,
            "max_title_length": 80
        },
        "search": {
            "default_limit": 20,
            "snippet_tokens": 8,
            "tokenizer": "unicode61"
        },
        "logging": {
            "level": "DEBUG",
            "format": "%(levelname)s - %(message)s",
            "max_file_size_mb": 1,
            "backup_count": 1
        }
    }

    config_path = config_dir / "config.json"
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config_data, f)

    yield config_path


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    """
    Factory building PDF bytes from pages of (size, x, y, text) lines.

    Returns:
        The build_pdf function.
    """
    return build_pdf


@pytest.fixture
def make_pdf_streams() -> Callable[..., bytes]:
    """
    Factory building PDF bytes from raw page content streams.

    Returns:
        The build_pdf_streams function.
    """
    return build_pdf_streams


@pytest.fixture
def sample_pdf_content() -> bytes:
    """
    Create a one-page PDF with a 24pt title above 10pt body text.

    Returns:
        Bytes of the PDF.
    """
    return build_pdf(TITLE_PAGE)


@pytest.fixture
def sample_pdf(temp_dir: Path, sample_pdf_content: bytes) -> Path:
    """
    Create a sample PDF file for testing.

    Args:
        temp_dir: Temporary directory fixture.
        sample_pdf_content: PDF content fixture.

    Returns:
        Path to the created PDF file.
    """
    pdf_path = temp_dir / "sample.pdf"
    pdf_path.write_bytes(sample_pdf_content)
    return pdf_path


@pytest.fixture
def hello_pdf(temp_dir: Path) -> Path:
    """Create a one-line "Hello World" PDF file."""
    pdf_path = temp_dir / "hello.pdf"
    pdf_path.write_bytes(build_pdf(HELLO_PAGE))
    return pdf_path


@pytest.fixture
def sample_pdf_collection(temp_dir: Path, sample_pdf_content: bytes) -> Path:
    """
    Create PDF files in a directory structure.

    Holds three distinct documents, one exact copy of another, an
    uppercase extension and a non-PDF file.

    Args:
        temp_dir: Temporary directory fixture.
        sample_pdf_content: PDF content fixture.

    Returns:
        Path to the data directory containing PDFs.
    """
    data_dir = temp_dir / "data"
    data_dir.mkdir(exist_ok=True)

    subdir1 = data_dir / "folder1"
    subdir1.mkdir()

    subdir2 = data_dir / "folder2"
    subdir2.mkdir()

    (data_dir / "root_doc.pdf").write_bytes(sample_pdf_content)
    (subdir1 / "doc1.pdf").write_bytes(build_pdf(HELLO_PAGE))
    (subdir1 / "doc2.PDF").write_bytes(build_pdf(
        [(18, 72, 700, "Annual Report")],
        [(10, 72, 700, "Revenue grew in every region")]
    ))

    # same bytes as root_doc.pdf
    (subdir2 / "copy.pdf").write_bytes(sample_pdf_content)

    (data_dir / "readme.txt").write_text("Not a PDF")

    return data_dir


@pytest.fixture
def reset_config_singleton():
    """
    Reset the config singleton between tests.

    This ensures each test gets a fresh config instance.
    """
    from pdfshelf.core import config_loader
    config_loader._config_instance = None
    yield
    config_loader._config_instance = None


@pytest.fixture
def reset_logger_singleton():
    """
    Reset the logger initialization flag between tests.
    """
    from pdfshelf.core import logger
    logger._logger_initialized = False
    yield
    logger._logger_initialized = False


@pytest.fixture
def reset_db_singleton():
    """
    Reset the database manager singleton between tests.
    """
    from pdfshelf.database import connection
    connection._db_manager = None
    yield
    connection._db_manager = None


@pytest.fixture
def reset_dictionary_singleton():
    """
    Reset the shared dictionaries between tests.
    """
    from pdfshelf.title import dictionary
    dictionary._dictionaries.clear()
    yield
    dictionary._dictionaries.clear()


@pytest.fixture
def configured_db(temp_config, reset_config_singleton, reset_db_singleton):
    """
    Set up a fully configured database using temp config.

    This fixture initializes config with temp paths and resets
    both config and db singletons, ready for schema operations.
    """
    from pdfshelf.core.config_loader import get_config
    get_config(temp_config)
    yield
    # Cleanup happens via reset fixtures
