"""
PDF input handling shared by the extraction backends.

A source is either a path on disk or the raw bytes of a document already
read into memory. Backends open a fresh stream per call so that several
extraction tasks can read the same document at once.
"""

import io
from pathlib import Path
from typing import BinaryIO, Union

PDFSource = Union[str, Path, bytes]


def open_source(source: PDFSource) -> Union[Path, BinaryIO]:
    """Return something the PDF libraries can open."""
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(bytes(source))
    return Path(source)


def source_name(source: PDFSource) -> str:
    """Printable name of a source for errors and logs."""
    if isinstance(source, (bytes, bytearray)):
        return "<bytes>"
    return str(source)
