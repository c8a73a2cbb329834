"""
In-memory PDF document.

A document is read from disk once; every extraction task then works on
the same bytes, so the signature always matches what was extracted.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from ..core import ExtractionError
from ..utils import get_signature


@dataclass(frozen=True)
class PDFDocument:
    """Raw bytes of a PDF file and the path they were read from."""
    path: Path
    data: bytes = field(repr=False)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "PDFDocument":
        """
        Read a PDF file into memory.

        Args:
            path: Path of the PDF file.

        Returns:
            The loaded document.

        Raises:
            ExtractionError: If the file is empty.
            OSError: If the file cannot be read.
        """
        path = Path(path)
        data = path.read_bytes()

        if not data:
            raise ExtractionError("File is empty", filepath=str(path))

        return cls(path=path, data=data)

    def signature(self) -> str:
        """SHA-256 hex digest of the document bytes."""
        return get_signature(self.data)
