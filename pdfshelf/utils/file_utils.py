"""
File utility functions for pdfshelf.

Provides content signatures for duplicate detection, size calculations,
and directory management.
"""

import hashlib
from pathlib import Path
from typing import Union


def get_signature(data: bytes) -> str:
    """
    Compute the SHA-256 signature of a document's bytes.

    Two files with the same signature are the same document, whatever
    their paths.

    Args:
        data: Raw file content.

    Returns:
        Hexadecimal SHA-256 digest.
    """
    return hashlib.sha256(data).hexdigest()


def get_file_size_mb(filepath: Union[str, Path]) -> float:
    """
    Get file size in megabytes.

    Args:
        filepath: Path to the file.

    Returns:
        File size in MB, rounded to 2 decimal places.
    """
    size_bytes = Path(filepath).stat().st_size
    return round(size_bytes / (1024 * 1024), 2)


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Create directory tree if it doesn't exist.

    Args:
        path: Directory path to create.

    Returns:
        Path object of the directory.
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path
