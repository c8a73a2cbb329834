"""
Utility module providing shared helper functions.

Contains file operations and text processing utilities used across
the application. Depends only on the standard library.
"""

from .file_utils import (
    get_signature,
    get_file_size_mb,
    ensure_directory
)
from .text_utils import (
    clean_text,
    collapse_whitespace
)

__all__ = [
    "get_signature",
    "get_file_size_mb",
    "ensure_directory",
    "clean_text",
    "collapse_whitespace"
]
