"""
Text utility functions for pdfshelf.

Provides text cleaning for extracted PDF content and whitespace
normalization shared by the title engine and the CLI.
"""

import re
import unicodedata


def clean_text(text: str) -> str:
    """
    Normalize and clean extracted text.

    Removes control characters, normalizes whitespace, and handles
    common PDF extraction artifacts.

    Args:
        text: Raw text from PDF extraction.

    Returns:
        Cleaned text string.
    """
    if not text:
        return ""

    text = unicodedata.normalize("NFKC", text)

    # Remove control characters except newlines and tabs
    text = "".join(
        char for char in text
        if not unicodedata.category(char).startswith("C")
        or char in "\n\t"
    )

    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)

    lines = [line.strip() for line in text.split("\n")]
    text = "\n".join(lines)

    return text.strip()


def collapse_whitespace(text: str, max_chars: int = None) -> str:
    """
    Collapse every whitespace run into one space and trim the ends.

    Args:
        text: Text to normalize.
        max_chars: Optional cap on the result, counted in characters.

    Returns:
        Single-spaced text, at most max_chars characters long.
    """
    collapsed = " ".join(text.split())

    if max_chars is not None:
        # str slicing counts code points, so no character is ever split
        collapsed = collapsed[:max_chars]

    return collapsed
