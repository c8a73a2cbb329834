"""
Glyph text sanitizer.

Turns arbitrary decoded glyph text into printable text by replacing every
undecodable or non-graphic unit with a single space.
"""

import unicodedata
from typing import Iterator, Union


SPACE = " "
REPLACEMENT_CHAR = "\ufffd"

# Zs is the only separator category that renders as visible space
_GRAPHIC_CATEGORIES = ("L", "M", "N", "P", "S")


def is_graphic(char: str) -> bool:
    """Return True if char is a letter, mark, number, punctuation, symbol or space separator."""
    category = unicodedata.category(char)
    return category[0] in _GRAPHIC_CATEGORIES or category == "Zs"


def sanitize(raw: Union[str, bytes]) -> str:
    """
    Replace undecodable and non-graphic units by spaces.

    A str is walked one code point at a time. Bytes are decoded as UTF-8
    one sequence at a time; a byte that does not start a valid sequence
    counts as one unit. Every step consumes at least one unit, so the
    output has exactly one character per decode step.

    Args:
        raw: Glyph text as decoded by the reader, or raw bytes.

    Returns:
        Printable text.
    """
    if isinstance(raw, (bytes, bytearray)):
        units = _decode_utf8_units(bytes(raw))
    else:
        units = iter(raw)

    return "".join(_printable(unit) for unit in units)


def _printable(unit: str) -> str:
    """Map one decoded unit to its output character."""
    if unit == REPLACEMENT_CHAR or not is_graphic(unit):
        # lone surrogates land here too, their category is Cs
        return SPACE
    return unit


def _decode_utf8_units(data: bytes) -> Iterator[str]:
    """
    Yield one character per UTF-8 decode step.

    Invalid or truncated sequences yield REPLACEMENT_CHAR and advance a
    single byte.
    """
    pos = 0
    end = len(data)

    while pos < end:
        size = _sequence_length(data[pos])

        if size and pos + size <= end:
            try:
                yield data[pos:pos + size].decode("utf-8")
                pos += size
                continue
            except UnicodeDecodeError:
                pass

        yield REPLACEMENT_CHAR
        pos += 1


def _sequence_length(lead: int) -> int:
    """Expected UTF-8 sequence length for a lead byte, 0 if it cannot lead."""
    if lead < 0x80:
        return 1
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 0
