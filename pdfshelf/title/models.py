"""
Data models for title inference.

Defines the glyph runs read from a document's first page and the
phrases built from them.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class TextRun:
    """
    One atomic string of glyphs with a single font, size and position.

    Coordinates are in PDF user space: x grows to the right and y grows
    upward, so text on a lower line has a smaller y.

    Attributes:
        text: Decoded glyph text.
        font: Font name as reported by the reader.
        font_size: Font size in points.
        x: Left edge of the run.
        y: Baseline of the run.
        width: Horizontal advance of the run.
    """
    text: str
    font: str
    font_size: float
    x: float
    y: float
    width: float


@dataclass
class Phrase:
    """
    Glyph text hypothesized to be one visually contiguous unit.

    Created from a seed run and grown by PhraseBuilder until a run is
    rejected, after which it is closed and never changes again.
    """
    font: str
    font_size: float
    spacing_threshold: float
    last_x: float
    last_y: float
    length: int = 0
    closed: bool = False
    _parts: List[str] = field(default_factory=list, repr=False)

    @property
    def text(self) -> str:
        """Accumulated text, separators included."""
        return "".join(self._parts)

    def write(self, text: str) -> None:
        """Append text to the phrase buffer."""
        if self.closed:
            raise ValueError("cannot append to a closed phrase")
        self._parts.append(text)
        self.length += len(text)

    def close(self) -> "Phrase":
        """Freeze the phrase and return it."""
        self.closed = True
        return self
