"""
Phrase builder for title inference.

Groups the ordered glyph runs of a page into phrases using font size
similarity and spatial adjacency.
"""

from typing import Iterable, List, Optional

from ..core import TitleConfig
from .models import Phrase, TextRun
from .sanitizer import sanitize


class PhraseBuilder:
    """
    Groups consecutive text runs into phrases.

    Exactly one phrase is open at a time. A run whose font size is close
    enough to the open phrase's joins it; any other run closes the open
    phrase and seeds the next one. Font names are ignored: slide decks mix
    fonts and letter cases inside a single visual line.
    """

    def __init__(self, settings: TitleConfig = None):
        """
        Initialize the builder.

        Args:
            settings: Title engine constants. Defaults to TitleConfig().
        """
        self.settings = settings or TitleConfig()

    def build(self, runs: Iterable[TextRun]) -> List[Phrase]:
        """
        Build the closed phrases of a run sequence, in document order.

        Args:
            runs: Text runs in reading order.

        Returns:
            Closed phrases. Empty when there are no runs.
        """
        phrases: List[Phrase] = []
        current: Optional[Phrase] = None

        for run in runs:
            if current is None:
                current = self.start(run)
            elif not self.try_append(current, run):
                phrases.append(current.close())
                current = self.start(run)

        if current is not None:
            phrases.append(current.close())

        return phrases

    def start(self, run: TextRun) -> Phrase:
        """Open a new phrase seeded with run."""
        phrase = Phrase(
            font=run.font,
            font_size=run.font_size,
            spacing_threshold=self.settings.spacing_coefficient * run.font_size,
            last_x=run.x + run.width,
            last_y=run.y
        )
        phrase.write(sanitize(run.text))
        return phrase

    def try_append(self, phrase: Phrase, run: TextRun) -> bool:
        """
        Add run to phrase if their font sizes are close enough.

        A separating space is written first when the run starts a new line
        or leaves a horizontal gap of at least the phrase's spacing
        threshold. Smaller gaps are kerning inside a word.

        Args:
            phrase: The open phrase.
            run: Candidate run.

        Returns:
            True if run was absorbed.
        """
        if abs(run.font_size - phrase.font_size) >= self.settings.font_size_tolerance:
            return False

        if phrase.length > 0:
            new_line = run.y < phrase.last_y
            word_gap = run.x - phrase.last_x >= phrase.spacing_threshold
            if new_line or word_gap:
                phrase.write(" ")

        phrase.write(sanitize(run.text))
        phrase.last_x = run.x + run.width
        phrase.last_y = run.y
        return True
