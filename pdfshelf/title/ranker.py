"""
Title ranker.

Picks the phrase most likely to be the title by visual prominence.
"""

from typing import List, Sequence

from ..core import TitleConfig
from ..utils import collapse_whitespace
from .models import Phrase


class TitleRanker:
    """
    Orders phrases by font size and selects a title candidate.

    The largest text on a first page is usually the title, unless it is
    very short: a paragraph after the title often opens with one big
    drop-cap letter. In that case the runner-up is used instead.
    """

    def __init__(self, settings: TitleConfig = None):
        self.settings = settings or TitleConfig()

    def order(self, phrases: Sequence[Phrase]) -> List[Phrase]:
        """
        Sort phrases by descending font size.

        sorted() is stable, including with reverse=True, so phrases of
        equal size keep their document order.
        """
        return sorted(phrases, key=lambda phrase: phrase.font_size, reverse=True)

    def render(self, phrase: Phrase) -> str:
        """Single-spaced, trimmed phrase text capped to the maximum title length."""
        return collapse_whitespace(phrase.text, self.settings.max_title_length)

    def rank(self, phrases: Sequence[Phrase]) -> str:
        """
        Select the title candidate among phrases.

        Args:
            phrases: Closed phrases in document order.

        Returns:
            The candidate string, possibly short or empty.
        """
        if not phrases:
            return ""

        ranked = self.order(phrases)
        candidate = self.render(ranked[0])

        if len(candidate) < self.settings.min_title_length and len(ranked) > 1:
            candidate = self.render(ranked[1])

        return candidate
