"""
Dictionary based plausibility check for title candidates.

A candidate is kept only when enough of its words are known words. This
filters out candidates made of glyph garbage, codes or identifiers.
"""

import re
from typing import List, Tuple

from nltk.stem import PorterStemmer

from ..core import TitleConfig
from .dictionary import Dictionary


class DictionaryValidator:
    """
    Accepts or rejects a candidate by its dictionary coverage ratio.

    Each alphabetic token counts as a hit when its lowercase form, or its
    Porter stem, is a dictionary word. The stemmer is aggressive
    (computers -> comput, decline -> declin) so the raw form is always
    tried first and either match is enough.
    """

    def __init__(self, dictionary: Dictionary, settings: TitleConfig = None):
        """
        Initialize the validator.

        Args:
            dictionary: Known words, shared read-only.
            settings: Title engine constants. Defaults to TitleConfig().
        """
        self.dictionary = dictionary
        self.settings = settings or TitleConfig()
        self.stemmer = PorterStemmer()

        # letters only: digits, underscore and punctuation split tokens
        self._token_pattern = re.compile(
            rf"[^\W\d_]{{{self.settings.min_token_length},{self.settings.max_token_length}}}"
        )

    def tokens(self, candidate: str) -> List[str]:
        """Extract the alphabetic tokens of candidate, in order."""
        return self._token_pattern.findall(candidate)

    def is_known(self, token: str) -> bool:
        """Return True if token or its stem is a dictionary word."""
        word = token.lower()
        if word in self.dictionary:
            return True
        return self.stemmer.stem(word).lower() in self.dictionary

    def score(self, candidate: str) -> Tuple[int, int]:
        """Return (hits, tokens) for candidate."""
        tokens = self.tokens(candidate)
        hits = sum(1 for token in tokens if self.is_known(token))
        return hits, len(tokens)

    def accept(self, candidate: str) -> bool:
        """
        Decide whether candidate reads like real words.

        Args:
            candidate: Title candidate from the ranker.

        Returns:
            True if it has at least one token and the hit ratio reaches
            the configured threshold (inclusive).
        """
        hits, total = self.score(candidate)
        return total > 0 and hits / total >= self.settings.dictionary_ratio
