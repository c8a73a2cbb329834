"""
Title inference engine.

Infers a document title from the positioned glyph runs of its first page,
without metadata or structure tags:

    runs -> PhraseBuilder -> TitleRanker -> DictionaryValidator -> title

An empty result means no confident title was found. It is not an error.
"""

from typing import Iterable, List

from ..core import TitleConfig, get_logger
from .dictionary import Dictionary, get_dictionary
from .models import Phrase, TextRun
from .phrase_builder import PhraseBuilder
from .ranker import TitleRanker
from .validator import DictionaryValidator

logger = get_logger(__name__)


class TitleEngine:
    """
    Wires phrase building, ranking and validation together.

    An engine holds no per-document state: infer() is a pure function of
    its runs, and one engine may serve any number of threads.
    """

    def __init__(self, dictionary: Dictionary = None, settings: TitleConfig = None):
        """
        Initialize the engine.

        Args:
            dictionary: Known words. Defaults to the shared bundled list,
                        or to settings.dictionary_path when set.
            settings: Title engine constants. Defaults to TitleConfig().
        """
        self.settings = settings or TitleConfig()

        if dictionary is None:
            dictionary = get_dictionary(self.settings.dictionary_path)

        self.dictionary = dictionary
        self.builder = PhraseBuilder(self.settings)
        self.ranker = TitleRanker(self.settings)
        self.validator = DictionaryValidator(dictionary, self.settings)

    def phrases(self, runs: Iterable[TextRun]) -> List[Phrase]:
        """Group runs into closed phrases."""
        return self.builder.build(runs)

    def candidate(self, runs: Iterable[TextRun]) -> str:
        """Best title candidate before dictionary validation."""
        return self.ranker.rank(self.phrases(runs))

    def infer(self, runs: Iterable[TextRun]) -> str:
        """
        Infer the title of a page.

        Args:
            runs: First-page text runs in reading order.

        Returns:
            The title, or "" if no candidate passes validation.
        """
        candidate = self.candidate(runs)

        if self.validator.accept(candidate):
            return candidate

        if candidate:
            logger.debug(f"Rejected title candidate: {candidate!r}")
        return ""
