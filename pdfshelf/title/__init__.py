"""
Title inference module.

Infers a best-guess document title from the typography of a PDF's first
page: glyph runs are grouped into phrases, the most prominent phrase is
selected, and a dictionary check rejects implausible candidates.
"""

from .models import TextRun, Phrase
from .sanitizer import sanitize
from .dictionary import Dictionary, get_dictionary
from .phrase_builder import PhraseBuilder
from .ranker import TitleRanker
from .validator import DictionaryValidator
from .engine import TitleEngine

__all__ = [
    "TextRun",
    "Phrase",
    "sanitize",
    "Dictionary",
    "get_dictionary",
    "PhraseBuilder",
    "TitleRanker",
    "DictionaryValidator",
    "TitleEngine"
]
