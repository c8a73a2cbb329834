"""
Known-word dictionary used to validate title candidates.

The word list ships with the package (one lowercase word per line) and is
loaded once per process. A Dictionary never changes after construction,
so any number of threads may read it without locking.
"""

from pathlib import Path
from typing import Dict, Iterable, Iterator, Union

from ..core import get_logger, ConfigurationError

logger = get_logger(__name__)


BUNDLED_WORDS_PATH = Path(__file__).parent / "data" / "words.txt"


class Dictionary:
    """Immutable set of lowercase words."""

    __slots__ = ("_words",)

    def __init__(self, words: Iterable[str] = ()):
        """
        Build a dictionary from words.

        Words are lowercased and stripped; empty entries are dropped.
        """
        self._words = frozenset(
            word for word in (w.strip().lower() for w in words) if word
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Dictionary":
        """
        Load a word list with one word per line.

        Args:
            path: Path to the word list.

        Returns:
            Loaded Dictionary.

        Raises:
            ConfigurationError: If the file cannot be read.
        """
        path = Path(path)

        try:
            with open(path, "r", encoding="utf-8") as f:
                dictionary = cls(f)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read dictionary word list: {e}",
                {"path": str(path)}
            )

        logger.debug(f"Loaded {len(dictionary)} dictionary words from {path.name}")
        return dictionary

    def __contains__(self, word: object) -> bool:
        return word in self._words

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)


_dictionaries: Dict[Path, Dictionary] = {}


def get_dictionary(path: Union[str, Path] = None) -> Dictionary:
    """
    Get the process-wide Dictionary for a word list.

    Each list is loaded once, on first request, and the same instance is
    returned afterwards. The bundled list is used unless path is given.

    Args:
        path: Optional word list to use instead of the bundled one.

    Returns:
        The shared Dictionary instance for that list.
    """
    key = Path(path or BUNDLED_WORDS_PATH).resolve()

    if key not in _dictionaries:
        _dictionaries[key] = Dictionary.from_file(key)

    return _dictionaries[key]
