"""
Reference Dictionary
====================
The set of known-correct words and the correctness predicate used by the
spelling engine.

A word is known when it is in the reference set verbatim, or when it is
entirely alphabetic and its lowercase form is in the set, or (with a
stemmer) when the stem of its lowercase form is in the set.
"""

import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .config_logging import DictionaryError, get_logger, handle_errors
from .stemming import Stemmer
from .words import is_alphabetic

__version__ = "1.0.0"

_logger = get_logger('dictionary')

PathLike = Union[str, Path]


@handle_errors(DictionaryError)
def read_word_list(path: PathLike) -> List[str]:
    """
    Read a word list: UTF-8, one word per line.

    Lines are trimmed and blank lines dropped; case is preserved.
    """
    with open(path, 'r', encoding='utf-8') as f:
        words = [line.strip() for line in f]
    words = [w for w in words if w]
    _logger.debug("Loaded word list", path=str(path), words=len(words))
    return words


class Dictionary:
    """
    Immutable set of reference words with an optional stemming fallback.

    Safe to share between engines and threads.
    """

    __slots__ = ('_words', '_stemmer')

    def __init__(self, words: Iterable[str] = (), stemmer: Optional[Stemmer] = None):
        self._words = frozenset(words)
        self._stemmer = stemmer

    @classmethod
    def from_files(cls, paths: Iterable[PathLike], stemmer: Optional[Stemmer] = None) -> 'Dictionary':
        """Build a dictionary from one or more word list files."""
        words = set()
        for path in paths:
            words.update(read_word_list(path))
        return cls(words, stemmer)

    @classmethod
    def from_env(cls, env_var: str, stemmer: Optional[Stemmer] = None) -> 'Dictionary':
        """
        Build a dictionary from the word lists named in an environment
        variable (paths separated by ``os.pathsep``).
        """
        paths = os.environ.get(env_var)
        if paths is None:
            raise DictionaryError(f"environment variable `{env_var}` not specified")
        return cls.from_files([p for p in paths.split(os.pathsep) if p], stemmer)

    def with_words(self, extra: Iterable[str]) -> 'Dictionary':
        """A new dictionary that also knows ``extra``."""
        extra = [w.strip() for w in extra if w.strip()]
        if not extra:
            return self
        return Dictionary(self._words.union(extra), self._stemmer)

    @property
    def stemmer(self) -> Optional[Stemmer]:
        return self._stemmer

    def require_usable(self) -> 'Dictionary':
        """Raise DictionaryError if no words were loaded; return self otherwise."""
        if not self._words:
            raise DictionaryError("dictionary is empty")
        return self

    def is_known(self, word: str) -> bool:
        """Check if ``word`` is correct, without splitting it at all."""
        if word in self._words:
            return True
        if not is_alphabetic(word):
            return False
        lower = word.lower()
        if lower in self._words:
            return True
        return self._stem_is_known(lower)

    def _stem_is_known(self, lower: str) -> bool:
        if self._stemmer is None:
            return False
        stem = self._stemmer(lower)
        return stem != lower and stem in self._words

    def __contains__(self, word: str) -> bool:
        return word in self._words

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        stemming = 'on' if self._stemmer is not None else 'off'
        return f"Dictionary({len(self._words)} words, stemming {stemming})"
