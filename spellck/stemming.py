"""
NLTK Stemmer Integration for spellck
====================================
Reduces a word to its root form so that inflections of dictionary words
(``checks``, ``checked``) are accepted even when the word list only has the
root.

Features:
- Porter (default), Snowball and Lancaster algorithms
- No corpus download needed

Requires: pip install nltk
"""

from typing import Any, Callable, Dict, Optional

from .base import IntegrationBase
from .config_logging import get_logger

__version__ = "1.0.0"

_logger = get_logger('stemming')

Stemmer = Callable[[str], str]

ALGORITHMS = ('porter', 'snowball', 'lancaster')


class NltkStemmer(IntegrationBase):
    """
    NLTK-backed stemming strategy.

    Instances are callable: ``stemmer("checking") -> "check"``.
    """

    INTEGRATION_NAME = "NLTK Stemmer"
    INTEGRATION_VERSION = "1.0.0"

    def __init__(self, algorithm: str = "porter", language: str = "english"):
        """
        Initialize the stemmer.

        Args:
            algorithm: One of 'porter', 'snowball', 'lancaster'
            language: Language for the snowball algorithm
        """
        super().__init__()
        if algorithm not in ALGORITHMS:
            raise ValueError(f"Unknown stemming algorithm: {algorithm}")
        self.algorithm = algorithm
        self.language = language
        self._stemmer = None
        self._initialize()

    def _initialize(self):
        """Build the NLTK stemmer."""
        try:
            from nltk.stem import PorterStemmer, SnowballStemmer, LancasterStemmer

            if self.algorithm == 'porter':
                self._stemmer = PorterStemmer()
            elif self.algorithm == 'snowball':
                self._stemmer = SnowballStemmer(self.language)
            else:
                self._stemmer = LancasterStemmer()
            self._available = True

        except ImportError as e:
            self._error = f"nltk not installed: {e}"
            self._available = False
        except ValueError as e:
            # SnowballStemmer rejects unsupported languages
            self._error = f"Failed to initialize stemmer: {e}"
            self._available = False

        if not self._available:
            _logger.warning("Stemming fallback disabled", reason=self._error)

    def __call__(self, word: str) -> str:
        return self._stemmer.stem(word)

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the stemmer integration."""
        return {
            'available': self.is_available,
            'error': self._error,
            'algorithm': self.algorithm,
            'language': self.language if self.algorithm == 'snowball' else None,
        }


def get_stemmer(enabled: bool = True, algorithm: str = "porter",
                language: str = "english") -> Optional[Stemmer]:
    """
    Get a stemming strategy, or None when stemming is disabled or NLTK is
    unavailable.
    """
    if not enabled:
        return None
    stemmer = NltkStemmer(algorithm, language)
    return stemmer if stemmer.is_available else None
