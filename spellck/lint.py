"""
Misspelling Lint
================
Checker that runs the spelling engine over a declaration tree and reports
one warning per position with misspelled words.

The dictionary is loaded lazily on first check, from explicit paths or from
the word lists named in ``SPELLCK_LINT_DICT``. A loading failure is
reported as a failed result, never as spelling warnings.
"""

from typing import List, Optional, Sequence

from . import config as spellck_config
from .base import CheckerBase, SpellingIssue
from .dictionary import Dictionary
from .engine import SpellingEngine
from .policy import TraversalPolicy
from .report import assemble
from .stemming import get_stemmer
from .tree import Crate
from .config_logging import get_logger

__version__ = "1.0.0"

_logger = get_logger('lint')


class MisspellingLint(CheckerBase):
    """Detects words that are spelled incorrectly."""

    CHECKER_NAME = "Misspellings"
    CHECKER_VERSION = "1.0.0"

    def __init__(
        self,
        enabled: bool = True,
        dictionary: Optional[Dictionary] = None,
        dict_paths: Optional[Sequence[str]] = None,
        policy: Optional[TraversalPolicy] = None,
        settings: Optional[spellck_config.SpellckConfig] = None
    ):
        """
        Initialize the lint.

        Args:
            enabled: Whether the lint runs at all
            dictionary: Ready-made dictionary (skips loading)
            dict_paths: Word list files; default is the env variable
            policy: Traversal rules; default comes from configuration
            settings: Configuration; default is the global one
        """
        super().__init__(enabled)
        self.settings = settings or spellck_config.get_config()
        self.dictionary = dictionary
        self.dict_paths = list(dict_paths) if dict_paths is not None else None
        self.policy = policy or TraversalPolicy(self.settings.traversal.inherit_visibility)

    def _initialize(self) -> bool:
        """Load the reference dictionary."""
        if self.dictionary is None:
            stemming = self.settings.stemming
            stemmer = get_stemmer(stemming.enabled, stemming.algorithm, stemming.language)
            if self.dict_paths is not None:
                self.dictionary = Dictionary.from_files(self.dict_paths, stemmer)
            else:
                self.dictionary = Dictionary.from_env(self.settings.dictionary.env_var, stemmer)
        self.dictionary.require_usable()
        _logger.info("Dictionary ready", words=len(self.dictionary))
        return True

    def format_init_error(self, error: str) -> str:
        return f"failed to start misspelling lint: {error}"

    def _check_impl(self, tree: Crate, export_oracle, **kwargs) -> List[SpellingIssue]:
        """Spell-check ``tree`` and turn each position into an issue."""
        dictionary = self.dictionary.with_words(getattr(tree, 'extra_words', ()))
        engine = SpellingEngine(
            dictionary,
            export_oracle,
            policy=self.policy,
            reserved_prefix=self.settings.traversal.reserved_prefix,
            should_cancel=kwargs.get('should_cancel'),
        )
        record = engine.analyze(tree)
        return [self.create_issue(entry.position, list(entry.words), entry.message)
                for entry in assemble(record)]
