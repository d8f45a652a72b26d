"""
spellck Base Classes
====================
Base classes and result types shared by spellck checkers and integrations.

Provides common interfaces that checkers and optional third-party
integrations (stemmers) implement.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field
import time

from .tree import Crate, Position
from .config_logging import SpellckError, get_logger

__version__ = "1.0.0"

_logger = get_logger('checker')


@dataclass
class SpellingIssue:
    """
    Represents one position with misspelled words.

    Mirrors a lint warning: one issue per position, listing every word
    found there.
    """
    position: Position
    words: List[str]
    message: str
    severity: str = "Warn"
    rule_id: str = "misspellings"
    checker_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format for JSON output."""
        return {
            'severity': self.severity,
            'message': self.message,
            'rule_id': self.rule_id,
            'words': list(self.words),
            'position': self.position.to_dict(),
            'checker_name': self.checker_name,
        }


@dataclass
class AnalysisResult:
    """Result of running a checker over one declaration tree."""
    issues: List[SpellingIssue] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)
    processing_time_ms: float = 0.0
    checker_name: str = ""
    success: bool = True
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            'issues': [i.to_dict() for i in self.issues],
            'metrics': self.metrics,
            'processing_time_ms': self.processing_time_ms,
            'checker_name': self.checker_name,
            'success': self.success,
            'error': self.error,
        }


class CheckerBase(ABC):
    """
    Abstract base class for tree checkers.

    Subclasses load their resources in ``_initialize`` and do the work in
    ``_check_impl``; ``check`` handles lazy initialization, timing and
    error reporting.
    """

    CHECKER_NAME: str = "Checker"
    CHECKER_VERSION: str = "1.0.0"

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._initialized = False
        self._init_error: Optional[str] = None

    @abstractmethod
    def _initialize(self) -> bool:
        """
        Load whatever the checker needs (dictionaries, stemmers).

        Returns True if initialization succeeded. Called lazily on first
        check.
        """
        pass

    @abstractmethod
    def _check_impl(self, tree: Crate, export_oracle, **kwargs) -> List[SpellingIssue]:
        """
        Implementation of the check logic.

        Args:
            tree: Crate root of the declaration tree
            export_oracle: Callable answering whether a node id is exported

        Returns:
            List of SpellingIssue objects
        """
        pass

    def check(self, tree: Crate, export_oracle, **kwargs) -> AnalysisResult:
        """
        Run the checker on a declaration tree.

        Handles initialization, timing, and error handling.
        """
        start_time = time.time()

        result = AnalysisResult(checker_name=self.CHECKER_NAME)

        if not self.enabled:
            result.metrics['skipped'] = 'disabled'
            return result

        # Lazy initialization
        if not self._initialized:
            try:
                self._initialized = self._initialize()
            except SpellckError as e:
                self._init_error = e.message
                self._initialized = False

        if not self._initialized:
            result.success = False
            result.error = self.format_init_error(self._init_error or "initialization failed")
            _logger.error(result.error, checker=self.CHECKER_NAME)
            return result

        try:
            issues = self._check_impl(tree, export_oracle, **kwargs)
            result.issues = issues
            result.metrics['issue_count'] = len(issues)
            result.metrics['word_count'] = sum(len(i.words) for i in issues)
        except SpellckError as e:
            result.success = False
            result.error = f"Check failed: {e.message}"
            _logger.error(result.error, checker=self.CHECKER_NAME, code=e.code)

        result.processing_time_ms = (time.time() - start_time) * 1000
        return result

    def format_init_error(self, error: str) -> str:
        """Message reported when initialization fails."""
        return f"Initialization failed: {error}"

    def create_issue(self, position: Position, words: List[str], message: str,
                     severity: str = "Warn", rule_id: str = "misspellings") -> SpellingIssue:
        """Helper to create a SpellingIssue with checker metadata."""
        return SpellingIssue(
            position=position,
            words=list(words),
            message=message,
            severity=severity,
            rule_id=rule_id,
            checker_name=self.CHECKER_NAME,
        )


class IntegrationBase(ABC):
    """
    Abstract base class for optional third-party integrations.

    Wraps external libraries (NLTK stemmers) that may be missing at
    runtime.
    """

    INTEGRATION_NAME: str = "Integration"
    INTEGRATION_VERSION: str = "1.0.0"

    def __init__(self):
        self._available = False
        self._error: Optional[str] = None

    @property
    def is_available(self) -> bool:
        """Check if the integration is available and working."""
        return self._available

    @property
    def error(self) -> Optional[str]:
        """Get initialization error if any."""
        return self._error

    @abstractmethod
    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the integration."""
        pass
