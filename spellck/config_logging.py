"""
spellck Logging & Error Module
==============================
Structured logging and the error types shared by every spellck component.

Logging settings come from the ``logging`` section of ``spellck.config``.
"""

import sys
import json
import logging
import uuid
import time
import functools
from datetime import datetime, timezone
from typing import Optional, Dict, Any, Callable
from pathlib import Path
from contextlib import contextmanager
import threading

from . import config as spellck_config

# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024  # 5MB max per log file
LOG_BACKUP_COUNT = 5                # Number of log backup files to keep

TEXT_LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s - %(message)s'


# =============================================================================
# STRUCTURED LOGGING
# =============================================================================

class StructuredLogger:
    """Thread-safe structured logger with correlation IDs."""

    _local = threading.local()

    def __init__(self, name: str, settings: Optional[spellck_config.LoggingConfig] = None):
        self.name = name
        self.settings = settings or spellck_config.get_config().logging
        self._setup_logger()

    def _setup_logger(self):
        """Configure the underlying Python logger."""
        self.logger = logging.getLogger(f"spellck.{self.name}")
        self.logger.setLevel(getattr(logging, self.settings.level.upper(), logging.WARNING))
        self.logger.handlers.clear()
        self.logger.propagate = False

        if self.settings.format == 'json':
            formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(TEXT_LOG_FORMAT)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        # File handler with rotation
        if self.settings.log_file:
            from logging.handlers import RotatingFileHandler
            log_file = Path(self.settings.log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    @classmethod
    def set_correlation_id(cls, correlation_id: str):
        """Set correlation ID for current thread."""
        cls._local.correlation_id = correlation_id

    @classmethod
    def get_correlation_id(cls) -> str:
        """Get correlation ID for current thread."""
        correlation_id = getattr(cls._local, 'correlation_id', None)
        if correlation_id is None:
            correlation_id = cls.new_correlation_id()
        return correlation_id

    @classmethod
    def new_correlation_id(cls) -> str:
        """Generate and set a new correlation ID."""
        correlation_id = str(uuid.uuid4())[:12]
        cls.set_correlation_id(correlation_id)
        return correlation_id

    def _build_log_record(self, level: str, message: str, **kwargs) -> Dict[str, Any]:
        """Build a structured log record."""
        return {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': level,
            'logger': self.name,
            'correlation_id': self.get_correlation_id(),
            'message': message,
            **kwargs
        }

    def _emit(self, level: int, level_name: str, message: str, exc_info: bool = False, **kwargs):
        if not self.logger.isEnabledFor(level):
            return
        if self.settings.format == 'json':
            record = self._build_log_record(level_name, message, **kwargs)
            text = json.dumps(record, default=str)
        elif kwargs:
            details = ' '.join(f"{k}={v}" for k, v in kwargs.items())
            text = f"{message} ({details})"
        else:
            text = message
        self.logger.log(level, text, exc_info=exc_info)

    def debug(self, message: str, **kwargs):
        """Log debug message."""
        self._emit(logging.DEBUG, 'DEBUG', message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message."""
        self._emit(logging.INFO, 'INFO', message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self._emit(logging.WARNING, 'WARNING', message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs):
        """Log error message with optional exception info."""
        self._emit(logging.ERROR, 'ERROR', message, exc_info=exc_info, **kwargs)

    def exception(self, message: str, **kwargs):
        """Log exception with full traceback."""
        self.error(message, exc_info=True, **kwargs)

    @contextmanager
    def log_operation(self, operation: str, **context):
        """Context manager for logging operation start/end with timing."""
        start_time = time.time()
        self.debug(f"{operation} started", operation=operation, status='started', **context)
        try:
            yield
            duration_ms = (time.time() - start_time) * 1000
            self.info(f"{operation} completed", operation=operation, status='completed',
                      duration_ms=round(duration_ms, 2), **context)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self.error(f"{operation} failed: {e}", operation=operation, status='failed',
                       duration_ms=round(duration_ms, 2), **context)
            raise


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        # StructuredLogger already serialized the record
        if message.startswith('{'):
            if record.exc_info:
                data = json.loads(message)
                data['traceback'] = self.formatException(record.exc_info)
                return json.dumps(data, default=str)
            return message

        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': message,
        }
        if record.exc_info:
            log_data['traceback'] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


_loggers: Dict[str, StructuredLogger] = {}


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name)
    return _loggers[name]


def reset_loggers():
    """Re-apply the current logging settings to every cached logger."""
    settings = spellck_config.get_config().logging
    for logger in _loggers.values():
        logger.settings = settings
        logger._setup_logger()


# =============================================================================
# ERROR HANDLING UTILITIES
# =============================================================================

class SpellckError(Exception):
    """Base exception for spellck."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR",
                 details: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a serializable dict."""
        return {
            'success': False,
            'error': {
                'code': self.code,
                'message': self.message,
                'details': self.details
            }
        }


class DictionaryError(SpellckError):
    """The reference dictionary could not be built or is unusable."""
    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        super().__init__(message, code="DICTIONARY_ERROR",
                         details={'path': path, **kwargs})


class TreeFormatError(SpellckError):
    """A serialized declaration tree could not be decoded."""
    def __init__(self, message: str, node: Optional[str] = None, **kwargs):
        super().__init__(message, code="TREE_FORMAT_ERROR",
                         details={'node': node, **kwargs})


class AnalysisCancelled(SpellckError):
    """Analysis stopped at the caller's request."""
    def __init__(self, message: str = "Analysis cancelled", **kwargs):
        super().__init__(message, code="CANCELLED", details=kwargs)


def handle_errors(error_cls: type = SpellckError, logger: Optional[StructuredLogger] = None):
    """
    Decorator for standardized error handling.

    spellck errors pass through untouched; file, encoding and value errors
    are logged and re-raised as ``error_cls``.
    """
    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            _logger = logger or get_logger(func.__module__.rsplit('.', 1)[-1])
            try:
                return func(*args, **kwargs)
            except SpellckError:
                raise
            except FileNotFoundError as e:
                _logger.error(f"File not found: {e}")
                raise error_cls(f"File not found: {e.filename}") from e
            except PermissionError as e:
                _logger.error(f"Permission denied: {e}")
                raise error_cls(f"Permission denied: {e.filename}") from e
            except UnicodeDecodeError as e:
                _logger.error(f"Not valid UTF-8: {e}")
                raise error_cls(f"Not valid UTF-8: {e.reason}") from e
            except OSError as e:
                _logger.error(f"I/O error: {e}")
                raise error_cls(f"I/O error: {e}") from e
            except ValueError as e:
                _logger.error(f"Invalid input: {e}")
                raise error_cls(str(e)) from e
        return wrapper
    return decorator
