"""
spellck Configuration Module
============================
Centralized configuration for dictionary loading, stemming, traversal,
reporting and logging.

Configuration can be set via:
1. Environment variables (SPELLCK_STEMMING_ENABLED=false)
2. Config file (spellck_config.json, or the path in SPELLCK_CONFIG)
3. Direct API calls (config.set('traversal.inherit_visibility', True))
"""

import os
import sys
import json
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field, asdict

__version__ = "1.0.0"

# Default configuration path
CONFIG_FILE = Path(__file__).parent.parent / "spellck_config.json"
CONFIG_ENV_VAR = "SPELLCK_CONFIG"

DEFAULT_DICT = "/usr/share/dict/words"
DICT_ENV_VAR = "SPELLCK_LINT_DICT"


@dataclass
class DictionaryConfig:
    """Reference word list configuration."""
    paths: list = field(default_factory=list)
    use_default: bool = True
    default_path: str = DEFAULT_DICT
    env_var: str = DICT_ENV_VAR


@dataclass
class StemmingConfig:
    """Stemming fallback configuration."""
    enabled: bool = True
    algorithm: str = "porter"  # porter, snowball, or lancaster
    language: str = "english"  # snowball only


@dataclass
class TraversalConfig:
    """Declaration tree traversal configuration."""
    inherit_visibility: bool = False
    reserved_prefix: str = "__"


@dataclass
class ReportConfig:
    """Report rendering configuration."""
    show_source_line: bool = True
    format: str = "text"  # text or json


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "WARNING"
    format: str = "text"  # text or json
    log_file: Optional[str] = None


@dataclass
class SpellckConfig:
    """Master spellck configuration."""
    dictionary: DictionaryConfig = field(default_factory=DictionaryConfig)
    stemming: StemmingConfig = field(default_factory=StemmingConfig)
    traversal: TraversalConfig = field(default_factory=TraversalConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Global configuration instance
_config: Optional[SpellckConfig] = None


def get_config() -> SpellckConfig:
    """Get the global spellck configuration."""
    global _config
    if _config is None:
        _config = _load_config()
    return _config


def _config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_FILE


def _load_config() -> SpellckConfig:
    """Load configuration from file and environment."""
    config = SpellckConfig()

    path = _config_path()
    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
            _apply_dict_to_config(config, file_config)
        except (json.JSONDecodeError, IOError) as e:
            print(f"[spellck config] Warning: Could not load config file: {e}", file=sys.stderr)

    _apply_env_to_config(config)

    return config


def _apply_dict_to_config(config: SpellckConfig, data: Dict[str, Any]):
    """Apply dictionary values to config object."""
    for section_name, section_data in data.items():
        if hasattr(config, section_name) and isinstance(section_data, dict):
            section = getattr(config, section_name)
            for key, value in section_data.items():
                if hasattr(section, key):
                    setattr(section, key, value)


def _apply_env_to_config(config: SpellckConfig):
    """Apply environment variables to config."""
    env_mappings = {
        'SPELLCK_USE_DEFAULT_DICT': ('dictionary', 'use_default', _parse_bool),
        'SPELLCK_DEFAULT_DICT': ('dictionary', 'default_path', str),
        'SPELLCK_STEMMING_ENABLED': ('stemming', 'enabled', _parse_bool),
        'SPELLCK_STEMMING_ALGORITHM': ('stemming', 'algorithm', str),
        'SPELLCK_INHERIT_VISIBILITY': ('traversal', 'inherit_visibility', _parse_bool),
        'SPELLCK_REPORT_FORMAT': ('report', 'format', str),
        'SPELLCK_LOG_LEVEL': ('logging', 'level', str),
        'SPELLCK_LOG_FORMAT': ('logging', 'format', str),
    }

    for env_var, (section, key, converter) in env_mappings.items():
        value = os.environ.get(env_var)
        if value is not None:
            try:
                section_obj = getattr(config, section)
                setattr(section_obj, key, converter(value))
            except (ValueError, AttributeError) as e:
                print(f"[spellck config] Warning: Invalid env var {env_var}={value}: {e}",
                      file=sys.stderr)


def _parse_bool(value: str) -> bool:
    """Parse boolean from string."""
    return value.lower() in ('true', '1', 'yes', 'on')


def get(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by dot-notation key.

    Example: get('stemming.algorithm') -> 'porter'
    """
    config = get_config()
    parts = key.split('.')

    obj = config
    for part in parts:
        if hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            return default

    return obj


def set(key: str, value: Any):
    """
    Set a configuration value by dot-notation key.

    Example: set('traversal.inherit_visibility', True)
    """
    config = get_config()
    parts = key.split('.')

    if len(parts) != 2:
        raise ValueError(f"Key must be in format 'section.key': {key}")

    section_name, attr_name = parts

    if hasattr(config, section_name):
        section = getattr(config, section_name)
        if hasattr(section, attr_name):
            setattr(section, attr_name, value)
        else:
            raise ValueError(f"Unknown config key: {attr_name}")
    else:
        raise ValueError(f"Unknown config section: {section_name}")


def save_config(path: Optional[Path] = None):
    """Save current configuration to file."""
    config = get_config()
    path = path or _config_path()

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(asdict(config), f, indent=2)


def reset_config():
    """Reset configuration to defaults."""
    global _config
    _config = SpellckConfig()


def reload_config() -> SpellckConfig:
    """Re-read configuration from file and environment."""
    global _config
    _config = _load_config()
    return _config
