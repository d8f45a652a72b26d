"""
spellck
=======
Spell-checks the public names and documentation of a program's
declarations against a reference word list.

- words: splits identifiers and sentences into sub-words
- dictionary: reference words with case-folded and stemmed matching
- policy: which declarations are visible and therefore checked
- engine: walks a declaration tree and records misspellings
- report: orders and renders the results

Uses lazy loading - submodules only import when accessed.
"""

__version__ = "1.0.0"

# Public names and the submodules that define them
_EXPORTS = {
    'subwords': 'spellck.words',
    'Dictionary': 'spellck.dictionary',
    'read_word_list': 'spellck.dictionary',
    'TraversalPolicy': 'spellck.policy',
    'Mode': 'spellck.policy',
    'SpellingEngine': 'spellck.engine',
    'MisspellingRecord': 'spellck.engine',
    'assemble': 'spellck.report',
    'ReportEntry': 'spellck.report',
    'SourceMap': 'spellck.report',
    'Crate': 'spellck.tree',
    'Node': 'spellck.tree',
    'NodeKind': 'spellck.tree',
    'Position': 'spellck.tree',
    'Span': 'spellck.tree',
    'DocComment': 'spellck.tree',
    'load_tree_file': 'spellck.loader',
    'ExportSet': 'spellck.loader',
    'MisspellingLint': 'spellck.lint',
}


def __getattr__(name):
    """Lazy load public names on first access."""
    if name in _EXPORTS:
        import importlib
        module = importlib.import_module(_EXPORTS[name])
        value = getattr(module, name)
        globals()[name] = value
        return value
    raise AttributeError(f"module 'spellck' has no attribute '{name}'")


def __dir__():
    """List public names."""
    return list(_EXPORTS.keys()) + ['config', 'get_status']


def get_status():
    """
    Get status of spellck and its optional integrations.

    Returns dict with version, stemming availability and the active
    configuration.
    """
    from dataclasses import asdict
    from . import config
    from .stemming import NltkStemmer

    settings = config.get_config()
    status = {
        'version': __version__,
        'stemming': {'enabled': settings.stemming.enabled},
        'config': asdict(settings),
    }

    if settings.stemming.enabled:
        try:
            stemmer = NltkStemmer(settings.stemming.algorithm, settings.stemming.language)
            status['stemming'].update(stemmer.get_status())
        except ValueError as e:
            status['stemming']['error'] = str(e)

    return status
