#!/usr/bin/env python3
"""
spellck command line
====================
Prints the misspelled words in the public documentation & identifiers of
one or more declaration trees.

Exit status: 0 when everything is spelled correctly, 1 when misspellings
were found, 2 when a tree file cannot be read, 10 when the dictionary
cannot be built.
"""

import argparse
import copy
import sys
from typing import List, Optional

from . import __version__
from . import config as spellck_config
from .config_logging import DictionaryError, TreeFormatError, get_logger, reset_loggers
from .dictionary import Dictionary, read_word_list
from .engine import SpellingEngine
from .loader import load_tree_file
from .policy import TraversalPolicy
from .report import assemble, render_json, render_text
from .stemming import ALGORITHMS, get_stemmer

EXIT_OK = 0
EXIT_MISSPELLINGS = 1
EXIT_BAD_TREE = 2
EXIT_BAD_DICTIONARY = 10


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='spellck',
        description='Check the spelling of the public names and documentation of a declaration tree'
    )
    parser.add_argument('trees', nargs='*', metavar='TREE',
                        help='JSON declaration tree files to check')
    parser.add_argument('-d', '--dict', action='append', default=[], metavar='PATH',
                        help='dictionary file (a list of words, one per line)')
    parser.add_argument('-n', '--no-def-dict', action='store_true',
                        help="don't use the default dictionary")
    parser.add_argument('--inherit-visibility', action='store_true',
                        help='members of unexported items are never checked')
    parser.add_argument('--no-stem', action='store_true',
                        help='disable the stemming fallback')
    parser.add_argument('--stemmer', choices=ALGORITHMS, default=None,
                        help='stemming algorithm')
    parser.add_argument('--format', choices=('text', 'json'), default=None,
                        help='output format')
    parser.add_argument('--no-source-line', action='store_true',
                        help="don't print the source line of each misspelling")
    parser.add_argument('--log-level', default=None,
                        help='log level (DEBUG, INFO, WARNING, ERROR)')
    parser.add_argument('--version', action='version', version=f'spellck {__version__}')
    return parser


def _apply_args(settings: spellck_config.SpellckConfig, args: argparse.Namespace):
    if args.no_def_dict:
        settings.dictionary.use_default = False
    if args.inherit_visibility:
        settings.traversal.inherit_visibility = True
    if args.no_stem:
        settings.stemming.enabled = False
    if args.stemmer:
        settings.stemming.algorithm = args.stemmer
    if args.format:
        settings.report.format = args.format
    if args.no_source_line:
        settings.report.show_source_line = False


def load_dictionary(settings: spellck_config.SpellckConfig, extra_paths: List[str]) -> Dictionary:
    """Build the reference dictionary from the default and extra word lists."""
    paths = []
    if settings.dictionary.use_default:
        paths.append(settings.dictionary.default_path)
    paths.extend(settings.dictionary.paths)
    paths.extend(extra_paths)

    words = set()
    for path in paths:
        words.update(read_word_list(path))

    stemming = settings.stemming
    stemmer = get_stemmer(stemming.enabled, stemming.algorithm, stemming.language)
    return Dictionary(words, stemmer).require_usable()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        spellck_config.set('logging.level', args.log_level)
        reset_loggers()

    # flags apply to this run only
    settings = copy.deepcopy(spellck_config.get_config())
    _apply_args(settings, args)
    logger = get_logger('cli')

    try:
        dictionary = load_dictionary(settings, args.dict)
    except DictionaryError as e:
        print(f"Error reading dictionary: {e.message}", file=sys.stderr)
        return EXIT_BAD_DICTIONARY

    policy = TraversalPolicy(settings.traversal.inherit_visibility)
    status = EXIT_OK

    for name in args.trees:
        try:
            loaded = load_tree_file(name)
        except TreeFormatError as e:
            print(f"Error reading {name}: {e.message}", file=sys.stderr)
            status = EXIT_BAD_TREE
            continue

        # one engine per tree; positions of different trees could collide
        engine = SpellingEngine(
            dictionary.with_words(loaded.root.extra_words),
            loaded.exported,
            policy=policy,
            reserved_prefix=settings.traversal.reserved_prefix,
        )
        entries = assemble(engine.analyze(loaded.root))
        logger.info("Checked tree", tree=name, positions=len(entries))

        if settings.report.format == 'json':
            print(render_json(entries, loaded.source_map))
        elif entries:
            print(render_text(entries, loaded.source_map, settings.report.show_source_line))

        if entries and status == EXIT_OK:
            status = EXIT_MISSPELLINGS

    return status


if __name__ == "__main__":
    sys.exit(main())
