"""
Utilities for iterating over the "words" in a string.

Letters are classified by the Unicode ``Alphabetic`` and ``Uppercase``
properties, which also cover letter numbers (``ⅻ``) and the vowel signs
of scripts such as Devanagari.
"""

from typing import Iterator

import regex

__version__ = "1.0.0"

_ALPHABETIC = regex.compile(r'\p{Alphabetic}')
_UPPERCASE = regex.compile(r'\p{Uppercase}')
_ALPHABETIC_RUN = regex.compile(r'\p{Alphabetic}*')


def _is_alpha(c: str) -> bool:
    return _ALPHABETIC.match(c) is not None


def _is_upper(c: str) -> bool:
    return _UPPERCASE.match(c) is not None


class Subwords:
    """
    The sub-words of a string: ``FooBar`` -> ``Foo``, ``Bar``;
    ``foo_bar`` -> ``foo``, ``bar``; ``AB Cd123e`` -> ``A``, ``B``, ``Cd``,
    ``e``.

    Lazy and restartable: every ``iter()`` rescans the string.
    """

    __slots__ = ('text',)

    def __init__(self, text: str):
        self.text = text

    def __iter__(self) -> Iterator[str]:
        text = self.text
        word_start = -1
        for offset, c in enumerate(text):
            alpha = _is_alpha(c)
            if word_start == -1:
                # skip leading non-alphabetic characters
                if alpha:
                    word_start = offset
            elif not alpha:
                yield text[word_start:offset]
                word_start = -1
            elif _is_upper(c):
                # this character starts the next word
                yield text[word_start:offset]
                word_start = offset
        if word_start != -1:
            yield text[word_start:]

    def __repr__(self) -> str:
        return f"Subwords({self.text!r})"


def subwords(text: str) -> Subwords:
    """Iterate over the sub-words of ``text``."""
    return Subwords(text)


def is_alphabetic(word: str) -> bool:
    """True if every character of ``word`` has the Unicode Alphabetic property."""
    return _ALPHABETIC_RUN.fullmatch(word) is not None
