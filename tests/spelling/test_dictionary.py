"""
Tests for the Reference Dictionary
==================================
Tests for word list loading and the correctness predicate.
"""

import os

import pytest

from spellck.config_logging import DictionaryError
from spellck.dictionary import Dictionary, read_word_list


def suffix_stemmer(word: str) -> str:
    """Tiny stand-in stemming strategy: strips a trailing 's' or 'ing'."""
    for suffix in ('ing', 's'):
        if word.endswith(suffix) and len(word) > len(suffix) + 2:
            return word[:-len(suffix)]
    return word


@pytest.fixture
def words_file(tmp_path):
    """A small word list on disk."""
    path = tmp_path / "words.txt"
    path.write_text("hello\n  world  \n\nNew York\nParis\n", encoding='utf-8')
    return path


class TestReadWordList:
    """Tests for read_word_list()."""

    def test_trims_and_drops_blank_lines(self, words_file):
        """Test lines are trimmed and blanks skipped."""
        assert read_word_list(words_file) == ["hello", "world", "New York", "Paris"]

    def test_missing_file(self, tmp_path):
        """Test a missing file raises DictionaryError."""
        with pytest.raises(DictionaryError) as exc:
            read_word_list(tmp_path / "nope.txt")
        assert exc.value.code == "DICTIONARY_ERROR"

    def test_not_utf8(self, tmp_path):
        """Test a non-UTF-8 file raises DictionaryError."""
        path = tmp_path / "latin1.txt"
        path.write_bytes("caf\xe9\n".encode('latin-1'))
        with pytest.raises(DictionaryError):
            read_word_list(path)


class TestDictionary:
    """Tests for Dictionary.is_known()."""

    def test_verbatim(self):
        """Test exact membership."""
        d = Dictionary(["hello", "Paris", "New York"])
        assert d.is_known("hello")
        assert d.is_known("Paris")
        assert d.is_known("New York")

    def test_case_folded(self):
        """Test capitalised words match lowercase entries."""
        d = Dictionary(["hello"])
        assert d.is_known("Hello")
        assert d.is_known("HELLO")

    def test_case_folding_is_one_way(self):
        """Test lowercase words do not match capitalised entries."""
        d = Dictionary(["Paris"])
        assert not d.is_known("paris")

    def test_non_alphabetic_needs_verbatim(self):
        """Test strings with separators only match verbatim."""
        d = Dictionary(["foo", "bar", "don't"])
        assert not d.is_known("foo_bar")
        assert d.is_known("don't")
        assert not d.is_known("Don't")

    def test_unknown(self):
        """Test unknown words."""
        d = Dictionary(["hello"])
        assert not d.is_known("helo")

    def test_empty_dictionary_knows_nothing(self):
        """Test an empty dictionary flags everything."""
        assert not Dictionary().is_known("hello")

    def test_stemmed_fallback(self):
        """Test the stem of the lowercase form is looked up."""
        d = Dictionary(["check", "word"], stemmer=suffix_stemmer)
        assert d.is_known("checking")
        assert d.is_known("Words")
        assert not d.is_known("chequing")

    def test_no_stemmer_no_fallback(self):
        """Test stemming is off without a stemmer."""
        d = Dictionary(["check"])
        assert not d.is_known("checking")

    def test_stemmer_not_used_for_non_alphabetic(self):
        """Test the stemmer only sees all-alphabetic words."""
        seen = []

        def recording_stemmer(word):
            seen.append(word)
            return word

        d = Dictionary(["check"], stemmer=recording_stemmer)
        d.is_known("check_ing")
        d.is_known("Checks")
        assert seen == ["checks"]

    def test_contains_and_len(self):
        """Test container protocol."""
        d = Dictionary(["a", "b", "a"])
        assert len(d) == 2
        assert "a" in d
        assert "c" not in d


class TestDictionaryConstruction:
    """Tests for building and extending dictionaries."""

    def test_from_files(self, words_file, tmp_path):
        """Test several word lists are merged."""
        other = tmp_path / "other.txt"
        other.write_text("extra\n", encoding='utf-8')
        d = Dictionary.from_files([words_file, other])
        assert d.is_known("world")
        assert d.is_known("extra")

    def test_from_env(self, words_file, tmp_path, monkeypatch):
        """Test word lists named in an environment variable."""
        other = tmp_path / "other.txt"
        other.write_text("extra\n", encoding='utf-8')
        monkeypatch.setenv("SPELLCK_TEST_DICT", os.pathsep.join([str(words_file), str(other)]))
        d = Dictionary.from_env("SPELLCK_TEST_DICT")
        assert d.is_known("hello")
        assert d.is_known("extra")

    def test_from_env_unset(self, monkeypatch):
        """Test an unset variable is a DictionaryError."""
        monkeypatch.delenv("SPELLCK_TEST_DICT", raising=False)
        with pytest.raises(DictionaryError) as exc:
            Dictionary.from_env("SPELLCK_TEST_DICT")
        assert "not specified" in exc.value.message

    def test_with_words(self):
        """Test extra words produce a new dictionary."""
        base = Dictionary(["hello"])
        extended = base.with_words(["frobnicate", "  "])
        assert extended.is_known("frobnicate")
        assert not base.is_known("frobnicate")

    def test_with_no_words_is_same(self):
        """Test adding nothing returns the same dictionary."""
        base = Dictionary(["hello"])
        assert base.with_words([]) is base

    def test_with_words_keeps_stemmer(self):
        """Test the stemming strategy carries over."""
        extended = Dictionary(["check"], stemmer=suffix_stemmer).with_words(["x"])
        assert extended.is_known("checking")

    def test_require_usable(self):
        """Test an empty dictionary is a configuration error."""
        with pytest.raises(DictionaryError):
            Dictionary().require_usable()
        d = Dictionary(["word"])
        assert d.require_usable() is d
