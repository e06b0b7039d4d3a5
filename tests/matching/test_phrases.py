"""Tests for phrase primitives and coercion."""

import re

import pytest

from src.lorebook.errors import LorebookError, PhraseFormatError
from src.lorebook.matching import (
    AND,
    EXP,
    LIT,
    OPEN,
    POST,
    PRE,
    REGEX,
    EscapedPhrase,
    as_escaped,
    escape_regexp,
    eval_exp,
    is_escaped,
    is_nai_regex,
    is_phrase_exp,
)
from tests.conftest import matches

# =============================================================================
# Escaping
# =============================================================================


def test_escape_regexp_escapes_special_characters():
    """Regex metacharacters are backslash-escaped."""
    assert escape_regexp("a.b*c") == r"a\.b\*c"
    assert escape_regexp("(x|y)") == r"\(x\|y\)"
    assert escape_regexp("[1]{2}") == r"\[1\]\{2\}"
    assert escape_regexp("$^+?\\") == r"\$\^\+\?\\"


def test_escape_regexp_leaves_plain_text():
    """Letters, digits, spaces and dashes pass through."""
    assert escape_regexp("beast-folk 2") == "beast-folk 2"


def test_escaped_keyword_matches_literally():
    """A dot in a keyword only matches a dot."""
    assert matches(PRE("a.b"), "see a.b here")
    assert not matches(PRE("a.b"), "see axb here")


# =============================================================================
# Escaped phrases
# =============================================================================


def test_escaped_phrase_renders_nai_key():
    """to_nai wraps the pattern with delimiters and the i flag."""
    assert LIT("cat").to_nai() == r"/\bcat\b/i"
    assert str(LIT("cat")) == r"\bcat\b"


def test_escaped_phrase_is_immutable():
    """Escaped phrases can't be modified once built."""
    phrase = PRE("cat")
    with pytest.raises(AttributeError):
        phrase.pattern = "dog"


def test_escaped_phrase_equality_by_pattern():
    """Two phrases with the same pattern are equal."""
    assert PRE("cat") == EscapedPhrase(r"\bcat")
    assert PRE("cat") != LIT("cat")


def test_is_escaped():
    assert is_escaped(PRE("cat"))
    assert not is_escaped("cat")
    assert not is_escaped(None)


# =============================================================================
# Primitive builders
# =============================================================================


def test_lit_matches_whole_word_only():
    """LIT matches the exact word."""
    assert matches(LIT("cat"), "the cat sat")
    assert matches(LIT("cat"), "CAT!")
    assert not matches(LIT("cat"), "category")
    assert not matches(LIT("cat"), "bobcat")


def test_pre_matches_suffixed_forms():
    """PRE matches the word and words it starts."""
    assert matches(PRE("cat"), "the cat sat")
    assert matches(PRE("cat"), "categories")
    assert not matches(PRE("cat"), "bobcat")


def test_post_matches_prefixed_forms():
    """POST matches the word and words it ends."""
    assert matches(POST("cat"), "the cat sat")
    assert matches(POST("cat"), "a bobcat")
    assert not matches(POST("cat"), "category")


def test_open_matches_inside_words():
    """OPEN matches the word anywhere inside a larger word."""
    assert matches(OPEN("cat"), "bobcats")
    assert matches(OPEN("cat"), "category")
    assert matches(OPEN("cat"), "bobcat")
    assert not matches(OPEN("cat"), "c a t")


def test_regex_imports_pattern_and_drops_flags():
    """REGEX keeps only the pattern of a NovelAI regex."""
    assert REGEX(r"/\bfoo(bar)?/i") == EscapedPhrase(r"\bfoo(bar)?")
    assert REGEX("/a/b/") == EscapedPhrase("a/b")


@pytest.mark.parametrize("value", ["foo", "/foo", "foo/i", "/foo/g", ""])
def test_regex_rejects_undelimited_strings(value):
    """REGEX fails fast on strings that aren't `/pattern/flags`."""
    with pytest.raises(PhraseFormatError):
        REGEX(value)


def test_phrase_format_error_is_value_error():
    assert issubclass(PhraseFormatError, ValueError)
    assert issubclass(PhraseFormatError, LorebookError)


def test_is_nai_regex():
    assert is_nai_regex("/foo/")
    assert is_nai_regex("/foo/imsu")
    assert not is_nai_regex("foo")
    assert not is_nai_regex(42)


# =============================================================================
# Coercion
# =============================================================================


def test_as_escaped_string_defaults_to_prefix():
    """Plain strings are compiled with PRE."""
    assert as_escaped("cat") == PRE("cat")


def test_as_escaped_native_pattern_discards_flags():
    """A compiled pattern contributes its source only."""
    assert as_escaped(re.compile(r"\bhobb(y|ies)\b", re.IGNORECASE)) == EscapedPhrase(
        r"\bhobb(y|ies)\b"
    )


def test_as_escaped_passes_escaped_through():
    """Escaped phrases come back as the very same object."""
    phrase = LIT("cat")
    assert as_escaped(phrase) is phrase


def test_as_escaped_evaluates_expressions():
    """A (left, op, right) tuple is evaluated by its operator."""
    assert as_escaped(("cat", AND, "dog")) == AND("cat", "dog")
    assert as_escaped(["cat", AND, "dog"]) == AND("cat", "dog")


@pytest.mark.parametrize(
    "phrase",
    ["cat", LIT("cat"), re.compile(r"x+"), ("cat", AND, "dog"), OPEN("a.b")],
)
def test_as_escaped_is_idempotent(phrase):
    """Coercing twice is the same as coercing once."""
    once = as_escaped(phrase)
    assert as_escaped(once) == once
    assert as_escaped(once) is once


def test_exp_builds_expression_tuple():
    exp = EXP("cat", AND, "dog")
    assert exp == ("cat", AND, "dog")
    assert is_phrase_exp(exp)
    assert eval_exp(exp) == AND("cat", "dog")


def test_is_phrase_exp_requires_operator_in_middle():
    assert not is_phrase_exp(("cat", "and", "dog"))
    assert not is_phrase_exp(("cat", AND))
    assert not is_phrase_exp("cat")
