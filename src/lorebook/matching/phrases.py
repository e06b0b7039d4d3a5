"""Phrase primitives and coercion.

A phrase is anything that can be turned into an escaped regex fragment:
- str: a raw keyword, compiled with PRE
- re.Pattern: its source is used as-is; flags are discarded
- PhraseExp: a (left, operator, right) tuple, evaluated with its operator
- EscapedPhrase: an already-built fragment, passed through

All output patterns are matched case-insensitively by NovelAI. Per-fragment
flags cannot be honored once fragments are nested into larger patterns, so
they are never carried over.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Union

from src.lorebook.errors import PhraseFormatError

# =============================================================================
# Pattern atoms
# =============================================================================

ANY_CHAR = r"[\s\S]"
BOUNDARY = r"\b"
NOT_WORD_OR_LINE_BREAK = r"[^\w\n]"
OPEN_RUN = r"\w*?"

_SPECIAL_CHARS = re.compile(r"[.*+?^${}()|\[\]\\]")
_NAI_REGEX = re.compile(r"/(.*)/[ismu]*")


@dataclass(frozen=True)
class EscapedPhrase:
    """A regex fragment that is safe to compose into larger patterns."""

    pattern: str

    is_escaped = True

    def to_nai(self) -> str:
        """Render as a NovelAI key, e.g. `/\\bcat/i`."""
        return f"/{self.pattern}/i"

    def __str__(self) -> str:
        return self.pattern


class ExtendedOperator:
    """Binary operator factory that takes options first.

    Referencing it bare in a PhraseExp uses the defaults:
        ("jeweler", NEAR, "city")   == NEAR()("jeweler", "city")
        ("jeweler", NEAR(3), "city") == NEAR(3)("jeweler", "city")
    """

    is_extended = True

    def __init__(self, factory: Callable[..., BinaryOperator]) -> None:
        self._factory = factory
        functools.update_wrapper(self, factory)

    def __call__(self, *args: Any, **kwargs: Any) -> BinaryOperator:
        return self._factory(*args, **kwargs)

    def __repr__(self) -> str:
        return f"ExtendedOperator({self._factory.__name__})"


# Type aliases
Phrase = Union[str, re.Pattern, EscapedPhrase, tuple]
BinaryOperator = Callable[[Phrase, Phrase], EscapedPhrase]
PhraseOperator = Union[BinaryOperator, ExtendedOperator]
PhraseExp = tuple[Phrase, PhraseOperator, Phrase]


# =============================================================================
# Predicates
# =============================================================================


def escape_regexp(value: str) -> str:
    """Escape the characters that have meaning in a regex pattern."""
    return _SPECIAL_CHARS.sub(r"\\\g<0>", value)


def is_nai_regex(value: Any) -> bool:
    """Check if `value` is a NovelAI regex string like `/pattern/i`."""
    return isinstance(value, str) and _NAI_REGEX.fullmatch(value) is not None


def is_escaped(value: Any) -> bool:
    return getattr(value, "is_escaped", False) is True and callable(
        getattr(value, "to_nai", None)
    )


def is_phrase_exp(value: Any) -> bool:
    """Check if `value` is a 3-tuple with an operator in the middle."""
    if not isinstance(value, (tuple, list)):
        return False
    return len(value) == 3 and callable(value[1])


def is_extended_operator(value: Any) -> bool:
    return callable(value) and getattr(value, "is_extended", False) is True


# =============================================================================
# Coercion
# =============================================================================


def EXP(left: Phrase, op: PhraseOperator, right: Phrase) -> PhraseExp:
    """Construct a phrase expression."""
    return (left, op, right)


def eval_exp(exp: PhraseExp) -> EscapedPhrase:
    """Evaluate a phrase expression.

    Extended operators are invoked with no arguments to get their default
    binary operator.
    """
    left, op, right = exp
    operator = op() if is_extended_operator(op) else op
    return operator(left, right)


def as_escaped(phrase: Phrase) -> EscapedPhrase:
    """Coerce a phrase into an EscapedPhrase.

    Escaped phrases are returned as-is, so this is idempotent.
    """
    if is_phrase_exp(phrase):
        return eval_exp(phrase)
    if is_escaped(phrase):
        return phrase
    if isinstance(phrase, re.Pattern):
        return EscapedPhrase(phrase.pattern)
    return PRE(phrase)


# =============================================================================
# Primitive builders
# =============================================================================


def LIT(word: str) -> EscapedPhrase:
    """Exact match: the whole word and nothing else."""
    return EscapedPhrase(f"{BOUNDARY}{escape_regexp(word)}{BOUNDARY}")


def PRE(word: str) -> EscapedPhrase:
    """Prefix match: the tail end of the word is open-ended.

    This is the default conversion for plain strings.
    """
    return EscapedPhrase(f"{BOUNDARY}{escape_regexp(word)}")


def POST(word: str) -> EscapedPhrase:
    """Postfix match: the leading end of the word is open-ended."""
    return EscapedPhrase(f"{OPEN_RUN}{escape_regexp(word)}{BOUNDARY}")


def OPEN(word: str) -> EscapedPhrase:
    """Open match: both ends of the word are open-ended."""
    return EscapedPhrase(f"{OPEN_RUN}{escape_regexp(word)}")


def REGEX(regex: str) -> EscapedPhrase:
    """Import a NovelAI regex string, e.g. from a pre-existing lorebook.

    Only the pattern is kept; flags are discarded.

    Raises:
        PhraseFormatError: If `regex` is not wrapped in `/` delimiters.
    """
    match = _NAI_REGEX.fullmatch(regex) if isinstance(regex, str) else None
    if match is None:
        raise PhraseFormatError(f"Not compatible with NovelAI's regular-expressions: {regex!r}")
    return EscapedPhrase(match.group(1))
