"""Phrase-matching algebra.

Keyword helpers (LIT, PRE, POST, OPEN, REGEX) turn plain strings into escaped
regex fragments; operators (ALT, AND, EXCLUDING, WITH, WITHOUT, NEAR, BEYOND)
compose them into single patterns for NovelAI's key matcher.
"""

from src.lorebook.matching.operators import (
    ALT,
    AND,
    BEYOND,
    EXCLUDING,
    NEAR,
    WITH,
    WITHOUT,
    normalize_distance,
)
from src.lorebook.matching.phrases import (
    EXP,
    LIT,
    OPEN,
    POST,
    PRE,
    REGEX,
    BinaryOperator,
    EscapedPhrase,
    ExtendedOperator,
    Phrase,
    PhraseExp,
    PhraseOperator,
    as_escaped,
    escape_regexp,
    eval_exp,
    is_escaped,
    is_extended_operator,
    is_nai_regex,
    is_phrase_exp,
)

__all__ = [
    "ALT",
    "AND",
    "BEYOND",
    "EXCLUDING",
    "EXP",
    "LIT",
    "NEAR",
    "OPEN",
    "POST",
    "PRE",
    "REGEX",
    "WITH",
    "WITHOUT",
    "BinaryOperator",
    "EscapedPhrase",
    "ExtendedOperator",
    "Phrase",
    "PhraseExp",
    "PhraseOperator",
    "as_escaped",
    "escape_regexp",
    "eval_exp",
    "is_escaped",
    "is_extended_operator",
    "is_nai_regex",
    "is_phrase_exp",
    "normalize_distance",
]
