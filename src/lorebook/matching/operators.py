"""Phrase operators.

Every operator coerces its operands with `as_escaped` and returns a new
EscapedPhrase. The match is always anchored on the left phrase; the right
phrase is only ever checked through lookaround, so the matched text of the
whole expression is the left phrase alone.

Operators:
- ALT: any of the given phrases (the only n-ary operator)
- AND / EXCLUDING: right phrase present / absent anywhere in the text
- WITH / WITHOUT: right phrase present / absent on the same line
- NEAR / BEYOND: right phrase within / not within some number of words
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any

from src.lorebook.errors import ProximityRangeError
from src.lorebook.matching.phrases import (
    ANY_CHAR,
    NOT_WORD_OR_LINE_BREAK,
    BinaryOperator,
    EscapedPhrase,
    ExtendedOperator,
    Phrase,
    as_escaped,
)

DEFAULT_DISTANCE = 10

# Gap between the two phrases for the document-wide and single-line operators
_DOCUMENT_GAP = f"{ANY_CHAR}*?"
_LINE_GAP = ".*?"


def _conjoin(left: Phrase, right: Phrase, gap: str) -> EscapedPhrase:
    """Match `left` when `right` follows or precedes it across `gap`."""
    re_left = as_escaped(left)
    re_right = as_escaped(right)
    ahead = f"(?={gap}{re_right})"
    behind = f"(?<={re_right}{gap}{re_left})"
    return EscapedPhrase(f"{re_left}(?:{ahead}|{behind})")


def _exclude(left: Phrase, right: Phrase, gap: str) -> EscapedPhrase:
    """Match `left` when `right` neither follows nor precedes it across `gap`."""
    re_left = as_escaped(left)
    re_right = as_escaped(right)
    ahead = f"(?!{gap}{re_right})"
    behind = f"(?<!{re_right}{gap}{re_left})"
    return EscapedPhrase(f"{re_left}{ahead}{behind}")


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def normalize_distance(distance: Any) -> tuple[int, int]:
    """Normalize a proximity distance to a `(low, high)` word range.

    - number: within that many words; zero or less collapses to `(0, 0)`
    - (number, number): within that range of words, in either order

    Fractional word counts are rounded down; negative bounds become 0.

    Raises:
        ProximityRangeError: If `distance` is any other shape.
    """
    if _is_number(distance):
        if distance <= 0:
            return (0, 0)
        return (0, math.floor(distance))
    if isinstance(distance, (tuple, list)) and len(distance) == 2:
        if all(_is_number(bound) for bound in distance):
            low, high = (max(0, math.floor(bound)) for bound in distance)
            return (min(low, high), max(low, high))
    raise ProximityRangeError(f"Not valid for `distance`: {distance!r}")


def _word_gap(low: int, high: int, same_line: bool) -> str:
    """Gap of `low` to `high` intervening words."""
    separator = NOT_WORD_OR_LINE_BREAK if same_line else r"\W"
    return rf"(?:{separator}+\w+){{{low},{high}}}?\W+"


# =============================================================================
# Operators
# =============================================================================


def ALT(*alternates: Phrase) -> EscapedPhrase:
    """Match at least one of the given alternatives."""
    escaped = "|".join(str(as_escaped(alt)) for alt in alternates)
    return EscapedPhrase(f"(?:{escaped})")


def AND(left: Phrase, right: Phrase) -> EscapedPhrase:
    """Match `left` when `right` appears anywhere in the searched text."""
    return _conjoin(left, right, _DOCUMENT_GAP)


def EXCLUDING(left: Phrase, right: Phrase) -> EscapedPhrase:
    """Match `left` when `right` appears nowhere in the searched text."""
    return _exclude(left, right, _DOCUMENT_GAP)


def WITH(left: Phrase, right: Phrase) -> EscapedPhrase:
    """Match `left` when `right` appears on the same line."""
    return _conjoin(left, right, _LINE_GAP)


def WITHOUT(left: Phrase, right: Phrase) -> EscapedPhrase:
    """Match `left` when `right` does not appear on the same line."""
    return _exclude(left, right, _LINE_GAP)


@ExtendedOperator
def NEAR(distance: Any = DEFAULT_DISTANCE, same_line: bool = True) -> BinaryOperator:
    """Create an operator matching `left` when `right` is close by.

    Args:
        distance: How many words may separate the phrases; an int for
            "within N words" or a pair for "within this range of words".
        same_line: Whether both phrases must be on the same line.

    Returns:
        Binary operator.

    Raises:
        ProximityRangeError: If `distance` is not an int or a pair of ints.
    """
    low, high = normalize_distance(distance)
    gap = _word_gap(low, high, same_line)

    def near(left: Phrase, right: Phrase) -> EscapedPhrase:
        return _conjoin(left, right, gap)

    return near


@ExtendedOperator
def BEYOND(distance: Any = DEFAULT_DISTANCE, same_line: bool = True) -> BinaryOperator:
    """Create an operator matching `left` when `right` is NOT close by.

    The phrases must be separated by more than `distance` words; for a range
    only its upper bound is used.
    """
    _, high = normalize_distance(distance)
    gap = _word_gap(0, high, same_line)

    def beyond(left: Phrase, right: Phrase) -> EscapedPhrase:
        return _exclude(left, right, gap)

    return beyond
