"""Shared test fixtures and helpers."""

import regex

from src.lorebook.entries import BuildableEntry, BuilderConfig
from src.lorebook.matching import Phrase, as_escaped
from src.lorebook.models import LoreEntry


def search(phrase: Phrase, text: str):
    """Search `text` the way NovelAI does: case-insensitively.

    Uses the `regex` package since compiled phrases rely on variable-width
    lookbehind, which the standard `re` module rejects.
    """
    return regex.search(str(as_escaped(phrase)), text, flags=regex.IGNORECASE)


def matches(phrase: Phrase, text: str) -> bool:
    """Check if the compiled phrase finds a match in `text`."""
    return search(phrase, text) is not None


def key_matches(key: str, text: str) -> bool:
    """Check if a built `/pattern/i` key finds a match in `text`."""
    assert key.startswith("/") and key.endswith("/i")
    return regex.search(key[1:-2], text, flags=regex.IGNORECASE) is not None


def build(*entries: BuildableEntry, **config) -> list[LoreEntry]:
    """Build the given root entries and return the flat record list."""
    from src.lorebook.builder import EntryBuilder

    return EntryBuilder(BuilderConfig(entries=list(entries), **config)).build_records()


def by_name(records: list[LoreEntry]) -> dict[str, LoreEntry]:
    return {record.display_name: record for record in records}
