"""Author-facing entry tree.

A BuilderConfig holds a tree of BuildableEntry nodes. Each node contributes
keys, text and settings; its sub-entries inherit all three:

    BuilderConfig(entries=[
        BuildableEntry(
            name="Character: Rook",
            keys=[LIT("rook"), ("jeweler", WITH, ALT("city", "shop"))],
            text="Rook is a male otter and a jeweler in the city of Jasco.",
            sub_op=WITH,
            sub_entries=[
                BuildableEntry(name="Interest", keys=["tailor"], text="..."),
            ],
        ),
    ])
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Union

from src.lorebook.matching import AND, Phrase, PhraseOperator
from src.lorebook.models import ContextOverrides, EntryOverrides, LorebookSettings
from src.lorebook.strategies import Strategy

# =============================================================================
# Base keys
# =============================================================================


@dataclass(frozen=True)
class ExplicitBaseKeys:
    """Replace the keys inherited from the parent."""

    keys: tuple[Phrase, ...]

    def resolve(self, parent_keys: Sequence[Phrase]) -> list[Phrase]:
        return list(self.keys)


@dataclass(frozen=True)
class DerivedBaseKeys:
    """Compute the inherited keys from the parent's effective keys.

    The transform receives a copy of the parent's keys and returns the keys
    to use instead, e.g. to drop a concept the parent matches on.
    """

    transform: Callable[[list[Phrase]], Sequence[Phrase]]

    def resolve(self, parent_keys: Sequence[Phrase]) -> list[Phrase]:
        return list(self.transform(list(parent_keys)))


BaseKeys = Union[ExplicitBaseKeys, DerivedBaseKeys]


def replace_keys(*keys: Phrase) -> ExplicitBaseKeys:
    return ExplicitBaseKeys(tuple(keys))


def derive_keys(transform: Callable[[list[Phrase]], Sequence[Phrase]]) -> DerivedBaseKeys:
    return DerivedBaseKeys(transform)


# =============================================================================
# Entries
# =============================================================================


@dataclass
class BuildableEntry:
    """A node of the author's entry tree.

    Attributes:
        name: Display name; sub-entries are named "<parent> - <child>".
        keys: Phrases for this entry. May be empty to use only the keys
            inherited from the parent.
        text: One string, or several strings that each become an entry.
        sub_entries: Related entries that also require this entry's keys.
        strategy: Strategy for this entry and, by default, its sub-entries.
        sub_op: Operator sub-entries use to combine these keys with their
            own. Defaults to `base_op`.
        base_op: Operator joining the inherited keys with `keys`. Defaults to
            the parent's `sub_op`.
        base_keys: Replaces or transforms the inherited keys.
        context: Context overrides for this entry and its sub-entries.
        entry: Entry overrides for this entry and its sub-entries.
    """

    name: str
    keys: list[Phrase]
    text: str | list[str] | None = None
    sub_entries: list[BuildableEntry] = field(default_factory=list)
    strategy: Strategy | None = None
    sub_op: PhraseOperator | None = None
    base_op: PhraseOperator | None = None
    base_keys: BaseKeys | None = None
    context: ContextOverrides | None = None
    entry: EntryOverrides | None = None

    @property
    def texts(self) -> list[str]:
        """The text strings of this entry, as a list."""
        if self.text is None:
            return []
        if isinstance(self.text, str):
            return [self.text]
        return list(self.text)


@dataclass
class BuilderConfig:
    """Everything needed to build a lorebook.

    Attributes:
        entries: The root entries.
        settings: Lorebook-wide settings.
        strategy: Default strategy for root entries that do not set one.
            When given, it is also applied once to the default settings.
        sub_op: Default operator for combining keys.
        context: Context overrides for every entry.
        entry: Entry overrides for every entry.
        reversed: Emit entries in reverse order.
    """

    entries: list[BuildableEntry]
    settings: LorebookSettings | None = None
    strategy: Strategy | None = None
    sub_op: PhraseOperator = AND
    context: ContextOverrides | None = None
    entry: EntryOverrides | None = None
    reversed: bool = False
