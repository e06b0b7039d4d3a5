"""Entry-tree builder.

Flattens a BuilderConfig's entry tree into NovelAI lore entries.

Build Flow:
    BuilderConfig -> EntryBuilder -> Lorebook

For each entry, depth-first:
1. Combine the inherited keys with the entry's own keys (yield_child_keys)
2. Resolve the strategy (own or inherited) and apply it to the state
3. Layer the entry's own context/entry overrides
4. Emit one LoreEntry per text string
5. Extend the strategy to build the state for the sub-entries
6. Recurse into the sub-entries
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .defaults import LOREBOOK_DEFAULTS
from .entries import BuildableEntry, BuilderConfig
from .matching import ALT, Phrase, PhraseOperator, as_escaped, eval_exp
from .models import Lorebook, LoreEntry
from .state import TraversalState
from .strategies import Fixed, Strategy

logger = logging.getLogger(__name__)


def yield_child_keys(
    parent_keys: Sequence[Phrase],
    op: PhraseOperator,
    child_keys: Sequence[Phrase],
) -> Iterator[Phrase]:
    """Combine a parent's keys with a child's keys.

    Each child key is combined separately with the alternation of all parent
    keys, so [A, B] and [C, D] give [op(A|B, C), op(A|B, D)].
    """
    if not parent_keys:
        yield from child_keys
        return
    if not child_keys:
        yield from parent_keys
        return

    alt_keys = parent_keys[0] if len(parent_keys) == 1 else ALT(*parent_keys)
    for child_key in child_keys:
        yield eval_exp((alt_keys, op, child_key))


@dataclass(frozen=True)
class Inheritance:
    """What a parent entry hands down to each of its sub-entries."""

    keys: tuple[Phrase, ...]
    op: PhraseOperator
    strategy: Strategy
    name_prefix: str = ""


class EntryBuilder:
    """Builds a Lorebook from a BuilderConfig.

    Example:
        builder = EntryBuilder(config)
        lorebook = builder.build()
    """

    def __init__(self, config: BuilderConfig) -> None:
        self.config = config

    def build(self) -> Lorebook:
        """Build the lorebook.

        Returns:
            Lorebook with the configured settings and every built entry
        """
        entries = self.build_records()
        settings = self.config.settings or LOREBOOK_DEFAULTS
        logger.info(f"Built {len(entries)} lore entries from {len(self.config.entries)} root entries")
        return Lorebook(settings=settings, entries=entries)

    def build_records(self) -> list[LoreEntry]:
        """Build the flat list of lore entries, in emission order."""
        state = self.initial_state()
        root = Inheritance(
            keys=(),
            op=self.config.sub_op,
            strategy=self.config.strategy or Fixed(),
        )

        records: list[LoreEntry] = []
        for entry in self.config.entries:
            records.extend(self._yield_entries(entry, state, root))

        if self.config.reversed:
            records.reverse()
        return records

    def initial_state(self) -> TraversalState:
        """State for the root entries.

        Starts from NovelAI's defaults. A root strategy is applied once on
        top, then the root overrides.
        """
        state = TraversalState()

        strategy = self.config.strategy
        if strategy is not None:
            applied = strategy.apply(state, strategy.config)
            state = state.with_config(
                strategy.context(state, applied),
                strategy.entry(state, applied),
            )

        return state.with_config(
            state.context.merged(self.config.context),
            state.entry.merged(self.config.entry),
        )

    # =========================================================================
    # Recursion
    # =========================================================================

    def _yield_entries(
        self,
        entry: BuildableEntry,
        state: TraversalState,
        inherited: Inheritance,
    ) -> Iterator[LoreEntry]:
        strategy = entry.strategy or inherited.strategy
        base_op = entry.base_op or inherited.op
        sub_op = entry.sub_op or base_op
        name = f"{inherited.name_prefix}{entry.name}"

        keys = self._resolve_keys(entry, inherited.keys, base_op)
        compiled_keys = [as_escaped(key).to_nai() for key in keys]

        logger.debug(
            f"Building '{name}' at depth {state.depth}: "
            f"{len(compiled_keys)} keys, strategy {strategy.kind.value}"
        )

        config = strategy.apply(state, strategy.config).overlaid(entry.context, entry.entry)
        context_config = strategy.context(state, config)
        entry_config = strategy.entry(state, config)

        # An entry without keys could never activate, so always inject it.
        # Sub-entries are seeded from these settings and inherit the flag.
        if not compiled_keys:
            entry_config = entry_config.model_copy(update={"force_activation": True})

        texts = entry.texts
        for i, text in enumerate(texts, start=1):
            display_name = name if len(texts) == 1 else f"{name} ({i} of {len(texts)})"
            yield LoreEntry(
                display_name=display_name,
                text=text,
                keys=list(compiled_keys),
                context_config=context_config,
                **entry_config.model_dump(),
            )

        if not entry.sub_entries:
            return

        entry_state = state.with_config(context_config, entry_config)
        next_config = strategy.extend(entry_state, config)
        next_state = entry_state.descend(
            strategy,
            strategy.context(entry_state, next_config),
            strategy.entry(entry_state, next_config),
        )
        child_inheritance = Inheritance(
            keys=tuple(keys),
            op=sub_op,
            strategy=strategy,
            name_prefix=f"{name} - ",
        )

        for child in entry.sub_entries:
            yield from self._yield_entries(child, next_state, child_inheritance)

    @staticmethod
    def _resolve_keys(
        entry: BuildableEntry,
        inherited_keys: Sequence[Phrase],
        op: PhraseOperator,
    ) -> list[Phrase]:
        """Effective keys of an entry: inherited keys combined with its own."""
        parent_keys = list(inherited_keys)
        if entry.base_keys is not None:
            parent_keys = entry.base_keys.resolve(parent_keys)
        return list(yield_child_keys(parent_keys, op, entry.keys))


def build_entries(config: BuilderConfig) -> Lorebook:
    """Build a lorebook from `config`."""
    return EntryBuilder(config).build()
