"""Traversal state threaded through the entry tree."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from .defaults import CONTEXT_DEFAULTS, ENTRY_DEFAULTS
from .models import ContextConfig, EntryConfig

if TYPE_CHECKING:
    from .strategies.base import Strategy


@dataclass(frozen=True)
class TraversalState:
    """Settings inherited by an entry from its ancestors.

    Each level of the tree gets its own state; a parent never sees the
    states it creates for its children.
    """

    context: ContextConfig = CONTEXT_DEFAULTS
    entry: EntryConfig = ENTRY_DEFAULTS

    # Strategies applied by ancestors, outermost first
    strategy_stack: tuple[Strategy, ...] = ()

    # Root entries have a depth of 0
    depth: int = 0

    def with_config(self, context: ContextConfig, entry: EntryConfig) -> TraversalState:
        """Same position in the tree, different settings."""
        return replace(self, context=context, entry=entry)

    def descend(
        self, strategy: Strategy, context: ContextConfig, entry: EntryConfig
    ) -> TraversalState:
        """State for the children of an entry that used `strategy`."""
        return TraversalState(
            context=context,
            entry=entry,
            strategy_stack=(*self.strategy_stack, strategy),
            depth=self.depth + 1,
        )

    def has_applied(self, strategy: Strategy) -> bool:
        """Check if this exact strategy instance was used by an ancestor.

        Compares by identity: two strategies built from the same config are
        still different strategies.
        """
        return any(applied is strategy for applied in self.strategy_stack)
