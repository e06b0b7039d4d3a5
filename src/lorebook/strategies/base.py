"""Base class for configuration strategies.

A strategy decides how context and entry settings evolve as the builder
descends into sub-entries. The builder calls, for every entry:

1. apply(state, strategy.config)  -> config for the entry itself
2. context(state, config) / entry(state, config) -> the entry's settings
3. extend(entry_state, config)    -> config seeding the entry's children
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from src.lorebook.models import ContextConfig, ContextOverrides, EntryConfig, EntryOverrides

if TYPE_CHECKING:
    from src.lorebook.state import TraversalState


class StrategyKind(str, Enum):
    """Built-in strategy variants."""

    FIXED = "Fixed"
    DEPTH_DELTA = "DepthDelta"


@dataclass(frozen=True)
class StrategyConfig:
    """Configuration given to a strategy.

    `priority_delta` and `search_delta` are only read by DepthDelta.
    """

    context: ContextOverrides | None = None
    entry: EntryOverrides | None = None
    priority_delta: int | None = None
    search_delta: int | None = None

    def overlaid(
        self, context: ContextOverrides | None, entry: EntryOverrides | None
    ) -> StrategyConfig:
        """Layer more overrides on top; the new values win."""
        if context is None and entry is None:
            return self
        return replace(
            self,
            context=self.context.overlaid(context) if self.context else context,
            entry=self.entry.overlaid(entry) if self.entry else entry,
        )


class Strategy(ABC):
    """Policy for inheriting configuration down the entry tree.

    Strategies hold nothing but their configuration, so one instance can be
    shared by any number of entries and builds. Equality is identity.
    """

    kind: StrategyKind

    def __init__(self, config: StrategyConfig | None = None) -> None:
        self.config = config or StrategyConfig()

    @abstractmethod
    def apply(self, state: TraversalState, config: StrategyConfig) -> StrategyConfig:
        """Finalize the configuration for the current entry."""
        ...

    @abstractmethod
    def extend(self, state: TraversalState, config: StrategyConfig) -> StrategyConfig:
        """Produce the configuration that seeds the current entry's children."""
        ...

    def context(self, state: TraversalState, config: StrategyConfig) -> ContextConfig:
        """Resolve the context settings for an entry."""
        return state.context.merged(config.context)

    def entry(self, state: TraversalState, config: StrategyConfig) -> EntryConfig:
        """Resolve the entry settings for an entry."""
        return state.entry.merged(config.entry)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.config!r})"
