"""Fixed strategy: the same static overrides at every depth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.lorebook.strategies.base import Strategy, StrategyConfig, StrategyKind

if TYPE_CHECKING:
    from src.lorebook.state import TraversalState


class Fixed(Strategy):
    """Applies its configuration unchanged to an entry and its children.

    For when you're not looking to do anything fancy. This is the default
    strategy of the builder.
    """

    kind = StrategyKind.FIXED

    def apply(self, state: TraversalState, config: StrategyConfig) -> StrategyConfig:
        return config

    def extend(self, state: TraversalState, config: StrategyConfig) -> StrategyConfig:
        return config
