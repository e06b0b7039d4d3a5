"""DepthDelta strategy: priority and search range change with depth.

Every time the builder descends into sub-entries, `budget_priority` grows by
`priority_delta` and `search_range` grows by `search_delta`, relative to the
parent's resolved settings.

The deltas themselves are inherited: an entry whose DepthDelta strategy does
not set them uses the most recent values set by an ancestor DepthDelta.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any

from src.lorebook.models import ContextOverrides, EntryOverrides
from src.lorebook.strategies.base import Strategy, StrategyConfig, StrategyKind

if TYPE_CHECKING:
    from src.lorebook.state import TraversalState

DEFAULT_PRIORITY_DELTA = 1
DEFAULT_SEARCH_DELTA = 1024


def _deltas_of(config: StrategyConfig) -> dict[str, Any]:
    deltas = {"priority_delta": config.priority_delta, "search_delta": config.search_delta}
    return {name: value for name, value in deltas.items() if value is not None}


def inherited_deltas(stack: tuple[Strategy, ...]) -> dict[str, Any]:
    """Collect the most recent deltas set by DepthDelta strategies in `stack`."""
    result: dict[str, Any] = {}
    for strategy in stack:
        if strategy.kind is StrategyKind.DEPTH_DELTA:
            result.update(_deltas_of(strategy.config))
    return result


class DepthDelta(Strategy):
    """Shifts priority and search range by a fixed amount per level.

    Example:
        strategy = DepthDelta(StrategyConfig(context=ContextOverrides(budget_priority=400)))
        # root: 400, child: 401, grandchild: 402, ...
    """

    kind = StrategyKind.DEPTH_DELTA

    def __init__(
        self,
        config: StrategyConfig | None = None,
        *,
        priority_delta: int = DEFAULT_PRIORITY_DELTA,
        search_delta: int = DEFAULT_SEARCH_DELTA,
    ) -> None:
        """Initialize strategy.

        Args:
            config: Overrides and deltas for this strategy
            priority_delta: Delta used when neither `config` nor an ancestor sets one
            search_delta: Delta used when neither `config` nor an ancestor sets one
        """
        super().__init__(config)
        self.default_priority_delta = priority_delta
        self.default_search_delta = search_delta

    def apply(self, state: TraversalState, config: StrategyConfig) -> StrategyConfig:
        deltas = {**inherited_deltas(state.strategy_stack), **_deltas_of(config)}

        if not state.has_applied(self):
            return replace(config, **deltas)

        # An ancestor already used this instance, so `extend` has baked the
        # deltas into the inherited state.
        context = config.context.without("budget_priority") if config.context else None
        entry = config.entry.without("search_range") if config.entry else None
        return StrategyConfig(context=context, entry=entry, **deltas)

    def extend(self, state: TraversalState, config: StrategyConfig) -> StrategyConfig:
        priority_delta = self._resolve(config.priority_delta, self.default_priority_delta)
        search_delta = self._resolve(config.search_delta, self.default_search_delta)

        context = ContextOverrides(budget_priority=state.context.budget_priority + priority_delta)
        entry = EntryOverrides(search_range=state.entry.search_range + search_delta)

        return replace(
            config,
            context=config.context.overlaid(context) if config.context else context,
            entry=config.entry.overlaid(entry) if config.entry else entry,
        )

    @staticmethod
    def _resolve(value: int | None, default: int) -> int:
        return default if value is None else value
