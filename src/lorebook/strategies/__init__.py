"""Configuration strategies for the entry builder."""

from .base import Strategy, StrategyConfig, StrategyKind
from .depth_delta import DEFAULT_PRIORITY_DELTA, DEFAULT_SEARCH_DELTA, DepthDelta
from .fixed import Fixed

__all__ = [
    "DEFAULT_PRIORITY_DELTA",
    "DEFAULT_SEARCH_DELTA",
    "DepthDelta",
    "Fixed",
    "Strategy",
    "StrategyConfig",
    "StrategyKind",
]
