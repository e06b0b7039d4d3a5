"""NovelAI lorebook builder.

Builds lorebooks from a tree of entries with composable keyword matching.

The build pipeline:
  1. Author script → BuilderConfig (tree of BuildableEntry)
  2. EntryBuilder composes keys and settings at every depth → Lorebook
  3. Lorebook.to_json() → `<name>.lorebook` file imported into NovelAI
"""

from .builder import EntryBuilder, build_entries, yield_child_keys
from .entries import (
    BuildableEntry,
    BuilderConfig,
    DerivedBaseKeys,
    ExplicitBaseKeys,
    derive_keys,
    replace_keys,
)
from .models import ContextOverrides, EntryOverrides, Lorebook, LorebookSettings, LoreEntry
from .output import write_lorebook
from .strategies import DepthDelta, Fixed, StrategyConfig

__all__ = [
    "BuildableEntry",
    "BuilderConfig",
    "ContextOverrides",
    "DepthDelta",
    "DerivedBaseKeys",
    "EntryBuilder",
    "EntryOverrides",
    "ExplicitBaseKeys",
    "Fixed",
    "LoreEntry",
    "Lorebook",
    "LorebookSettings",
    "StrategyConfig",
    "build_entries",
    "derive_keys",
    "replace_keys",
    "write_lorebook",
    "yield_child_keys",
]
