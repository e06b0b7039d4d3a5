"""Settings NovelAI gives a freshly created lore entry and lorebook."""

from __future__ import annotations

from .models import (
    ContextConfig,
    EntryConfig,
    InsertionType,
    LorebookSettings,
    TrimDirection,
)

CONTEXT_DEFAULTS = ContextConfig(
    prefix="",
    suffix="\n",
    token_budget=2048,
    reserved_tokens=0,
    budget_priority=400,
    trim_direction=TrimDirection.TRIM_BOTTOM,
    insertion_type=InsertionType.NEWLINE,
    maximum_trim_type=InsertionType.SENTENCE,
    insertion_position=-1,
)

ENTRY_DEFAULTS = EntryConfig(
    search_range=1024,
    enabled=True,
    force_activation=False,
    key_relative=False,
    non_story_activatable=False,
)

LOREBOOK_DEFAULTS = LorebookSettings(order_by_key_locations=False)
