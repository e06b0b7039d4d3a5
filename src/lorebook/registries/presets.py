"""Strategy preset registry.

Maps preset names to factory functions that create DepthDelta strategies with
the settings recommended for each kind of note. Presets do not shift priority
or search range by depth unless the caller sets the deltas.
"""

from __future__ import annotations

from collections.abc import Callable

from src.lorebook.entries import BuildableEntry
from src.lorebook.errors import UnknownPresetError
from src.lorebook.models import ContextOverrides, EntryOverrides
from src.lorebook.strategies import DepthDelta, StrategyConfig

# Type alias for preset factory functions
PresetFactory = Callable[..., DepthDelta]

PRESET_PRIORITY_DELTA = 0
PRESET_SEARCH_DELTA = 0

PRESET_CONTEXT = ContextOverrides(prefix="[ ", suffix="]\n")


def preset_strategy(
    config: StrategyConfig | None,
    context: ContextOverrides,
    entry: EntryOverrides | None = None,
) -> DepthDelta:
    """Create a preset strategy; `config` wins over the preset's defaults."""
    config = config or StrategyConfig()
    merged_context = PRESET_CONTEXT.overlaid(context).overlaid(config.context)
    merged_entry = entry.overlaid(config.entry) if entry else config.entry

    return DepthDelta(
        StrategyConfig(
            context=merged_context,
            entry=merged_entry,
            priority_delta=config.priority_delta,
            search_delta=config.search_delta,
        ),
        priority_delta=PRESET_PRIORITY_DELTA,
        search_delta=PRESET_SEARCH_DELTA,
    )


# =============================================================================
# Presets
# =============================================================================


def concept(config: StrategyConfig | None = None) -> DepthDelta:
    """A note for broader world concepts."""
    return preset_strategy(
        config,
        ContextOverrides(reserved_tokens=0, budget_priority=800, insertion_position=-1),
        EntryOverrides(search_range=2000),
    )


def faction(config: StrategyConfig | None = None) -> DepthDelta:
    """A note for factions."""
    return preset_strategy(
        config,
        ContextOverrides(reserved_tokens=0, budget_priority=700, insertion_position=-1),
        EntryOverrides(search_range=5000),
    )


def species(config: StrategyConfig | None = None) -> DepthDelta:
    """A note for races and species."""
    return preset_strategy(
        config,
        ContextOverrides(reserved_tokens=0, budget_priority=600, insertion_position=-1),
        EntryOverrides(search_range=2000),
    )


def place(config: StrategyConfig | None = None) -> DepthDelta:
    """A note for locations and places."""
    return preset_strategy(
        config,
        ContextOverrides(reserved_tokens=0, budget_priority=500, insertion_position=-1),
        EntryOverrides(search_range=3000),
    )


def character(config: StrategyConfig | None = None) -> DepthDelta:
    """A note for characters."""
    return preset_strategy(
        config,
        ContextOverrides(reserved_tokens=200, budget_priority=400, insertion_position=-1),
        EntryOverrides(search_range=2000),
    )


def brace(config: StrategyConfig | None = None) -> DepthDelta:
    """Supporting information for another note.

    Reinforces something the AI has trouble remembering: appearance, worn
    clothing, motives, relationships.
    """
    return preset_strategy(
        config,
        ContextOverrides(reserved_tokens=200, budget_priority=-400, insertion_position=-8),
    )


def synopsis(config: StrategyConfig | None = None) -> DepthDelta:
    """An author's note describing the story as a whole (genre, themes, setting).

    Only one of these should be provided.
    """
    return preset_strategy(
        config,
        ContextOverrides(reserved_tokens=200, budget_priority=-500, insertion_position=-8),
        EntryOverrides(force_activation=True),
    )


def pillar(config: StrategyConfig | None = None) -> DepthDelta:
    """Like a brace, but inserted much closer to the bottom of the context."""
    return preset_strategy(
        config,
        ContextOverrides(reserved_tokens=200, budget_priority=-600, insertion_position=-4),
    )


def signpost(config: StrategyConfig | None = None) -> DepthDelta:
    """The `***` separator between lore and story."""
    return preset_strategy(
        config,
        ContextOverrides(
            prefix="\n",
            suffix="\n\n",
            reserved_tokens=3,
            budget_priority=100,
            insertion_position=-1,
        ),
        EntryOverrides(force_activation=True),
    )


def signpost_entry() -> BuildableEntry:
    """A ready-made signpost entry."""
    return BuildableEntry(name="Signpost", keys=[], text="***", strategy=signpost())


# Registry mapping preset names to factory functions
PRESET_FACTORIES: dict[str, PresetFactory] = {
    "concept": concept,
    "faction": faction,
    "species": species,
    "place": place,
    "character": character,
    "brace": brace,
    "synopsis": synopsis,
    "pillar": pillar,
    "signpost": signpost,
}


def create_preset(name: str, config: StrategyConfig | None = None) -> DepthDelta:
    """Create a preset strategy by name.

    Args:
        name: Preset name, case-insensitive (e.g. "character")
        config: Overrides applied on top of the preset

    Returns:
        New DepthDelta strategy instance

    Raises:
        UnknownPresetError: If no preset has that name
    """
    factory = PRESET_FACTORIES.get(name.lower())
    if factory is None:
        raise UnknownPresetError(f"Unknown strategy preset: {name}")
    return factory(config)
