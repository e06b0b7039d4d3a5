"""Tests for the strategy preset registry."""

import pytest

from src.lorebook.entries import BuildableEntry
from src.lorebook.errors import UnknownPresetError
from src.lorebook.models import ContextOverrides, EntryOverrides
from src.lorebook.registries import PRESET_FACTORIES, create_preset, signpost_entry
from src.lorebook.registries.presets import brace, character, concept, synopsis
from src.lorebook.strategies import DepthDelta, StrategyConfig
from tests.conftest import build, by_name


def test_registry_has_all_presets():
    assert set(PRESET_FACTORIES) == {
        "concept",
        "faction",
        "species",
        "place",
        "character",
        "brace",
        "synopsis",
        "pillar",
        "signpost",
    }


@pytest.mark.parametrize("name", sorted(PRESET_FACTORIES))
def test_presets_are_depth_delta_with_bracket_format(name):
    strategy = create_preset(name)
    assert isinstance(strategy, DepthDelta)
    assert strategy.default_priority_delta == 0
    assert strategy.default_search_delta == 0
    if name != "signpost":
        assert strategy.config.context.prefix == "[ "
        assert strategy.config.context.suffix == "]\n"


def test_create_preset_is_case_insensitive():
    assert create_preset("Character").config == character().config


def test_create_preset_unknown_name():
    with pytest.raises(UnknownPresetError):
        create_preset("villain")


def test_each_call_creates_a_new_instance():
    """Presets with identical settings are still unrelated strategies."""
    assert concept() is not concept()


def test_character_preset_values():
    config = character().config
    assert config.context == ContextOverrides(
        prefix="[ ",
        suffix="]\n",
        reserved_tokens=200,
        budget_priority=400,
        insertion_position=-1,
    )
    assert config.entry == EntryOverrides(search_range=2000)


def test_brace_preset_has_no_entry_overrides():
    config = brace().config
    assert config.entry is None
    assert config.context.insertion_position == -8


def test_caller_config_wins_over_preset():
    strategy = concept(
        StrategyConfig(
            context=ContextOverrides(budget_priority=850, prefix="{ "),
            entry=EntryOverrides(enabled=False),
            priority_delta=-1,
        )
    )
    config = strategy.config
    assert config.context.budget_priority == 850
    assert config.context.prefix == "{ "
    assert config.context.suffix == "]\n"
    assert config.entry == EntryOverrides(search_range=2000, enabled=False)
    assert config.priority_delta == -1


def test_preset_keeps_settings_for_sub_entries():
    """Presets don't shift settings by depth."""
    records = by_name(
        build(
            BuildableEntry(
                name="Taleir",
                keys=["taleir"],
                text="fox",
                strategy=character(),
                sub_entries=[BuildableEntry(name="Gear", keys=["backpack"], text="gear")],
            )
        )
    )

    for record in records.values():
        assert record.context_config.budget_priority == 400
        assert record.context_config.reserved_tokens == 200
        assert record.search_range == 2000


def test_synopsis_forces_activation():
    records = build(BuildableEntry(name="Synopsis", keys=["x"], text="...", strategy=synopsis()))
    assert records[0].force_activation is True


def test_signpost_entry():
    records = build(signpost_entry())

    assert len(records) == 1
    record = records[0]
    assert record.display_name == "Signpost"
    assert record.text == "***"
    assert record.keys == []
    assert record.force_activation is True
    assert record.context_config.prefix == "\n"
    assert record.context_config.suffix == "\n\n"
    assert record.context_config.budget_priority == 100


def test_signpost_entry_has_fresh_strategy():
    assert signpost_entry().strategy is not signpost_entry().strategy
