"""Lorebook data models.

This module defines the fixed-shape configuration records and the output
document consumed by NovelAI. Uses Pydantic for serialization; field names are
snake_case in Python and camelCase on the wire.

Two kinds of config record exist for each concern:
- Resolved configs (ContextConfig, EntryConfig) have every field set
- Overrides (ContextOverrides, EntryOverrides) leave unset fields as None and
  are merged over a resolved config with `merged()`
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# =============================================================================
# Enums
# =============================================================================


class TrimDirection(str, Enum):
    """Which end of an entry is trimmed when context runs out."""

    TRIM_BOTTOM = "trimBottom"
    TRIM_TOP = "trimTop"
    DO_NOT_TRIM = "doNotTrim"


class InsertionType(str, Enum):
    """Unit used for insertion and maximum trimming."""

    NEWLINE = "newline"
    SENTENCE = "sentence"
    TOKEN = "token"


class _WireModel(BaseModel):
    """Immutable model serialized with camelCase names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# =============================================================================
# Resolved configs
# =============================================================================


class ContextConfig(_WireModel):
    """Presentation settings of a lore entry."""

    prefix: str
    suffix: str
    token_budget: int
    reserved_tokens: int
    budget_priority: int
    trim_direction: TrimDirection
    insertion_type: InsertionType
    maximum_trim_type: InsertionType
    insertion_position: int

    def merged(self, overrides: ContextOverrides | None) -> ContextConfig:
        """Return a copy with every set field of `overrides` applied."""
        if overrides is None:
            return self
        return self.model_copy(update=overrides.model_dump(exclude_none=True))


class EntryConfig(_WireModel):
    """Activation settings of a lore entry."""

    search_range: int
    enabled: bool
    force_activation: bool
    key_relative: bool
    non_story_activatable: bool

    def merged(self, overrides: EntryOverrides | None) -> EntryConfig:
        """Return a copy with every set field of `overrides` applied."""
        if overrides is None:
            return self
        return self.model_copy(update=overrides.model_dump(exclude_none=True))


# =============================================================================
# Overrides
# =============================================================================


class _Overrides(_WireModel):
    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)

    def without(self, *names: str):
        """Drop the named fields; returns None when nothing is left."""
        remaining = self.model_dump(exclude_none=True, exclude=set(names))
        if not remaining:
            return None
        return type(self)(**remaining)

    def overlaid(self, other):
        """Combine with `other`, whose set fields win."""
        if other is None:
            return self
        return type(self)(**{**self.model_dump(exclude_none=True), **other.model_dump(exclude_none=True)})


class ContextOverrides(_Overrides):
    """Partial ContextConfig."""

    prefix: str | None = None
    suffix: str | None = None
    token_budget: int | None = None
    reserved_tokens: int | None = None
    budget_priority: int | None = None
    trim_direction: TrimDirection | None = None
    insertion_type: InsertionType | None = None
    maximum_trim_type: InsertionType | None = None
    insertion_position: int | None = None


class EntryOverrides(_Overrides):
    """Partial EntryConfig."""

    search_range: int | None = None
    enabled: bool | None = None
    force_activation: bool | None = None
    key_relative: bool | None = None
    non_story_activatable: bool | None = None


# =============================================================================
# Output
# =============================================================================


class LorebookSettings(_WireModel):
    """Lorebook-wide settings."""

    order_by_key_locations: bool = False


class LoreEntry(_WireModel):
    """A single, fully resolved lorebook entry."""

    display_name: str
    text: str
    keys: list[str] = Field(default_factory=list)
    context_config: ContextConfig
    search_range: int
    enabled: bool
    force_activation: bool
    key_relative: bool
    non_story_activatable: bool


class Lorebook(_WireModel):
    """Complete lorebook document.

    This is the output of the builder and the input of the NovelAI importer.
    """

    lorebook_version: int = 1
    settings: LorebookSettings = Field(default_factory=LorebookSettings)
    entries: list[LoreEntry] = Field(default_factory=list)

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_json(cls, json_str: str) -> Lorebook:
        """Deserialize from JSON string."""
        return cls.model_validate_json(json_str)
