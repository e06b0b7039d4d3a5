"""Registry modules for declarative mappings."""

from .presets import (
    PRESET_FACTORIES,
    create_preset,
    preset_strategy,
    signpost_entry,
)

__all__ = [
    "PRESET_FACTORIES",
    "create_preset",
    "preset_strategy",
    "signpost_entry",
]
