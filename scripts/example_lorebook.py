#!/usr/bin/env python3
"""A basic lorebook with fairly complex keyword matching.

Build it with:
    python -m src.lorebook.cli build scripts/example_lorebook.py

This writes `example_lorebook.lorebook`, which can be imported into NovelAI.

Keyword helpers turn plain strings into phrases that operators can compose:
- LIT: exact match
- PRE: prefix match, the default for plain strings
- POST: postfix match
- OPEN: matches any part of a word

Operators constrain how phrases appear relative to each other. NEAR and BEYOND
take options for how many words apart the phrases may be.
"""

import re

from src.lorebook import (
    BuildableEntry,
    BuilderConfig,
    ContextOverrides,
    EntryOverrides,
    build_entries,
    replace_keys,
    write_lorebook,
)
from src.lorebook.matching import ALT, LIT, WITH
from src.lorebook.output import lorebook_name_for

# Very important entries: inserted 8 lines from the latest input, space reserved
IMPORTANT_CONTEXT = ContextOverrides(
    prefix="[Note: ",
    suffix="]\n",
    reserved_tokens=2048,
    budget_priority=-200,
    insertion_position=-8,
)
IMPORTANT_ENTRY = EntryOverrides(search_range=1024)

LOREBOOK = BuilderConfig(
    # Overrides versus a new NovelAI lorebook entry
    context=ContextOverrides(prefix="• ", suffix="\n"),
    entry=EntryOverrides(search_range=8192),
    entries=[
        # Root entries without keys are always activated
        BuildableEntry(name="Story Header", keys=[], text="Theme: fantasy"),
        BuildableEntry(
            name="Definition: Kemon",
            keys=[
                LIT("kemon"),
                # Flags are ignored; matching is always case-insensitive
                re.compile(r"\b(beast|furred|scaled)-folk\b"),
            ],
            text=(
                'The word "kemon" is a term that collectively refers to the furred '
                "and scaled races of the world."
            ),
        ),
        BuildableEntry(
            name="Character: Taleir",
            keys=[LIT("taleir")],
            # Each text becomes its own entry with the same keys
            text=[
                "The main character is Taleir, an adventurous fox girl. Her hair is "
                "disheveled and neck length. Taleir is a former rogue who has come to "
                "the city of Jasco to find more legitimate work.",
                "Taleir carries the gear needed for her current job in her backpack. "
                "She relies primarily on speed and stealth, but is adept with her "
                "dagger and throwing knives when they're called for.",
            ],
            sub_entries=[
                # No keys of its own: matches on the parent's keys only
                BuildableEntry(
                    name="Backstory",
                    keys=[],
                    text=[
                        "Taleir has some notoriety as The Ghost of Mentesa Hold, due to "
                        "her origins within that slave trading outpost.",
                        "Taleir was once a rogue in Ancester and was adept at quietly "
                        "acquiring things and information by contract.",
                    ],
                ),
                BuildableEntry(
                    name="Jasco Unfamiliarity",
                    keys=[LIT("jasco")],
                    text="This is Taleir's first time in Jasco and may become lost in its streets.",
                    context=IMPORTANT_CONTEXT,
                    entry=IMPORTANT_ENTRY,
                ),
            ],
        ),
        BuildableEntry(
            name="Character: Rook",
            keys=[
                LIT("rook"),
                LIT("jasco"),
                # "jeweler" on the same line as something suggesting the city
                ("jeweler", WITH, ALT("city", "shop", "street", "town")),
            ],
            text="Rook is a male otter and a jeweler in the city of Jasco.",
            sub_op=WITH,
            sub_entries=[
                BuildableEntry(
                    name="Interest",
                    # Only "rook", not "jasco" or the jeweler business
                    base_keys=replace_keys(LIT("rook")),
                    keys=[
                        re.compile(r"\bhobb(y|ies)\b"),
                        re.compile(r"\bcloth(es|ing)\b"),
                        "tailor",
                    ],
                    text=(
                        "Rook has secretly been practicing tailoring in his basement "
                        "workshop, designing ornate clothing."
                    ),
                ),
            ],
        ),
    ],
)


if __name__ == "__main__":
    write_lorebook(lorebook_name_for(__file__), build_entries(LOREBOOK))
