"""Writing built lorebooks to disk."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .models import Lorebook

logger = logging.getLogger(__name__)

LOREBOOK_SUFFIX = ".lorebook"


def default_output_dir() -> Path:
    """Output directory from LOREBOOK_OUTPUT_DIR, else the working directory."""
    return Path(os.getenv("LOREBOOK_OUTPUT_DIR", "."))


def lorebook_name_for(script_path: str | Path) -> str:
    """Name a lorebook after the script that builds it.

    `stories/example.py` -> `example`
    """
    return Path(script_path).stem


def write_lorebook(name: str, lorebook: Lorebook, output_dir: str | Path | None = None) -> Path:
    """Write `lorebook` as `<output_dir>/<name>.lorebook`.

    Args:
        name: File name without extension
        lorebook: The built lorebook
        output_dir: Target directory, created if missing. Defaults to
            default_output_dir().

    Returns:
        Path of the written file
    """
    directory = Path(output_dir) if output_dir is not None else default_output_dir()
    directory.mkdir(parents=True, exist_ok=True)

    path = directory / f"{name}{LOREBOOK_SUFFIX}"
    path.write_text(lorebook.to_json(), encoding="utf-8")

    logger.info(f"Wrote {len(lorebook.entries)} entries to {path}")
    return path
