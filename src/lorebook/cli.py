"""
CLI for building lorebooks from Python scripts.

A lorebook script is a Python file defining a BuilderConfig, by default under
the name LOREBOOK. `build` writes `<script name>.lorebook`; `show` prints the
JSON instead.
"""

import argparse
import importlib.util
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from .builder import build_entries
from .entries import BuilderConfig
from .errors import LorebookError, LorebookLoadError
from .output import lorebook_name_for, write_lorebook

load_dotenv()

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper(), format="%(message)s")
logger = logging.getLogger(__name__)

DEFAULT_ATTR = "LOREBOOK"


def load_config(script: Path, attr: str = DEFAULT_ATTR) -> BuilderConfig:
    """Load the BuilderConfig named `attr` from a Python file.

    Raises:
        LorebookLoadError: If the file can't be loaded or lacks the config
    """
    if not script.exists():
        raise LorebookLoadError(f"Script not found: {script}")

    spec = importlib.util.spec_from_file_location(f"lorebook_script_{script.stem}", script)
    if spec is None or spec.loader is None:
        raise LorebookLoadError(f"Not a Python script: {script}")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    config = getattr(module, attr, None)
    if not isinstance(config, BuilderConfig):
        raise LorebookLoadError(f"{script} does not define a BuilderConfig named {attr}")
    return config


def cmd_build(args):
    """Build a lorebook and write it to disk."""
    script = Path(args.script)
    config = load_config(script, args.attr)
    name = args.name or lorebook_name_for(script)
    path = write_lorebook(name, build_entries(config), args.output_dir)
    print(f"✅ Built lorebook: {path}")


def cmd_show(args):
    """Build a lorebook and print its JSON."""
    config = load_config(Path(args.script), args.attr)
    print(build_entries(config).to_json())


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="Build NovelAI lorebooks")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Build command
    build_parser = subparsers.add_parser("build", help="Build and write a lorebook")
    build_parser.add_argument("script", help="Python file defining the lorebook")
    build_parser.add_argument("--name", help="Output name (default: script name)")
    build_parser.add_argument(
        "--output-dir", help="Output directory (default: $LOREBOOK_OUTPUT_DIR or cwd)"
    )
    build_parser.add_argument("--attr", default=DEFAULT_ATTR, help="Name of the BuilderConfig")

    # Show command
    show_parser = subparsers.add_parser("show", help="Print a lorebook's JSON")
    show_parser.add_argument("script", help="Python file defining the lorebook")
    show_parser.add_argument("--attr", default=DEFAULT_ATTR, help="Name of the BuilderConfig")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "build": cmd_build,
        "show": cmd_show,
    }

    try:
        commands[args.command](args)
    except LorebookError as e:
        logger.error(f"Failed to build lorebook: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
