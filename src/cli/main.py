"""nimbus-dump CLI entry point.

This module parses the store path, reads each table in turn, and
prints one section per table. Any failure stops the run.
"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys
from typing import Sequence

from core.config import NimbusDumpConfig
from core.errors import NimbusDumpError
from core.logging_config import configure_logging
from readers.store_inspector import StoreInspector, inspect_store
from render.text_report import (
    render_enrollments,
    render_experiments,
    render_metadata,
    render_updates,
)


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="nimbus-dump",
        description="Print the contents of a Nimbus experimentation database",
    )
    parser.add_argument("store_dir", metavar="STORE_DIR", help="Nimbus database directory")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the nimbus-dump CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = NimbusDumpConfig.from_env()
        configure_logging(config.log_level)
        with inspect_store(Path(args.store_dir), config) as inspector:
            _print_sections(inspector)
    except NimbusDumpError as error:
        print(f"error={error}", file=sys.stderr)
        return 1
    return 0


def _print_sections(inspector: StoreInspector) -> None:
    """Read and print each table section in store order."""
    print(render_metadata(inspector.metadata()), end="")
    print(render_enrollments(inspector.enrollments()), end="")
    print(render_experiments(inspector.experiments()), end="")
    print(render_updates(inspector.updates()), end="")
