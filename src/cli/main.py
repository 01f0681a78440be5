"""Taxonomy import CLI entry points.

This module maps the import command onto the pipeline SDK call.
Object ids go to stdout; diagnostics go to the structured log.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from core.config import ImportConfig
from core.errors import TaxonomyImportError
from core.logging_config import get_logger
from core.types import ImportOptions
from ingest.pipeline import import_taxonomy
from ingest.source_registry import supported_source_types

_LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="taxonomy-import",
        description="Import taxonomy data from a source",
    )
    parser.add_argument(
        "source_type",
        choices=supported_source_types(),
        help="Type of source being imported",
    )
    parser.add_argument(
        "source",
        nargs="?",
        help="Host/URL for source. Format varies by source type",
    )
    parser.add_argument(
        "--append",
        action="store_true",
        help="Layer imported data on top of the current tree",
    )
    parser.add_argument("--commit-to", help="Branch or ref to commit the imported tree to")
    parser.add_argument("--commit-message", help="Commit message used with --commit-to")
    parser.add_argument("--git-dir", help="Override TAXONOMY_GIT_DIR for this command")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the taxonomy import CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)
    options = ImportOptions(
        source_type=args.source_type,
        source=args.source,
        append=args.append,
        commit_to=args.commit_to,
        commit_message=args.commit_message,
    )
    try:
        config = _build_config(args.git_dir)
        result = import_taxonomy(options, config)
    except TaxonomyImportError as error:
        _LOGGER.error("import_failed", source_type=args.source_type, error=str(error))
        return 1
    print(result.commit_id or result.tree_id)
    return 0


def _build_config(git_dir: str | None) -> ImportConfig:
    """Build runtime config with optional git-dir override."""
    config = ImportConfig.from_env()
    if git_dir:
        config = replace(config, git_dir=Path(git_dir).expanduser().resolve())
    return config
