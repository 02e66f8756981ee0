#!/usr/bin/env python3
"""
List the documentation entries of a TypeScript package's main module.

Resolves the package's entry point from package.json, finds the source module
that compiles to it, and prints each top-level entry title followed by the
titles of the entries it owns (two levels, not a recursive dump).

Usage:
    python run_entries.py /path/to/package
    python run_entries.py /path/to/package --module src/widgets.ts
    python run_entries.py /path/to/package --json
"""

import argparse
import json
import logging
import sys
from typing import List, Optional, TextIO

from core.startup_config import ConfigValidationError, resolve_strict_config_validation
from core.structured_logging import configure_structured_logging, phase_scope, set_run_id
from entries.extractor import (
    ExtractionStats,
    describe_module,
    iter_entry_listing,
    main_module_entry,
    module_entry,
)
from entries.models import ModuleEntry
from source_model.config import DEFAULT_LOG_LEVEL
from source_model.project import Project

logger = logging.getLogger(__name__)

MEMBER_INDENT = "  "


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="TypeScript API entry listing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_entries.py ./my-package\n"
            "  python run_entries.py ./my-package --module src/index.ts --json\n"
        ),
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Package root holding package.json and tsconfig.json. Default: current directory.",
    )
    parser.add_argument(
        "--module",
        default=None,
        help="List this source module (root-relative) instead of the package main module.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print the listing as one JSON document instead of text.",
    )
    parser.add_argument(
        "--strict-config",
        action="store_true",
        default=resolve_strict_config_validation(default=False),
        help="Fail on missing or malformed package.json / tsconfig.json.",
    )
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        help=f"Logging level. Default: {DEFAULT_LOG_LEVEL}",
    )
    return parser.parse_args(argv)


def resolve_module_entry(project: Project, module_path: Optional[str]) -> Optional[ModuleEntry]:
    """Pick the requested module, or the package main module when none is given."""
    if module_path:
        return module_entry(project, module_path)
    return main_module_entry(project)


def print_listing(
    entry: ModuleEntry,
    as_json: bool = False,
    out: TextIO = sys.stdout,
    stats: Optional[ExtractionStats] = None,
    label: str = "Main module",
) -> None:
    """Print a module's two-level entry listing."""
    if as_json:
        out.write(json.dumps(describe_module(entry, stats=stats), indent=2, ensure_ascii=False) + "\n")
        return

    out.write(f"{label}: {entry.source_file_path}\n")
    for listing in iter_entry_listing(entry, stats=stats):
        out.write(listing.title + "\n")
        for member_title in listing.member_titles:
            out.write(f"{MEMBER_INDENT}{member_title}\n")


def run(
    root: str,
    module_path: Optional[str] = None,
    as_json: bool = False,
    strict: bool = False,
    out: TextIO = sys.stdout,
) -> int:
    """List one package and return a process exit code.

    A package whose main module cannot be found is a normal outcome (exit 0);
    only configuration errors in strict mode fail the run.
    """
    project = Project(root, strict=strict)
    try:
        with phase_scope("resolve"):
            entry = resolve_module_entry(project, module_path)
    except ConfigValidationError as e:
        logger.error(f"Configuration error: {e}")
        return 2

    if entry is None:
        out.write(f"Module not found: {module_path}\n" if module_path else "Main module not found\n")
        return 0

    stats = ExtractionStats()
    with phase_scope("list"):
        print_listing(
            entry,
            as_json=as_json,
            out=out,
            stats=stats,
            label="Module" if module_path else "Main module",
        )
    logger.info(f"Listing complete: {stats}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the listing script."""
    args = parse_args(argv)
    configure_structured_logging(args.log_level)
    set_run_id()

    try:
        return run(
            root=args.root,
            module_path=args.module,
            as_json=args.json,
            strict=args.strict_config,
        )
    except FileNotFoundError as e:
        logger.error(f"File error: {e}")
        return 1
    except Exception as e:
        logger.error(f"Listing failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
