#!/usr/bin/env python3
"""Entry listing for every package of a workspace manifest.

Manifest -> per-package project load -> module resolution -> two-level listing,
followed by a JSON run report with per-package counts and status.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Optional, TextIO

from core.run_artifacts import final_status, write_run_report
from core.startup_config import resolve_strict_config_validation, validate_startup_config
from core.structured_logging import (
    configure_structured_logging,
    package_scope,
    phase_scope,
    set_run_id,
)
from core.workspace_manifest import (
    PackageSpec,
    WorkspaceManifest,
    load_workspace_manifest,
    resolve_package_root,
)
from entries.extractor import ExtractionStats, main_module_entry, module_entry
from entries.models import ModuleEntry
from run_entries import print_listing
from source_model.config import DEFAULT_LOG_LEVEL
from source_model.project import Project

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Workspace entry listing: one two-level listing per manifest package",
    )
    parser.add_argument(
        "--manifest-path",
        required=True,
        help="Path to workspace manifest YAML/JSON.",
    )
    parser.add_argument(
        "--report-dir",
        default=None,
        help="Directory for the JSON run report. Default: manifest report_dir.",
    )
    parser.add_argument(
        "--strict-config",
        action="store_true",
        default=resolve_strict_config_validation(default=False),
        help=(
            "Enable strict config validation. "
            "Fail a package on missing or malformed package.json/tsconfig.json."
        ),
    )
    parser.add_argument(
        "--continue-on-package-error",
        action="store_true",
        default=True,
        help="Continue processing other packages when one fails (default: true).",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_false",
        dest="continue_on_package_error",
        help="Abort immediately on first package failure.",
    )
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        help=f"Logging level. Default: {DEFAULT_LOG_LEVEL}",
    )
    return parser.parse_args(argv)


def _resolve_entries(project: Project, spec: PackageSpec) -> tuple[list[ModuleEntry], list[str]]:
    """Resolve the modules a package spec asks for, plus the ones not found."""
    if not spec.modules:
        entry = main_module_entry(project)
        return ([entry], []) if entry is not None else ([], ["<main>"])

    found: list[ModuleEntry] = []
    missing: list[str] = []
    for module_path in spec.modules:
        entry = module_entry(project, module_path)
        if entry is None:
            missing.append(module_path)
        else:
            found.append(entry)
    return found, missing


def _process_package(
    *,
    spec: PackageSpec,
    manifest_path: str,
    strict_config: bool,
    out: TextIO,
) -> dict[str, Any]:
    """List one package and return its report section."""
    root = resolve_package_root(manifest_path, spec)
    strict = strict_config if spec.strict is None else spec.strict
    package_report: dict[str, Any] = {
        "name": spec.name,
        "root": str(root),
        "status": "failed",
    }

    with phase_scope(f"{spec.name}_validate"):
        package_report["config"] = validate_startup_config(str(root), strict=strict)

    project = Project(str(root), strict=strict)
    with phase_scope(f"{spec.name}_resolve"):
        found, missing = _resolve_entries(project, spec)

    stats = ExtractionStats()
    with phase_scope(f"{spec.name}_list"):
        out.write(f"== {spec.name}\n")
        if not found:
            out.write("Main module not found\n" if not spec.modules else "No modules found\n")
        for entry in found:
            print_listing(entry, out=out, stats=stats, label="Module")

    package_report["modules"] = [entry.name for entry in found]
    package_report["missing_modules"] = missing
    package_report["stats"] = stats.to_dict()
    package_report["status"] = "success"
    return package_report


def execute_workspace_listing(
    *,
    manifest: WorkspaceManifest,
    manifest_path: str,
    strict_config: bool,
    continue_on_package_error: bool,
    out: TextIO = sys.stdout,
) -> dict[str, Any]:
    """Execute the listing for every enabled manifest package."""
    enabled_packages = [p for p in manifest.packages if p.enabled]
    run_report: dict[str, Any] = {
        "workspace_name": manifest.workspace_name,
        "packages": [],
        "status": "failed",
    }

    succeeded = 0
    for spec in enabled_packages:
        with package_scope(spec.name):
            try:
                run_report["packages"].append(
                    _process_package(
                        spec=spec,
                        manifest_path=manifest_path,
                        strict_config=strict_config,
                        out=out,
                    )
                )
                succeeded += 1
            except Exception as exc:
                run_report["packages"].append(
                    {
                        "name": spec.name,
                        "status": "failed",
                        "error": str(exc),
                    }
                )
                logger.error("Package processing failed: package=%s error=%s", spec.name, exc, exc_info=True)
                if not continue_on_package_error:
                    break

    run_report["status"] = final_status(len(enabled_packages), succeeded)
    return run_report


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    configure_structured_logging(args.log_level)
    run_id = set_run_id()

    try:
        manifest = load_workspace_manifest(args.manifest_path)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Invalid manifest: %s", exc)
        return 2

    report = execute_workspace_listing(
        manifest=manifest,
        manifest_path=args.manifest_path,
        strict_config=args.strict_config,
        continue_on_package_error=args.continue_on_package_error,
    )
    report_path = write_run_report(
        report,
        run_id=run_id,
        output_dir=args.report_dir or manifest.report_dir,
    )
    logger.info("Run report written to %s (status=%s)", report_path, report["status"])
    return 0 if report["status"] != "failed" else 1


if __name__ == "__main__":
    sys.exit(main())
