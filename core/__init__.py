"""Core shared contracts and utilities."""

from core.structured_logging import (
    configure_structured_logging,
    get_run_id,
    package_scope,
    phase_scope,
    set_run_id,
)
from core.startup_config import (
    ConfigValidationError,
    load_json_config,
    load_package_json,
    load_tsconfig,
    load_tsconfig_chain,
    resolve_compiler_options,
    resolve_main_file,
    resolve_strict_config_validation,
    validate_startup_config,
)
from core.run_artifacts import final_status, write_run_report
from core.workspace_manifest import (
    PackageSpec,
    WorkspaceManifest,
    load_workspace_manifest,
    resolve_package_root,
)

__all__ = [
    "configure_structured_logging",
    "get_run_id",
    "package_scope",
    "phase_scope",
    "set_run_id",
    "ConfigValidationError",
    "load_json_config",
    "load_package_json",
    "load_tsconfig",
    "load_tsconfig_chain",
    "resolve_compiler_options",
    "resolve_main_file",
    "resolve_strict_config_validation",
    "validate_startup_config",
    "final_status",
    "write_run_report",
    "PackageSpec",
    "WorkspaceManifest",
    "load_workspace_manifest",
    "resolve_package_root",
]
