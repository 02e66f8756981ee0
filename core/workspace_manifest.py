"""Manifest contract for multi-package entry listing."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True)
class PackageSpec:
    """One TypeScript package to list.

    ``modules`` selects source modules explicitly (root-relative paths); when
    empty, the package's main module is listed.
    """

    name: str
    root: str
    modules: list[str] = field(default_factory=list)
    enabled: bool = True
    strict: bool | None = None


@dataclass(frozen=True)
class WorkspaceManifest:
    """Top-level manifest payload."""

    workspace_name: str
    packages: list[PackageSpec]
    report_dir: str = "output/run_reports"


def _expect_dict(payload: Any, ctx: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValueError(f"{ctx} must be an object")
    return payload


def _load_manifest_payload(path: str) -> dict[str, Any]:
    manifest_path = Path(path)
    if not manifest_path.is_file():
        raise FileNotFoundError(f"Manifest file not found: {manifest_path}")

    text = manifest_path.read_text(encoding="utf-8")
    suffix = manifest_path.suffix.lower()
    if suffix == ".json":
        payload = json.loads(text)
    else:
        payload = yaml.safe_load(text)
    return _expect_dict(payload, "manifest")


def _parse_package_spec(package_payload: dict[str, Any]) -> PackageSpec:
    name = str(package_payload.get("name", "")).strip()
    root = str(package_payload.get("root", "")).strip()
    enabled = bool(package_payload.get("enabled", True))
    strict_raw = package_payload.get("strict")

    if not name:
        raise ValueError("package.name is required")
    if not root:
        raise ValueError(f"package '{name}': root is required")

    modules_raw = package_payload.get("modules", [])
    if modules_raw is None:
        modules_raw = []
    if not isinstance(modules_raw, list):
        raise ValueError(f"package '{name}': modules must be a list")

    modules: list[str] = []
    for item in modules_raw:
        module = str(item).strip()
        if not module:
            raise ValueError(f"package '{name}': modules contains empty path")
        modules.append(module)

    return PackageSpec(
        name=name,
        root=root,
        modules=modules,
        enabled=enabled,
        strict=None if strict_raw is None else bool(strict_raw),
    )


def load_workspace_manifest(path: str) -> WorkspaceManifest:
    """Load and validate workspace manifest from YAML/JSON file."""
    payload = _load_manifest_payload(path)
    workspace_name = str(payload.get("workspace_name", "")).strip()
    if not workspace_name:
        raise ValueError("workspace_name is required")

    packages_raw = payload.get("packages")
    if not isinstance(packages_raw, list) or len(packages_raw) == 0:
        raise ValueError("packages must be a non-empty list")

    packages: list[PackageSpec] = []
    seen: set[str] = set()
    for raw in packages_raw:
        package_payload = _expect_dict(raw, "package entry")
        spec = _parse_package_spec(package_payload)
        if spec.name in seen:
            raise ValueError(f"Duplicate package name in manifest: {spec.name}")
        seen.add(spec.name)
        packages.append(spec)

    return WorkspaceManifest(
        workspace_name=workspace_name,
        packages=packages,
        report_dir=str(payload.get("report_dir", "output/run_reports")),
    )


def resolve_package_root(manifest_path: str, spec: PackageSpec) -> Path:
    """Resolve a package root relative to the manifest's directory if needed."""
    raw = Path(spec.root)
    return raw if raw.is_absolute() else (Path(manifest_path).resolve().parent / raw)
