"""Startup configuration validation helpers.

Provides strict/non-strict loading of a TypeScript package's ``package.json``
and ``tsconfig.json``, used by the project layer to locate the package entry
point and the compiler's output layout.
"""

from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Optional

logger = logging.getLogger(__name__)

# tsconfig.json is JSONC: comments and trailing commas are allowed
_JSONC_TOKEN_RE = re.compile(
    r'"(?:\\.|[^"\\])*"|//[^\n]*|/\*.*?\*/',
    re.DOTALL,
)
_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")

# compilerOptions holding paths relative to the config file that sets them
TSCONFIG_PATH_OPTIONS = ("outDir", "rootDir", "declarationDir")


class ConfigValidationError(RuntimeError):
    """Raised when strict startup validation fails."""


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag("STRICT_CONFIG_VALIDATION", default=default)


def _strip_jsonc(text: str) -> str:
    """Drop comments and trailing commas so JSONC parses as plain JSON."""

    def _keep_strings(match: re.Match) -> str:
        token = match.group(0)
        return token if token.startswith('"') else ""

    stripped = _JSONC_TOKEN_RE.sub(_keep_strings, text)
    return _TRAILING_COMMA_RE.sub(r"\1", stripped)


def _fail(msg: str, strict: bool, exc: Optional[BaseException] = None) -> dict[str, Any]:
    if strict:
        raise ConfigValidationError(msg) from exc
    logger.warning("%s; continuing with defaults", msg)
    return {}


def load_json_config(
    config_path: str,
    strict: bool = False,
    allow_comments: bool = False,
) -> dict[str, Any]:
    """Load and parse a JSON (or JSONC) configuration object.

    In non-strict mode this returns an empty dict on read/parse failures.
    In strict mode this raises ``ConfigValidationError``.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            text = f.read()
    except FileNotFoundError as exc:
        return _fail(f"Config file not found: {config_path}", strict, exc)

    if allow_comments:
        text = _strip_jsonc(text)

    if not text.strip():
        return _fail(f"Config file is empty: {config_path}", strict)

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        return _fail(f"Failed to parse JSON at {config_path}: {exc}", strict, exc)

    if not isinstance(payload, dict):
        return _fail(
            f"Unexpected config payload type in {config_path}: {type(payload).__name__}",
            strict,
        )
    return payload


def load_package_json(package_path: str, strict: bool = False) -> dict[str, Any]:
    """Load ``package.json``."""
    return load_json_config(package_path, strict=strict)


def load_tsconfig(tsconfig_path: str, strict: bool = False) -> dict[str, Any]:
    """Load ``tsconfig.json``, tolerating comments and trailing commas."""
    return load_json_config(tsconfig_path, strict=strict, allow_comments=True)


def _resolve_extends_path(value: str, config_dir: str) -> Optional[str]:
    """Locate the file named by a tsconfig ``extends`` entry.

    Relative and absolute paths resolve against the extending config's
    directory (with an implied ``.json``). Bare specifiers such as
    ``@tsconfig/node18/tsconfig.json`` are looked up in ``node_modules``
    directories from the config's directory upwards.
    """
    if value.startswith(".") or os.path.isabs(value):
        base = os.path.normpath(os.path.join(config_dir, value))
        candidates = [base] if base.endswith(".json") else [base, base + ".json"]
    else:
        candidates = []
        directory = config_dir
        while True:
            base = os.path.join(directory, "node_modules", value)
            candidates.extend([base, base + ".json", os.path.join(base, "tsconfig.json")])
            parent = os.path.dirname(directory)
            if parent == directory:
                break
            directory = parent

    for candidate in candidates:
        if os.path.isfile(candidate):
            return candidate
    return None


def _rebase_tsconfig_paths(config: dict[str, Any], config_dir: str, root: str) -> dict[str, Any]:
    """Anchor the path-valued settings of one config level.

    Output directories become absolute paths resolved against the declaring
    file.
    ``files`` / ``include`` / ``exclude`` entries become relative to ``root``,
    the directory of the top-level tsconfig.
    """
    rebased = dict(config)
    options = config.get("compilerOptions")
    if isinstance(options, dict):
        options = dict(options)
        for key in TSCONFIG_PATH_OPTIONS:
            value = options.get(key)
            if isinstance(value, str) and value:
                options[key] = os.path.normpath(os.path.join(config_dir, value))
        rebased["compilerOptions"] = options

    if os.path.normpath(config_dir) != os.path.normpath(root):
        for key in ("files", "include", "exclude"):
            entries = config.get(key)
            if isinstance(entries, list):
                rebased[key] = [
                    os.path.relpath(os.path.join(config_dir, str(entry)), root).replace(os.sep, "/")
                    for entry in entries
                ]
    return rebased


def _merge_tsconfig(base: dict[str, Any], child: dict[str, Any]) -> dict[str, Any]:
    # compilerOptions merge key by key; every other setting is replaced whole
    merged = dict(base)
    merged.update({key: value for key, value in child.items() if key != "compilerOptions"})
    base_options = base.get("compilerOptions")
    child_options = child.get("compilerOptions")
    if isinstance(base_options, dict) and isinstance(child_options, dict):
        merged["compilerOptions"] = {**base_options, **child_options}
    elif child_options is not None:
        merged["compilerOptions"] = child_options
    return merged


def _load_tsconfig_level(
    tsconfig_path: str,
    root: str,
    strict: bool,
    chain: tuple[str, ...],
) -> dict[str, Any]:
    if tsconfig_path in chain:
        return _fail(f"Circular tsconfig extends: {tsconfig_path}", strict)

    config = load_tsconfig(tsconfig_path, strict=strict)
    if not config:
        return {}
    config_dir = os.path.dirname(tsconfig_path)
    config = _rebase_tsconfig_paths(config, config_dir, root)

    extends = config.pop("extends", None)
    if extends is None:
        return config
    if isinstance(extends, str):
        extends = [extends]
    if not isinstance(extends, list) or not all(isinstance(item, str) for item in extends):
        msg = f"tsconfig 'extends' must be a string or a list of strings in {tsconfig_path}"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; ignoring it", msg)
        return config

    # Later bases override earlier ones; the extending config overrides all
    merged: dict[str, Any] = {}
    for value in extends:
        base_path = _resolve_extends_path(value, config_dir)
        if base_path is None:
            msg = f"tsconfig base '{value}' extended by {tsconfig_path} not found"
            if strict:
                raise ConfigValidationError(msg)
            logger.warning("%s; ignoring it", msg)
            continue
        base = _load_tsconfig_level(base_path, root, strict, chain + (tsconfig_path,))
        merged = _merge_tsconfig(merged, base)
    return _merge_tsconfig(merged, config)


def load_tsconfig_chain(tsconfig_path: str, strict: bool = False) -> dict[str, Any]:
    """Load ``tsconfig.json`` with its ``extends`` chain merged in.

    Inherited ``compilerOptions`` sit under the extending file's options, and
    ``files`` / ``include`` / ``exclude`` are inherited when the extending file
    does not set them. Output directories (``outDir``, ``rootDir``,
    ``declarationDir``) come back as absolute paths resolved against the file
    that declares them; file lists come back relative to the top-level
    config's directory. The merged payload has no ``extends`` key.
    """
    abs_path = os.path.abspath(tsconfig_path)
    return _load_tsconfig_level(abs_path, os.path.dirname(abs_path), strict, ())


def resolve_main_file(
    package_data: dict[str, Any],
    root: str,
    strict: bool = False,
) -> Optional[str]:
    """Resolve the absolute path of the package's ``main`` entry point.

    Returns None when ``main`` is unset; an unset entry point is a normal
    outcome, only a malformed one is a validation failure.
    """
    main = package_data.get("main")
    if main is None:
        logger.info("package.json has no 'main' entry point")
        return None
    if not isinstance(main, str) or not main.strip():
        msg = "package.json 'main' must be a non-empty string"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; ignoring it", msg)
        return None
    return os.path.normpath(os.path.join(root, main))


def resolve_compiler_options(
    tsconfig_data: dict[str, Any],
    strict: bool = False,
) -> dict[str, Any]:
    """Fetch ``compilerOptions`` from a tsconfig payload."""
    options = tsconfig_data.get("compilerOptions", {})
    if not isinstance(options, dict):
        msg = "tsconfig 'compilerOptions' must be an object"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; using defaults", msg)
        return {}
    return options


def validate_startup_config(
    root: str,
    required_files: tuple[str, ...] = ("package.json", "tsconfig.json"),
    strict: bool = False,
) -> dict[str, Any]:
    """Validate that a package root holds the expected files and return a summary."""
    missing: list[str] = [
        name for name in required_files if not os.path.isfile(os.path.join(root, name))
    ]

    if missing and strict:
        raise ConfigValidationError(
            f"Missing required files in {root}: " + ", ".join(missing)
        )

    if missing:
        logger.warning(
            "Missing files (%s) in %s; defaults may be used",
            ", ".join(missing),
            root,
        )

    return {
        "root": root,
        "strict": strict,
        "required_files": list(required_files),
        "missing_files": missing,
    }
