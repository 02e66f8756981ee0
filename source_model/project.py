"""
TypeScript project loading.

A Project owns the parsed source modules of one package root. It reads
``package.json`` for the package entry point and ``tsconfig.json`` for the
compiler's input/output layout, so that a compiled entry point such as
``lib/index.js`` can be traced back to the module ``src/index.ts``.
"""

import fnmatch
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.startup_config import (
    load_package_json,
    load_tsconfig_chain,
    resolve_compiler_options,
    resolve_main_file,
    resolve_strict_config_validation,
)
from source_model.config import (
    DECLARATION_FILE_SUFFIXES,
    PACKAGE_FILE_NAME,
    SKIPPED_DIRECTORIES,
    TS_EXTENSIONS,
    TS_OUTPUT_EXTENSIONS,
    TSCONFIG_FILE_NAME,
)
from source_model.models import SourceModule
from source_model.parser import load_module

logger = logging.getLogger(__name__)

_GLOB_CHARS = set("*?[")


def is_declaration_file(path: str) -> bool:
    """Whether a path is a ``.d.ts`` style declaration file."""
    return path.endswith(DECLARATION_FILE_SUFFIXES)


def is_typescript_file(path: str) -> bool:
    return os.path.splitext(path)[1] in TS_EXTENSIONS


def discover_typescript_files(directory: str, excluded: Optional[List[str]] = None) -> List[str]:
    """Recursively discover TypeScript source files under a directory.

    Args:
        directory: Root directory to search.
        excluded: Absolute directory paths to skip entirely.

    Returns:
        Sorted list of absolute file paths.
    """
    directory = os.path.abspath(directory)
    excluded_dirs = {os.path.abspath(path) for path in (excluded or [])}
    ts_files = []

    for root, dirs, files in os.walk(directory):
        # Skip hidden directories, dependency/build directories and excluded paths
        dirs[:] = [
            d for d in dirs
            if not d.startswith('.')
            and d not in SKIPPED_DIRECTORIES
            and os.path.join(root, d) not in excluded_dirs
        ]

        for file in files:
            if is_typescript_file(file):
                ts_files.append(os.path.join(root, file))

    logger.debug(f"Found {len(ts_files)} TypeScript files in {directory}")
    return sorted(ts_files)


def _expand_include_pattern(root: str, pattern: str) -> str:
    """Turn a tsconfig ``include`` entry into a recursive glob pattern."""
    pattern = pattern.rstrip("/")
    if not _GLOB_CHARS.intersection(pattern):
        if os.path.isdir(os.path.join(root, pattern)):
            return pattern + "/**/*"
    return pattern


def _matches_any(rel_path: str, patterns: List[str]) -> bool:
    for pattern in patterns:
        pattern = pattern.rstrip("/")
        if fnmatch.fnmatch(rel_path, pattern) or rel_path.startswith(pattern + "/"):
            return True
        if "**/" in pattern and fnmatch.fnmatch(rel_path, pattern.replace("**/", "")):
            return True
    return False


class Project:
    """A TypeScript package rooted at a directory.

    Source modules are parsed lazily, once per Project, and kept alive for the
    Project's lifetime since entries are views into their syntax trees.
    """

    def __init__(self, root: str, strict: Optional[bool] = None):
        self.root = os.path.abspath(root)
        self.strict = resolve_strict_config_validation() if strict is None else strict
        self._modules: Dict[str, SourceModule] = {}
        self._package_data: Optional[Dict[str, Any]] = None
        self._tsconfig_data: Optional[Dict[str, Any]] = None
        self._source_file_paths: Optional[List[str]] = None

    def __repr__(self) -> str:
        return f"Project(root={self.root!r})"

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def package_file_path(self) -> str:
        return os.path.join(self.root, PACKAGE_FILE_NAME)

    @property
    def tsconfig_file_path(self) -> str:
        return os.path.join(self.root, TSCONFIG_FILE_NAME)

    @property
    def package_data(self) -> Dict[str, Any]:
        if self._package_data is None:
            self._package_data = load_package_json(self.package_file_path, strict=self.strict)
        return self._package_data

    @property
    def tsconfig_data(self) -> Dict[str, Any]:
        if self._tsconfig_data is None:
            self._tsconfig_data = load_tsconfig_chain(self.tsconfig_file_path, strict=self.strict)
        return self._tsconfig_data

    @property
    def compiler_options(self) -> Dict[str, Any]:
        return resolve_compiler_options(self.tsconfig_data, strict=self.strict)

    @property
    def main_file_path(self) -> Optional[str]:
        """Absolute path of the package's ``main`` file, or None when unset."""
        return resolve_main_file(self.package_data, self.root, strict=self.strict)

    def _resolve_option_dir(self, key: str) -> Optional[str]:
        value = self.compiler_options.get(key)
        if not isinstance(value, str) or not value:
            return None
        return os.path.normpath(os.path.join(self.root, value))

    @property
    def out_dir(self) -> Optional[str]:
        return self._resolve_option_dir("outDir")

    @property
    def declaration_dir(self) -> Optional[str]:
        return self._resolve_option_dir("declarationDir")

    @property
    def root_dir(self) -> str:
        """Root of the emitted source layout.

        Defaults to the common directory of all non-declaration inputs, as
        the TypeScript compiler computes it.
        """
        explicit = self._resolve_option_dir("rootDir")
        if explicit is not None:
            return explicit
        inputs = [path for path in self.source_file_paths if not is_declaration_file(path)]
        if not inputs:
            return self.root
        return os.path.commonpath([os.path.dirname(path) for path in inputs])

    # ------------------------------------------------------------------
    # Source files
    # ------------------------------------------------------------------

    def _configured_source_files(self) -> Optional[List[str]]:
        config = self.tsconfig_data
        files = config.get("files")
        include = config.get("include")
        if not isinstance(files, list) and not isinstance(include, list):
            return None

        exclude = config.get("exclude")
        exclude_patterns = [str(p) for p in exclude] if isinstance(exclude, list) else []

        paths = set()
        for entry in files if isinstance(files, list) else []:
            path = os.path.normpath(os.path.join(self.root, str(entry)))
            if os.path.isfile(path):
                paths.add(path)
            else:
                logger.warning("tsconfig 'files' entry not found: %s", entry)

        for entry in include if isinstance(include, list) else []:
            pattern = _expand_include_pattern(self.root, str(entry))
            for match in _glob(self.root, pattern):
                rel_path = os.path.relpath(match, self.root).replace(os.sep, "/")
                if _matches_any(rel_path, exclude_patterns):
                    continue
                if any(part in SKIPPED_DIRECTORIES for part in rel_path.split("/")[:-1]):
                    continue
                paths.add(match)

        return sorted(path for path in paths if is_typescript_file(path))

    @property
    def source_file_paths(self) -> List[str]:
        """Absolute paths of the project's TypeScript inputs, sorted."""
        if self._source_file_paths is None:
            configured = self._configured_source_files()
            if configured is None:
                excluded = [path for path in (self.out_dir, self.declaration_dir) if path]
                configured = discover_typescript_files(self.root, excluded=excluded)
            self._source_file_paths = configured
            logger.info(
                "Project %s has %d TypeScript source files",
                self.root,
                len(configured),
            )
        return self._source_file_paths

    def module(self, path: str) -> Optional[SourceModule]:
        """Return the parsed module at ``path`` (absolute or root-relative).

        Returns None when the path is not one of the project's source files.
        """
        abs_path = os.path.normpath(os.path.join(self.root, path))
        if abs_path not in self.source_file_paths:
            logger.debug("No source module at %s", abs_path)
            return None
        if abs_path not in self._modules:
            self._modules[abs_path] = load_module(abs_path)
        return self._modules[abs_path]

    @property
    def modules(self) -> List[SourceModule]:
        return [self.module(path) for path in self.source_file_paths]

    # ------------------------------------------------------------------
    # Emit layout
    # ------------------------------------------------------------------

    def output_file_paths(self, source_path: str) -> List[str]:
        """Compute the files the compiler emits for a source file.

        Declaration files emit nothing. Otherwise the JavaScript output is
        placed under ``outDir`` (mirroring ``rootDir``) or next to the source,
        plus a ``.d.ts`` file when ``declaration`` is enabled.
        """
        if is_declaration_file(source_path):
            return []

        base, ext = os.path.splitext(source_path)
        js_ext = TS_OUTPUT_EXTENSIONS.get(ext)
        if js_ext is None:
            return []

        options = self.compiler_options
        if ext == ".tsx" and options.get("jsx") == "preserve":
            js_ext = ".jsx"

        rel_base = os.path.relpath(base, self.root_dir)
        out_dir = self.out_dir
        js_base = os.path.join(out_dir, rel_base) if out_dir else base
        outputs = [os.path.normpath(js_base + js_ext)]

        if options.get("declaration") or options.get("composite"):
            dts_dir = self.declaration_dir or out_dir
            dts_base = os.path.join(dts_dir, rel_base) if dts_dir else base
            dts_ext = {".mjs": ".d.mts", ".cjs": ".d.cts"}.get(js_ext, ".d.ts")
            outputs.append(os.path.normpath(dts_base + dts_ext))
        return outputs


def _glob(root: str, pattern: str) -> List[str]:
    return [str(path) for path in Path(root).glob(pattern) if path.is_file()]
