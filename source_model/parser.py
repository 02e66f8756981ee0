"""
Tree-sitter parser initialization and file parsing utilities.

This module provides functions to initialize the TypeScript parser and parse
source files into ``SourceModule`` objects.
"""

import logging
import os
from typing import Tuple

import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser, Tree

from source_model.models import SourceModule

# Configure logging
logger = logging.getLogger(__name__)

# Module-level language constants
TYPESCRIPT_LANGUAGE = Language(tstypescript.language_typescript())
TSX_LANGUAGE = Language(tstypescript.language_tsx())


def create_parser(tsx: bool = False) -> Parser:
    """Create and configure a tree-sitter parser for TypeScript.

    Args:
        tsx: Use the TSX dialect (JSX syntax enabled) instead of plain TypeScript.

    Returns:
        A Parser instance configured with the TypeScript or TSX language.

    Example:
        >>> parser = create_parser()
        >>> tree = parser.parse(b"export const x = 1")
    """
    parser = Parser(TSX_LANGUAGE if tsx else TYPESCRIPT_LANGUAGE)
    logger.debug("Created tree-sitter %s parser", "TSX" if tsx else "TypeScript")
    return parser


def parse_bytes(source: bytes, tsx: bool = False) -> Tree:
    """Parse raw bytes of TypeScript source code.

    Args:
        source: UTF-8 encoded bytes of TypeScript source code.
        tsx: Parse with the TSX dialect.

    Returns:
        A Tree object representing the parsed AST.

    Raises:
        TypeError: If source is not bytes.

    Example:
        >>> tree = parse_bytes(b"export function foo() {}")
        >>> tree.root_node.type
        'program'
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")

    parser = create_parser(tsx=tsx)
    tree = parser.parse(source)

    logger.debug(f"Parsed {len(source)} bytes of TypeScript code")
    return tree


def parse_source(source: bytes, path: str = "<memory>.ts") -> SourceModule:
    """Parse in-memory source into a SourceModule without touching disk.

    Args:
        source: UTF-8 encoded bytes of TypeScript source code.
        path: Path the module should report; its extension selects the dialect.

    Returns:
        A SourceModule wrapping the parsed tree.
    """
    tsx = os.path.splitext(path)[1] == ".tsx"
    tree = parse_bytes(source, tsx=tsx)
    _warn_on_syntax_errors(tree, path)
    return SourceModule(path=path, tree=tree, source_bytes=source)


def parse_file(file_path: str) -> Tuple[Tree, bytes]:
    """Parse a TypeScript source file from disk.

    Args:
        file_path: Path to the .ts, .tsx, .mts, .cts or .d.ts file.

    Returns:
        A tuple of (Tree, source_bytes).

    Raises:
        FileNotFoundError: If the file does not exist.
        IOError: If the file cannot be read.
    """
    try:
        with open(file_path, "rb") as f:
            source_bytes = f.read()
    except FileNotFoundError:
        logger.error(f"File not found: {file_path}")
        raise
    except IOError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise

    tree = parse_bytes(source_bytes, tsx=file_path.endswith(".tsx"))

    _warn_on_syntax_errors(tree, file_path)

    logger.info(f"Successfully parsed file: {file_path}")
    return tree, source_bytes


def load_module(file_path: str) -> SourceModule:
    """Parse a file from disk into a SourceModule keyed by its absolute path."""
    abs_path = os.path.abspath(file_path)
    tree, source_bytes = parse_file(abs_path)
    return SourceModule(path=abs_path, tree=tree, source_bytes=source_bytes)


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and MISSING nodes in a parsed tree."""
    count = 0
    stack: list[Node] = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            count += 1
        if node.has_error:
            stack.extend(node.children)
    return count


def _warn_on_syntax_errors(tree: Tree, path: str) -> None:
    # tree-sitter recovers from errors, so a damaged file still yields entries
    if tree.root_node.has_error:
        logger.warning(f"File {path} contains {count_error_nodes(tree)} syntax errors")
