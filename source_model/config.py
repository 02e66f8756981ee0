"""
Configuration constants for TypeScript declaration extraction.

Defines the tree-sitter node type strings used by the source model adapter,
plus environment-driven defaults loaded from a .env file at import time via
python-dotenv.
"""

import os
from typing import Set

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Load .env file (idempotent; does nothing if already loaded or missing)
# ---------------------------------------------------------------------------
load_dotenv()

# Name used for any declaration without an identifiable name
ANONYMOUS_NAME: str = "<anonymous>"

# ---------------------------------------------------------------------------
# Top-level declaration node types
# ---------------------------------------------------------------------------
EXPORT_STATEMENT: str = "export_statement"
EXPORT_CLAUSE: str = "export_clause"
EXPORT_SPECIFIER: str = "export_specifier"

# `declare ...` wrapper, treated as transparent
AMBIENT_DECLARATION: str = "ambient_declaration"

CLASS_TYPES: Set[str] = {
    "class_declaration",
    "abstract_class_declaration",
    "class",  # anonymous `export default class {}`
}

FUNCTION_TYPES: Set[str] = {
    "function_declaration",
    "generator_function_declaration",
    "function_signature",  # overloads and `declare function`
    "function_expression",  # anonymous `export default function () {}`
    "function",
    "generator_function",
}

# Statements holding one or more variable_declarator children
VARIABLE_STATEMENT_TYPES: Set[str] = {
    "lexical_declaration",
    "variable_declaration",
}
VARIABLE_DECLARATOR: str = "variable_declarator"

INTERFACE_TYPES: Set[str] = {"interface_declaration"}
TYPE_ALIAS_TYPES: Set[str] = {"type_alias_declaration"}

# ---------------------------------------------------------------------------
# Member node types
# ---------------------------------------------------------------------------
CLASS_BODY_TYPES: Set[str] = {"class_body"}

# Older grammars alias the interface body to object_type
INTERFACE_BODY_TYPES: Set[str] = {"interface_body", "object_type"}

METHOD_TYPES: Set[str] = {
    "method_definition",
    "method_signature",
    "abstract_method_signature",
}

PROPERTY_TYPES: Set[str] = {
    "public_field_definition",
    "property_signature",
}

# Anonymous keyword tokens inspected on member nodes
GET_KEYWORD: str = "get"
SET_KEYWORD: str = "set"
STATIC_KEYWORD: str = "static"
READONLY_KEYWORD: str = "readonly"

# Class constructors are not documented as methods
CONSTRUCTOR_NAME: str = "constructor"

# ---------------------------------------------------------------------------
# Parameter node types
# ---------------------------------------------------------------------------
PARAMETER_LIST: str = "formal_parameters"
REQUIRED_PARAMETER: str = "required_parameter"
OPTIONAL_PARAMETER: str = "optional_parameter"
REST_PATTERN: str = "rest_pattern"
REST_PARAMETER: str = "rest_parameter"  # pre-0.20 grammars

PARAMETER_TYPES: Set[str] = {
    REQUIRED_PARAMETER,
    OPTIONAL_PARAMETER,
    REST_PARAMETER,
}

# ---------------------------------------------------------------------------
# Project files
# ---------------------------------------------------------------------------
PACKAGE_FILE_NAME: str = "package.json"
TSCONFIG_FILE_NAME: str = "tsconfig.json"

# TypeScript source extension -> emitted JavaScript extension
TS_OUTPUT_EXTENSIONS: dict = {
    ".ts": ".js",
    ".tsx": ".js",
    ".mts": ".mjs",
    ".cts": ".cjs",
}

TS_EXTENSIONS: Set[str] = set(TS_OUTPUT_EXTENSIONS)

# Declaration files are parsed but never emit output
DECLARATION_FILE_SUFFIXES: tuple = (".d.ts", ".d.mts", ".d.cts")

SKIPPED_DIRECTORIES: Set[str] = {
    "node_modules",
    "dist",
    "build",
    "coverage",
    "__pycache__",
}

# ---------------------------------------------------------------------------
# Environment defaults
# ---------------------------------------------------------------------------
DEFAULT_LOG_LEVEL: str = os.getenv("TSENTRIES_LOG_LEVEL", "INFO").upper()
