"""
Layer 1: Source Model

Tree-sitter-based TypeScript parser and declaration queries.
Lists a module's exported declarations and answers kind, name, member,
modifier and parameter questions about them.
"""

from source_model.models import DeclarationKind, ParameterDescriptor, SourceModule
from source_model.parser import (
    create_parser,
    parse_file,
    parse_bytes,
    parse_source,
    load_module,
    count_error_nodes,
)
from source_model.declarations import (
    list_exported_declarations,
    declaration_kind,
    declared_name,
    direct_children,
    is_static,
    is_readonly,
    parameter_list,
)
from source_model.project import Project, discover_typescript_files

__all__ = [
    # Data models
    "DeclarationKind",
    "ParameterDescriptor",
    "SourceModule",
    # Low-level parsing
    "create_parser",
    "parse_file",
    "parse_bytes",
    "parse_source",
    "load_module",
    "count_error_nodes",
    # Declaration queries
    "list_exported_declarations",
    "declaration_kind",
    "declared_name",
    "direct_children",
    "is_static",
    "is_readonly",
    "parameter_list",
    # Project loading
    "Project",
    "discover_typescript_files",
]
