"""
Data models for the TypeScript source model.
"""

from dataclasses import dataclass
from enum import Enum

from tree_sitter import Tree


class DeclarationKind(Enum):
    """Syntactic kind of a declaration node, as seen by the entry classifier."""

    CLASS = "class"
    FUNCTION = "function"
    VARIABLE = "variable"
    INTERFACE = "interface"
    TYPE_ALIAS = "typeAlias"
    METHOD = "method"
    GET_ACCESSOR = "getAccessor"
    SET_ACCESSOR = "setAccessor"
    PROPERTY = "property"
    OTHER = "other"


@dataclass(frozen=True)
class ParameterDescriptor:
    """Shape of a single function or method parameter.

    Attributes:
        name: Identifier text, or the source text of a destructuring pattern
        is_rest: Whether the parameter is a rest parameter (``...args``)
        is_optional: Whether the parameter is marked optional with ``?``
        has_default: Whether the parameter has a default value initializer
    """

    name: str
    is_rest: bool = False
    is_optional: bool = False
    has_default: bool = False


@dataclass(frozen=True)
class SourceModule:
    """A parsed TypeScript source file.

    The tree must stay referenced for as long as any node taken from it is
    in use; entries built over this module are views into it.

    Attributes:
        path: Absolute path of the source file
        tree: Parsed tree-sitter AST
        source_bytes: Raw file content
    """

    path: str
    tree: Tree
    source_bytes: bytes

    @property
    def root_node(self):
        return self.tree.root_node

    @property
    def has_syntax_errors(self) -> bool:
        return self.tree.root_node.has_error
