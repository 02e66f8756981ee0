"""
Declaration queries over a parsed TypeScript module.

This module is the source model adapter used by the entry model: it lists a
module's exported declarations and answers kind, name, member, modifier and
parameter questions about individual declaration nodes. Every function here is
a read-only query over an already parsed tree.
"""

import logging
from typing import Dict, List, Optional, Tuple

from tree_sitter import Node

from source_model.config import (
    AMBIENT_DECLARATION,
    CLASS_BODY_TYPES,
    CLASS_TYPES,
    CONSTRUCTOR_NAME,
    EXPORT_CLAUSE,
    EXPORT_SPECIFIER,
    EXPORT_STATEMENT,
    FUNCTION_TYPES,
    GET_KEYWORD,
    INTERFACE_BODY_TYPES,
    INTERFACE_TYPES,
    METHOD_TYPES,
    OPTIONAL_PARAMETER,
    PARAMETER_LIST,
    PARAMETER_TYPES,
    PROPERTY_TYPES,
    READONLY_KEYWORD,
    REST_PARAMETER,
    REST_PATTERN,
    SET_KEYWORD,
    STATIC_KEYWORD,
    TYPE_ALIAS_TYPES,
    VARIABLE_DECLARATOR,
    VARIABLE_STATEMENT_TYPES,
)
from source_model.models import DeclarationKind, ParameterDescriptor, SourceModule

logger = logging.getLogger(__name__)


def _node_text(node: Node) -> str:
    return node.text.decode("utf-8") if node.text else ""


def _node_key(node: Node) -> Tuple[int, int, str]:
    return node.start_byte, node.end_byte, node.type


def _has_keyword(node: Node, keyword: str) -> bool:
    """Check for an anonymous keyword token (``static``, ``get``...) on a node.

    Only unnamed children are inspected, so a member literally named ``get``
    or ``static`` is not mistaken for the modifier.
    """
    return any(not child.is_named and child.type == keyword for child in node.children)


def _unwrap_ambient(node: Node) -> Optional[Node]:
    """Return the declaration inside ``declare ...``, or the node itself."""
    if node.type != AMBIENT_DECLARATION:
        return node
    for child in node.named_children:
        if child.type != "statement_block":
            return child
    return None


def _expand_declaration(node: Optional[Node]) -> List[Node]:
    """Expand a declaration statement into the declaration nodes it introduces.

    Variable statements declare one binding per declarator
    (``export const a = 1, b = 2`` yields two declarations). Destructuring
    declarators (``export const { a, b } = obj``) bind no single declaration
    and are skipped.
    """
    node = _unwrap_ambient(node) if node is not None else None
    if node is None:
        return []
    if node.type in VARIABLE_STATEMENT_TYPES:
        return [
            child
            for child in node.named_children
            if child.type == VARIABLE_DECLARATOR and declared_name(child) is not None
        ]
    return [node]


def _local_declarations(module: SourceModule) -> Dict[str, List[Node]]:
    """Index every top-level declaration of a module by its declared name."""
    index: Dict[str, List[Node]] = {}
    for statement in module.root_node.named_children:
        if statement.type == EXPORT_STATEMENT:
            statement = statement.child_by_field_name("declaration")
            if statement is None:
                continue
        for declaration in _expand_declaration(statement):
            name = declared_name(declaration)
            if name is not None:
                index.setdefault(name, []).append(declaration)
    return index


def _exported_nodes_for_statement(
    statement: Node,
    local_index: Dict[str, List[Node]],
) -> List[Node]:
    """Resolve one export statement to the declarations it exports."""
    declaration = statement.child_by_field_name("declaration")
    if declaration is not None:
        return _expand_declaration(declaration)

    # Re-exports (`export ... from "x"`) point into another module
    if statement.child_by_field_name("source") is not None:
        logger.debug(
            "Skipping re-export at line %d", statement.start_point.row + 1
        )
        return []

    value = statement.child_by_field_name("value")
    if value is not None:
        if value.type == "identifier":
            return list(local_index.get(_node_text(value), []))
        if value.type in CLASS_TYPES or value.type in FUNCTION_TYPES:
            return [value]
        return []

    resolved: List[Node] = []
    for clause in statement.named_children:
        if clause.type != EXPORT_CLAUSE:
            continue
        for specifier in clause.named_children:
            if specifier.type != EXPORT_SPECIFIER:
                continue
            name_node = specifier.child_by_field_name("name")
            if name_node is None:
                continue
            resolved.extend(local_index.get(_node_text(name_node), []))
    return resolved


def list_exported_declarations(module: SourceModule) -> List[Node]:
    """List a module's exported top-level declarations in source order.

    Covers ``export <declaration>``, ``export default ...``, ``export declare``
    and local ``export { a, b as c }`` clauses. Re-exports from other modules
    are not followed. A declaration exported more than once is listed once.

    Args:
        module: The parsed source module.

    Returns:
        Declaration nodes, in the order their export statements appear.
    """
    local_index = _local_declarations(module)
    seen = set()
    exported: List[Node] = []
    for statement in module.root_node.named_children:
        if statement.type != EXPORT_STATEMENT:
            continue
        for node in _exported_nodes_for_statement(statement, local_index):
            key = _node_key(node)
            if key in seen:
                continue
            seen.add(key)
            exported.append(node)
    return exported


def _accessor_kind(node: Node) -> DeclarationKind:
    if _has_keyword(node, GET_KEYWORD):
        return DeclarationKind.GET_ACCESSOR
    if _has_keyword(node, SET_KEYWORD):
        return DeclarationKind.SET_ACCESSOR
    return DeclarationKind.METHOD


def _is_constructor(node: Node) -> bool:
    parent = node.parent
    if parent is not None and parent.type in INTERFACE_BODY_TYPES:
        return False
    return declared_name(node) == CONSTRUCTOR_NAME


def declaration_kind(node: Node) -> DeclarationKind:
    """Classify a declaration node into a DeclarationKind.

    Args:
        node: A top-level declaration or a class/interface member node.

    Returns:
        The matching kind, or ``DeclarationKind.OTHER`` for anything else.
    """
    node_type = node.type
    if node_type in CLASS_TYPES:
        return DeclarationKind.CLASS
    if node_type in FUNCTION_TYPES:
        return DeclarationKind.FUNCTION
    if node_type == VARIABLE_DECLARATOR:
        return DeclarationKind.VARIABLE
    if node_type in INTERFACE_TYPES:
        return DeclarationKind.INTERFACE
    if node_type in TYPE_ALIAS_TYPES:
        return DeclarationKind.TYPE_ALIAS
    if node_type in METHOD_TYPES:
        if _is_constructor(node):
            return DeclarationKind.OTHER
        return _accessor_kind(node)
    if node_type in PROPERTY_TYPES:
        return DeclarationKind.PROPERTY
    return DeclarationKind.OTHER


def declared_name(node: Node) -> Optional[str]:
    """Return the declared name of a node, or None when it has none.

    Destructuring declarators (``const { a } = x``) have no single name.
    """
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return None
    if node.type == VARIABLE_DECLARATOR and name_node.type != "identifier":
        return None
    return _node_text(name_node) or None


def _body(node: Node) -> Optional[Node]:
    body = node.child_by_field_name("body")
    if body is not None:
        return body
    for child in node.named_children:
        if child.type in CLASS_BODY_TYPES or child.type in INTERFACE_BODY_TYPES:
            return child
    return None


def direct_children(node: Node) -> List[Node]:
    """Return the members declared directly in a class or interface body.

    Inherited members are never included; only the body's own named children
    are returned, in declaration order. Nodes without a body yield nothing.
    """
    kind = declaration_kind(node)
    if kind not in (DeclarationKind.CLASS, DeclarationKind.INTERFACE):
        return []
    body = _body(node)
    if body is None:
        return []
    return list(body.named_children)


def is_static(node: Node) -> bool:
    """Whether a member carries the ``static`` modifier.

    Interface members have no static notion and are always instance members.
    """
    parent = node.parent
    if parent is not None and parent.type in INTERFACE_BODY_TYPES:
        return False
    return _has_keyword(node, STATIC_KEYWORD)


def is_readonly(node: Node) -> bool:
    """Whether a property-like member carries the ``readonly`` modifier."""
    return _has_keyword(node, READONLY_KEYWORD)


def parameter_list_node(node: Node) -> Node:
    """Locate the syntactic list holding a node's parameters.

    Falls back to the node itself when no parameter list is found.
    """
    parameters = node.child_by_field_name("parameters")
    if parameters is not None:
        return parameters
    for child in node.named_children:
        if child.type == PARAMETER_LIST:
            return child
    return node


def _describe_parameter(node: Node) -> ParameterDescriptor:
    pattern = node.child_by_field_name("pattern")
    if pattern is None:
        # pre-0.20 grammars: rest_parameter(identifier) without a pattern field
        pattern = node.named_children[0] if node.named_children else node

    is_rest = node.type == REST_PARAMETER or pattern.type == REST_PATTERN
    name_node = pattern
    if pattern.type == REST_PATTERN and pattern.named_children:
        name_node = pattern.named_children[0]

    return ParameterDescriptor(
        name=_node_text(name_node),
        is_rest=is_rest,
        is_optional=node.type == OPTIONAL_PARAMETER,
        has_default=node.child_by_field_name("value") is not None,
    )


def parameter_list(node: Node) -> List[ParameterDescriptor]:
    """Describe the parameters of a function- or method-like node, in order."""
    list_node = parameter_list_node(node)
    return [
        _describe_parameter(child)
        for child in list_node.named_children
        if child.type in PARAMETER_TYPES
    ]
