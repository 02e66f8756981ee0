"""
Declaration classification into entry variants.

Two dispatch tables drive extraction: one for a module's exported
declarations and one for the members of a class or interface body. A kind
missing from a table yields no entries; unsupported declarations are dropped,
never treated as errors.
"""

import logging
from typing import Callable, Dict, List

from tree_sitter import Node

from entries.models import (
    ClassEntry,
    ConstantEntry,
    Entry,
    FunctionEntry,
    GetterEntry,
    InterfaceEntry,
    MethodEntry,
    SetterEntry,
    TypeEntry,
)
from source_model.declarations import declaration_kind, is_readonly
from source_model.models import DeclarationKind

logger = logging.getLogger(__name__)

TOP_LEVEL_VARIANTS: Dict[DeclarationKind, Callable[[Node], Entry]] = {
    DeclarationKind.CLASS: ClassEntry,
    DeclarationKind.FUNCTION: FunctionEntry,
    DeclarationKind.VARIABLE: ConstantEntry,
    DeclarationKind.INTERFACE: InterfaceEntry,
    DeclarationKind.TYPE_ALIAS: TypeEntry,
}


def _property_entries(owner: Entry, node: Node) -> List[Entry]:
    # A mutable property is both readable and writable: getter first
    if is_readonly(node):
        return [GetterEntry(owner, node)]
    return [GetterEntry(owner, node), SetterEntry(owner, node)]


MEMBER_VARIANTS: Dict[DeclarationKind, Callable[[Entry, Node], List[Entry]]] = {
    DeclarationKind.METHOD: lambda owner, node: [MethodEntry(owner, node)],
    DeclarationKind.GET_ACCESSOR: lambda owner, node: [GetterEntry(owner, node)],
    DeclarationKind.SET_ACCESSOR: lambda owner, node: [SetterEntry(owner, node)],
    DeclarationKind.PROPERTY: _property_entries,
}


def entries_for_exported_declaration(node: Node) -> List[Entry]:
    """Classify one exported declaration into zero or one top-level entry.

    Args:
        node: An exported declaration node.

    Returns:
        A single-element list with the matching entry variant, or an empty
        list for declaration kinds that have no entry (enums, namespaces...).
    """
    kind = declaration_kind(node)
    variant = TOP_LEVEL_VARIANTS.get(kind)
    if variant is None:
        logger.debug(
            f"Dropping unsupported declaration '{node.type}' at line {node.start_point.row + 1}"
        )
        return []
    return [variant(node)]


def entries_for_member(owner: Entry, node: Node) -> List[Entry]:
    """Classify one class/interface member into zero or more owned entries.

    Methods map to a MethodEntry, accessors to a GetterEntry or SetterEntry,
    readonly properties to a GetterEntry and mutable properties to a
    GetterEntry followed by a SetterEntry.

    Args:
        owner: The class or interface entry that declares the member.
        node: A direct child of the owner's body.

    Returns:
        The owned entries for the member, possibly empty.
    """
    kind = declaration_kind(node)
    factory = MEMBER_VARIANTS.get(kind)
    if factory is None:
        logger.debug(
            f"Dropping unsupported member '{node.type}' of {owner.name} "
            f"at line {node.start_point.row + 1}"
        )
        return []
    return factory(owner, node)
