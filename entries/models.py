"""
Entry model for extracted API documentation.

An entry is a read-only view over one declaration node. Every variant exposes
the same three members: ``name``, ``title`` and ``referenced_entries``. All
three are computed on each access from the underlying syntax tree; nothing is
cached, so an entry is only meaningful while the tree it views is alive.

Ownership is exactly three levels deep: a ModuleEntry owns top-level entries,
class and interface entries own member entries, and member entries own
nothing.
"""

import os
from dataclasses import dataclass, field
from typing import ClassVar, List, Protocol, Tuple

from tree_sitter import Node

from entries import formatter
from source_model.declarations import (
    declared_name,
    direct_children,
    is_static,
    list_exported_declarations,
)
from source_model.models import SourceModule


class Entry(Protocol):
    """Capability set shared by every entry variant."""

    @property
    def name(self) -> str: ...

    @property
    def title(self) -> str: ...

    @property
    def referenced_entries(self) -> List["Entry"]: ...


@dataclass(frozen=True)
class ModuleEntry:
    """Entry for a whole source module.

    Attributes:
        root: Project root the module name is relative to
        module: The parsed source module
        output_file_paths: Files the compiler emits for this module
    """

    root: str
    module: SourceModule
    output_file_paths: Tuple[str, ...] = ()

    @property
    def source_file_path(self) -> str:
        return self.module.path

    @property
    def name(self) -> str:
        return os.path.relpath(self.source_file_path, self.root).replace(os.sep, "/")

    @property
    def title(self) -> str:
        return f"module {self.name}"

    @property
    def exported_declarations(self) -> List[Node]:
        return list_exported_declarations(self.module)

    @property
    def referenced_entries(self) -> List[Entry]:
        from entries.classifier import entries_for_exported_declaration

        entries: List[Entry] = []
        for declaration in self.exported_declarations:
            entries.extend(entries_for_exported_declaration(declaration))
        return entries


@dataclass(frozen=True)
class _DeclarationEntry:
    """Shared base for top-level entries: one declaration node, one keyword."""

    node: Node
    keyword: ClassVar[str] = ""

    @property
    def name(self) -> str:
        return formatter.display_name(declared_name(self.node))

    @property
    def title(self) -> str:
        return formatter.keyword_title(self.keyword, self.name)

    @property
    def referenced_entries(self) -> List[Entry]:
        return []


@dataclass(frozen=True)
class _MemberOwnerEntry(_DeclarationEntry):
    """A top-level entry whose body members become owned entries."""

    @property
    def owned_nodes(self) -> List[Node]:
        return direct_children(self.node)

    @property
    def referenced_entries(self) -> List[Entry]:
        from entries.classifier import entries_for_member

        entries: List[Entry] = []
        for node in self.owned_nodes:
            entries.extend(entries_for_member(self, node))
        return entries


@dataclass(frozen=True)
class ClassEntry(_MemberOwnerEntry):
    keyword: ClassVar[str] = "class"


@dataclass(frozen=True)
class InterfaceEntry(_MemberOwnerEntry):
    keyword: ClassVar[str] = "interface"


@dataclass(frozen=True)
class FunctionEntry(_DeclarationEntry):
    keyword: ClassVar[str] = "function"

    @property
    def parameters(self) -> List[str]:
        return formatter.parameters_for_node(self.node)

    @property
    def title(self) -> str:
        return formatter.function_title(self.name, self.parameters)


@dataclass(frozen=True)
class ConstantEntry(_DeclarationEntry):
    keyword: ClassVar[str] = "const"


@dataclass(frozen=True)
class TypeEntry(_DeclarationEntry):
    keyword: ClassVar[str] = "type"


# ---------------------------------------------------------------------------
# Owned entries
# ---------------------------------------------------------------------------
# The owner is a back-reference used only to read its name for the title.
# It is excluded from equality and repr so members never compare or print
# their owner's node.


@dataclass(frozen=True)
class MethodEntry:
    owner: Entry = field(compare=False, repr=False)
    node: Node

    @property
    def name(self) -> str:
        return formatter.display_name(declared_name(self.node))

    @property
    def parameters(self) -> List[str]:
        return formatter.parameters_for_node(self.node)

    @property
    def call_syntax(self) -> str:
        return formatter.call_syntax(self.name, self.parameters)

    @property
    def title(self) -> str:
        return formatter.owned_title(self.owner.name, self.call_syntax, is_static(self.node))

    @property
    def referenced_entries(self) -> List[Entry]:
        return []


@dataclass(frozen=True)
class GetterEntry:
    """Read access to a get-accessor or a property."""

    owner: Entry = field(compare=False, repr=False)
    node: Node

    @property
    def name(self) -> str:
        return formatter.display_name(declared_name(self.node))

    @property
    def call_syntax(self) -> str:
        return self.name

    @property
    def title(self) -> str:
        return formatter.owned_title(self.owner.name, self.call_syntax, is_static(self.node))

    @property
    def referenced_entries(self) -> List[Entry]:
        return []


@dataclass(frozen=True)
class SetterEntry:
    """Write access to a set-accessor or a mutable property."""

    owner: Entry = field(compare=False, repr=False)
    node: Node

    @property
    def name(self) -> str:
        return formatter.display_name(declared_name(self.node))

    @property
    def call_syntax(self) -> str:
        return formatter.setter_syntax(self.name)

    @property
    def title(self) -> str:
        return formatter.owned_title(self.owner.name, self.call_syntax, is_static(self.node))

    @property
    def referenced_entries(self) -> List[Entry]:
        return []
