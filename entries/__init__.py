"""
Layer 2: Entry Model

Documentation entries built over the source model: module, class,
interface, function, constant and type entries, plus the method, getter and
setter entries owned by classes and interfaces.
"""

from entries.models import (
    Entry,
    ModuleEntry,
    ClassEntry,
    InterfaceEntry,
    FunctionEntry,
    ConstantEntry,
    TypeEntry,
    MethodEntry,
    GetterEntry,
    SetterEntry,
)
from entries.classifier import entries_for_exported_declaration, entries_for_member
from entries.extractor import (
    EntryListing,
    ExtractionStats,
    describe_module,
    iter_entry_listing,
    main_module_entry,
    module_entries,
    module_entry,
)

__all__ = [
    # Entry variants
    "Entry",
    "ModuleEntry",
    "ClassEntry",
    "InterfaceEntry",
    "FunctionEntry",
    "ConstantEntry",
    "TypeEntry",
    "MethodEntry",
    "GetterEntry",
    "SetterEntry",
    # Classification
    "entries_for_exported_declaration",
    "entries_for_member",
    # High-level orchestration
    "EntryListing",
    "ExtractionStats",
    "describe_module",
    "iter_entry_listing",
    "main_module_entry",
    "module_entries",
    "module_entry",
]
