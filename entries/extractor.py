"""
High-level entry points for building module entries from a project.

``module_entry`` and ``main_module_entry`` are the boundary used by driver
scripts. A module that cannot be resolved is reported as None, never as an
exception.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from entries.models import ModuleEntry
from source_model.project import Project

logger = logging.getLogger(__name__)


class ExtractionStats:
    """Statistics for a listing pass over one or more modules."""

    def __init__(self):
        self.modules_listed = 0
        self.top_level_entries = 0
        self.member_entries = 0
        self.parse_errors = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "modules_listed": self.modules_listed,
            "top_level_entries": self.top_level_entries,
            "member_entries": self.member_entries,
            "parse_errors": self.parse_errors,
        }

    def __str__(self) -> str:
        return (
            f"ExtractionStats(modules={self.modules_listed}, "
            f"entries={self.top_level_entries}, members={self.member_entries}, "
            f"parse_errors={self.parse_errors})"
        )


@dataclass
class EntryListing:
    """One top-level entry title with the titles of the entries it owns."""

    title: str
    member_titles: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "members": list(self.member_titles)}


def _build_module_entry(project: Project, path: str) -> Optional[ModuleEntry]:
    module = project.module(path)
    if module is None:
        return None
    return ModuleEntry(
        root=project.root,
        module=module,
        output_file_paths=tuple(project.output_file_paths(module.path)),
    )


def module_entry(project: Project, module_path: str) -> Optional[ModuleEntry]:
    """Build the entry for one source module of a project.

    Args:
        project: The loaded project.
        module_path: Source path, absolute or relative to the project root.

    Returns:
        The ModuleEntry, or None when no source module matches the path.
    """
    entry = _build_module_entry(project, module_path)
    if entry is None:
        logger.info("No module found at %s", module_path)
    return entry


def module_entries(project: Project) -> List[ModuleEntry]:
    """Build an entry for every source module of a project, in path order."""
    entries = []
    for path in project.source_file_paths:
        entry = _build_module_entry(project, path)
        if entry is not None:
            entries.append(entry)
    return entries


def main_module_entry(project: Project) -> Optional[ModuleEntry]:
    """Find the module whose compiled output is the package's ``main`` file.

    Returns None when ``main`` is unset or when no module emits it.
    """
    main_file_path = project.main_file_path
    if main_file_path is None:
        return None

    # Node resolves an extensionless "main" the way it resolves require()
    candidates = {main_file_path}
    if not os.path.splitext(main_file_path)[1]:
        candidates.add(main_file_path + ".js")
        candidates.add(os.path.join(main_file_path, "index.js"))

    for path in project.source_file_paths:
        if candidates.intersection(project.output_file_paths(path)):
            logger.info("Main module for %s is %s", main_file_path, path)
            return _build_module_entry(project, path)

    logger.info("No source module emits main file %s", main_file_path)
    return None


def iter_entry_listing(
    entry: ModuleEntry,
    stats: Optional[ExtractionStats] = None,
) -> Iterator[EntryListing]:
    """Yield the two-level listing of a module: entries and their members.

    This is deliberately shallow: only the module's own entries and their
    directly owned entries are visited.
    """
    if stats is not None:
        stats.modules_listed += 1
        if entry.module.has_syntax_errors:
            stats.parse_errors += 1

    for top_level in entry.referenced_entries:
        member_titles = [member.title for member in top_level.referenced_entries]
        if stats is not None:
            stats.top_level_entries += 1
            stats.member_entries += len(member_titles)
        yield EntryListing(title=top_level.title, member_titles=member_titles)


def describe_module(
    entry: ModuleEntry,
    stats: Optional[ExtractionStats] = None,
) -> Dict[str, Any]:
    """Dictionary form of a module listing, ready for JSON serialization."""
    return {
        "module": entry.name,
        "title": entry.title,
        "source_file_path": entry.source_file_path,
        "output_file_paths": [
            os.path.relpath(path, entry.root).replace(os.sep, "/")
            for path in entry.output_file_paths
        ],
        "entries": [listing.to_dict() for listing in iter_entry_listing(entry, stats=stats)],
    }
