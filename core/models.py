"""Core data models for minver."""

from dataclasses import dataclass, field
from enum import Enum

import semver

from .version import VersionHandle


class DependencyGroup(Enum):
    """Dependency tables minver knows how to rewrite."""

    STANDARD = "dependencies"
    DEV = "dev-dependencies"

    @property
    def table_name(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "DependencyGroup":
        """Look up a group by member name ("dev") or table name ("dev-dependencies")."""
        normalized = name.strip().lower()
        for group in cls:
            if normalized in (group.name.lower(), group.table_name):
                return group
        raise ValueError(f"Unknown dependency group: {name}")


@dataclass
class DependencyEntry:
    """A single dependency located in a manifest table."""

    name: str
    version: VersionHandle


@dataclass
class MinimizationResult:
    """Outcome of applying the minimal-version rule to one dependency."""

    name: str
    original: semver.Version
    minimized: semver.Version

    @property
    def changed(self) -> bool:
        return self.original != self.minimized


@dataclass
class MinimizeReport:
    """Report of changes made to a manifest."""

    filename: str
    group: DependencyGroup
    original_content: str
    updated_content: str
    diff: str
    changes: list[MinimizationResult]
    notes: list[str] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return any(change.changed for change in self.changes)
