"""Locate dependency tables in a Cargo manifest and extract version handles."""

import logging
from contextlib import contextmanager
from typing import Iterator

from tomlkit import TOMLDocument
from tomlkit.container import OutOfOrderTableProxy
from tomlkit.items import AoT, Array, Bool, Date, DateTime, Float, InlineTable, Integer, String, Table, Time

from .errors import (
    MissingDependencyGroup,
    MissingVersionField,
    SemverParseFailure,
    UnexpectedEntryShape,
    UnexpectedGroupShape,
    UnexpectedVersionFieldType,
    UnsupportedEntryShape,
)
from .models import DependencyEntry, DependencyGroup
from .version import VersionHandle

logger = logging.getLogger(__name__)

VERSION_KEY = "version"


def item_kind(item) -> str:
    """Name the TOML kind of an item for error messages."""
    if item is None:
        return "None"
    # tomlkit unwraps booleans on lookup, and bool is an int subclass
    if isinstance(item, (bool, Bool)):
        return "Boolean"
    if isinstance(item, String):
        return "String"
    if isinstance(item, Integer):
        return "Integer"
    if isinstance(item, Float):
        return "Float"
    if isinstance(item, (DateTime, Date, Time)):
        return "Datetime"
    if isinstance(item, Array):
        return "Array"
    if isinstance(item, InlineTable):
        return "InlineTable"
    if isinstance(item, (Table, OutOfOrderTableProxy)):
        return "Table"
    if isinstance(item, AoT):
        return "ArrayOfTables"
    return type(item).__name__


def fetch_dependencies(document: TOMLDocument, group: DependencyGroup) -> list[DependencyEntry]:
    """Extract a version handle for every dependency in one group.

    Args:
        document: Parsed manifest; must not be touched elsewhere until every
            returned handle has been released
        group: Which dependency table to read

    Returns:
        Entries in source order

    Raises:
        FetchDependenciesError: On the first table or entry that cannot be
            handled. No partial result is returned.
    """
    table_name = group.table_name
    if table_name not in document:
        raise MissingDependencyGroup(table_name)

    table = document[table_name]
    if not isinstance(table, (Table, OutOfOrderTableProxy)):
        raise UnexpectedGroupShape(item_kind(table))

    logger.debug("Located [%s] with %d entries", table_name, len(table))
    return [_classify_entry(table, key, item) for key, item in table.items()]


def _classify_entry(table, key: str, item) -> DependencyEntry:
    """Build a dependency entry from one key of a dependency table."""
    if isinstance(item, String):
        logger.debug("%s: version string", key)
        return DependencyEntry(name=key, version=_build_handle(table, key, key))

    if isinstance(item, InlineTable):
        if VERSION_KEY not in item:
            raise MissingVersionField(key)
        version = item[VERSION_KEY]
        if not isinstance(version, String):
            raise UnexpectedVersionFieldType(key, item_kind(version))
        logger.debug("%s: inline table", key)
        return DependencyEntry(name=key, version=_build_handle(item, VERSION_KEY, key))

    if isinstance(item, (Table, OutOfOrderTableProxy)):
        raise UnsupportedEntryShape(key)

    raise UnexpectedEntryShape(key, item_kind(item))


def _build_handle(container, cell_key: str, name: str) -> VersionHandle:
    try:
        return VersionHandle.from_cell(container, cell_key, name=name)
    except ValueError as e:
        raise SemverParseFailure(name, e) from e


def release_all(entries: list[DependencyEntry]) -> int:
    """Release every handle, returning how many cells were rewritten.

    A failing handle does not stop the others from being released; the first
    error is re-raised once all handles have been tried.
    """
    rewritten = 0
    first_error = None
    for entry in entries:
        try:
            if entry.version.release():
                rewritten += 1
        except Exception as e:
            logger.error("Failed to write back %s: %s", entry.name, e)
            if first_error is None:
                first_error = e

    if first_error is not None:
        raise first_error
    return rewritten


@contextmanager
def dependencies(document: TOMLDocument, group: DependencyGroup) -> Iterator[list[DependencyEntry]]:
    """Fetch a dependency group and release all handles on exit.

    Usage:
        with dependencies(doc, DependencyGroup.STANDARD) as entries:
            for entry in entries:
                entry.version.set(...)
        text = tomlkit.dumps(doc)
    """
    entries = fetch_dependencies(document, group)
    try:
        yield entries
    finally:
        rewritten = release_all(entries)
        logger.debug("Released %d handles, %d rewritten", len(entries), rewritten)
