"""Reading, backing up and rewriting Cargo manifests."""

import difflib
import logging
import shutil
from pathlib import Path

import tomlkit
from tomlkit import TOMLDocument
from tomlkit.exceptions import ParseError

from .dependencies import dependencies
from .errors import ManifestNotFoundError, ManifestParseError
from .models import DependencyGroup, MinimizeReport
from .policy import minimize_entries

logger = logging.getLogger(__name__)

MANIFEST_NAME = "Cargo.toml"
BACKUP_SUFFIX = ".bak"


def locate_manifest(root: Path) -> Path:
    """Resolve a crate directory or manifest path to the manifest file.

    Args:
        root: Crate root directory, or the manifest itself

    Returns:
        Path to the manifest
    """
    path = root / MANIFEST_NAME if root.is_dir() else root
    if not path.is_file():
        raise ManifestNotFoundError(path)
    return path


def parse_manifest(content: str) -> TOMLDocument:
    try:
        return tomlkit.parse(content)
    except ParseError as e:
        raise ManifestParseError(e) from e


def backup_path(path: Path) -> Path:
    return path.with_name(path.name + BACKUP_SUFFIX)


def backup_manifest(path: Path) -> Path:
    """Copy the manifest next to itself with a ``.bak`` suffix."""
    backup = backup_path(path)
    shutil.copy2(path, backup)
    logger.debug("Backed up %s to %s", path, backup)
    return backup


def restore_manifest(path: Path, backup: Path) -> None:
    """Put a backup made by :func:`backup_manifest` back in place."""
    shutil.move(str(backup), str(path))
    logger.warning("Restored %s from %s", path, backup)


def format_diff(original: str, updated: str, filename: str) -> str:
    """Unified diff between two versions of a manifest."""
    return "".join(
        difflib.unified_diff(
            original.splitlines(keepends=True),
            updated.splitlines(keepends=True),
            fromfile=filename,
            tofile=filename,
        )
    )


def minimize_manifest(
    content: str,
    group: DependencyGroup = DependencyGroup.STANDARD,
    filename: str = MANIFEST_NAME,
) -> MinimizeReport:
    """Rewrite every dependency in ``group`` to its minimal compatible version.

    Args:
        content: Manifest text
        group: Dependency table to rewrite
        filename: Name used in the diff header

    Returns:
        Report with the updated text; identical to ``content`` when nothing changed

    Raises:
        ManifestParseError: If ``content`` is not valid TOML
        FetchDependenciesError: If the dependency table cannot be handled
    """
    document = parse_manifest(content)

    with dependencies(document, group) as entries:
        changes = minimize_entries(entries)

    updated_content = tomlkit.dumps(document)
    notes = []
    if not changes:
        notes.append(f"[{group.table_name}] is empty")

    return MinimizeReport(
        filename=filename,
        group=group,
        original_content=content,
        updated_content=updated_content,
        diff=format_diff(content, updated_content, filename),
        changes=changes,
        notes=notes,
    )


def minimize_file(
    path: Path,
    group: DependencyGroup = DependencyGroup.STANDARD,
    dry_run: bool = False,
    keep_backup: bool = False,
) -> MinimizeReport:
    """Minimize a manifest on disk.

    The manifest is backed up before writing. A failed write restores the
    backup. Engine errors are raised before anything touches the file.
    """
    # newline="" keeps CRLF manifests byte-identical
    with path.open(encoding="utf-8", newline="") as f:
        content = f.read()
    report = minimize_manifest(content, group, filename=str(path))

    if dry_run or not report.has_changes:
        return report

    backup = backup_manifest(path)
    try:
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(report.updated_content)
    except OSError:
        restore_manifest(path, backup)
        raise

    if keep_backup:
        report.notes.append(f"Backup kept at {backup}")
    else:
        backup.unlink()
    logger.info("Wrote %d change(s) to %s", sum(c.changed for c in report.changes), path)
    return report
