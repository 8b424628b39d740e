"""Minimal compatible version rule."""

import logging

import semver

from .models import DependencyEntry, MinimizationResult

logger = logging.getLogger(__name__)


def minimal_version(version: semver.Version) -> semver.Version:
    """Return the lowest version caret-compatible with ``version``.

    Compatibility follows Cargo's caret rules: the left-most non-zero
    component is the breaking one, so everything to its right can drop to
    zero. ``0.0.z`` is only compatible with itself and is returned as is.
    Pre-release and build metadata are kept.
    """
    if version.major != 0:
        return version.replace(minor=0, patch=0)
    if version.minor != 0:
        return version.replace(patch=0)
    return version


def minimize_entries(entries: list[DependencyEntry]) -> list[MinimizationResult]:
    """Apply :func:`minimal_version` to each entry's handle in place."""
    results = []
    for entry in entries:
        original = entry.version.get()
        minimized = minimal_version(original)
        entry.version.set(minimized)

        result = MinimizationResult(name=entry.name, original=original, minimized=minimized)
        if result.changed:
            logger.debug("%s: %s -> %s", entry.name, original, minimized)
        results.append(result)

    return results
