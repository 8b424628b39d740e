"""Write-back handle for a version literal stored in a TOML document."""

import logging

import semver
import tomlkit

logger = logging.getLogger(__name__)


def _same_version(left: semver.Version, right: semver.Version) -> bool:
    # semver's == ignores build metadata; a changed build must still be written
    return left.to_tuple() == right.to_tuple()


class VersionHandle:
    """A parsed semantic version bound to the TOML cell it was read from.

    The handle addresses its cell by container and key rather than holding the
    string item itself, since tomlkit strings are immutable and can only be
    replaced through their parent. Mutations through :meth:`set` stay in
    memory; the cell is rewritten once, by :meth:`release`, and only when the
    version actually changed. Quoting style, key spacing and trailing comments
    of the cell are kept.

    Handles must be released before the owning document is serialized.
    """

    def __init__(self, container, key: str, version: semver.Version, name: str | None = None):
        self._container = container
        self._key = key
        self._name = name or key
        self._original = version
        self._version = version
        self.dirty = False

    @classmethod
    def from_cell(cls, container, key: str, name: str | None = None) -> "VersionHandle":
        """Parse the string stored at ``container[key]`` into a handle.

        Raises:
            ValueError: If the text is not a valid semantic version
        """
        version = semver.Version.parse(str(container[key]))
        return cls(container, key, version, name=name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def original(self) -> semver.Version:
        return self._original

    def get(self) -> semver.Version:
        return self._version

    def set(self, version: semver.Version) -> None:
        if _same_version(version, self._version):
            return
        self._version = version
        self.dirty = not _same_version(version, self._original)

    def release(self) -> bool:
        """Write the held version back into its cell if it changed.

        Returns:
            True if the document was modified
        """
        if not self.dirty:
            return False

        # keep the quoting of the literal being replaced
        quoted = self._container[self._key].as_string()
        self._container[self._key] = tomlkit.string(
            str(self._version),
            literal=quoted.startswith("'"),
            multiline=quoted.startswith(('"""', "'''")),
        )
        logger.debug("Rewrote %s: %s -> %s", self._name, self._original, self._version)

        self._original = self._version
        self.dirty = False
        return True

    def __enter__(self) -> "VersionHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"VersionHandle(name={self._name!r}, version='{self._version}', dirty={self.dirty})"
