"""Error types raised while locating and rewriting dependencies."""


class FetchDependenciesError(Exception):
    """Base class for every failure reported by the dependency engine."""


class MissingDependencyGroup(FetchDependenciesError):
    """Raised when the manifest has no table for the requested group."""

    def __init__(self, group: str):
        self.group = group
        super().__init__(f'missing dependency group "{group}"')


class UnexpectedGroupShape(FetchDependenciesError):
    """Raised when the dependency group exists but is not a table."""

    def __init__(self, actual_kind: str):
        self.actual_kind = actual_kind
        super().__init__(f'unexpected dependencies type "{actual_kind}"')


class UnexpectedEntryShape(FetchDependenciesError):
    """Raised when a dependency is neither a string nor an inline table."""

    def __init__(self, key: str, actual_kind: str):
        self.key = key
        self.actual_kind = actual_kind
        super().__init__(f'unexpected dependency type "{actual_kind}" for "{key}"')


class UnsupportedEntryShape(FetchDependenciesError):
    """Raised for dependencies declared as a full sub-table.

    ``[dependencies.foo]`` sections are not supported yet. This is kept apart
    from :class:`UnexpectedEntryShape` so support can be added later without
    changing what either error means.
    """

    def __init__(self, key: str):
        self.key = key
        super().__init__(f'dependency tables are not supported yet ("{key}")')


class MissingVersionField(FetchDependenciesError):
    """Raised when an inline table dependency has no ``version`` key."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f'missing version key in dependency "{key}"')


class UnexpectedVersionFieldType(FetchDependenciesError):
    """Raised when an inline table's ``version`` is not a string."""

    def __init__(self, key: str, actual_kind: str):
        self.key = key
        self.actual_kind = actual_kind
        super().__init__(f'unexpected version type "{actual_kind}" for "{key}"')


class SemverParseFailure(FetchDependenciesError):
    """Raised when a version string is not a valid semantic version."""

    def __init__(self, key: str, cause: Exception):
        self.key = key
        self.cause = cause
        super().__init__(f'failed to parse dependency "{key}": {cause}')


class ManifestError(Exception):
    """Base class for manifest I/O failures outside the engine."""


class ManifestNotFoundError(ManifestError):
    """Raised when no Cargo.toml can be found at the given location."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Manifest {path} not found")


class ManifestParseError(ManifestError):
    """Raised when the manifest is not valid TOML."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Invalid TOML: {cause}")
