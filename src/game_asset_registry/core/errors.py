"""Exceptions raised while compiling an asset manifest.

Every error is terminal for the compilation that raised it. Content that
fails to parse is never an error; it is classified as unclassified instead.
"""

from collections.abc import Iterable


class AssetRegistryError(Exception):
    """Base class for all compilation failures.

    Attributes:
        path: The file or pattern the failure is about, if any
        dependencies: Files recorded (read or attempted) before the failure.
                      Filled in by the resolver so a host build tool can
                      still watch them.
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
        self.dependencies: frozenset[str] = frozenset()

    def with_dependencies(self, dependencies: Iterable[str]) -> "AssetRegistryError":
        self.dependencies = frozenset(dependencies)
        return self


class ManifestParseError(AssetRegistryError):
    """The manifest document is malformed or violates the manifest schema."""


class DiscoveryError(AssetRegistryError):
    """A glob pattern could not be expanded."""


class ReadError(AssetRegistryError):
    """A file could not be read (missing, permissions, not a file)."""


class CycleError(AssetRegistryError):
    """A manifest imports itself, directly or through other manifests."""

    def __init__(self, cycle: Iterable[str]):
        self.cycle = tuple(cycle)
        super().__init__(
            "Import cycle detected: " + " -> ".join(self.cycle),
            path=self.cycle[-1] if self.cycle else None,
        )


class KeyCollisionError(AssetRegistryError):
    """Two assets derive the same registry key (strict mode only)."""

    def __init__(self, key: str, first: str, second: str):
        super().__init__(
            f"Registry key '{key}' is derived from both {first} and {second}",
            path=second,
        )
        self.key = key
