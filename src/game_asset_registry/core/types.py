"""Type definitions for asset manifests and compiled registries.

This module defines the data structures that flow through a compilation:
the parsed manifest, raw and parsed file contents, classified assets and
the final resolution handed to the emitter.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class _NoData:
    """Sentinel for content that could not be parsed in any format.

    Distinct from ``None`` so that a JSON document containing ``null``
    is not mistaken for an unparsable file.
    """

    _instance: "_NoData | None" = None

    def __new__(cls) -> "_NoData":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DATA"

    def __bool__(self) -> bool:
        return False


NO_DATA: Any = _NoData()


class AssetKind(str, Enum):
    """Closed set of asset kinds a file can be classified as."""

    PATH = "path"
    SPRITE = "sprite"
    TILESET = "tileset"
    STAGE = "stage"
    RAWIMAGE = "rawimage"
    UNCLASSIFIED = "unclassified"


class ContentFormat(str, Enum):
    """Which parser produced a ParsedContent value."""

    JSON = "json"
    MARKUP = "markup"
    NONE = "none"


@dataclass(frozen=True)
class Manifest:
    """A parsed manifest document."""

    includes: tuple[str, ...] = ()  # Glob patterns relative to the manifest dir
    excludes: tuple[str, ...] = ()  # Glob patterns filtered out of the includes
    imports: tuple[str, ...] = ()  # Sub-manifest paths relative to the manifest dir


@dataclass(frozen=True)
class RawFile:
    """Bytes of one discovered file."""

    path: str
    content: bytes


@dataclass(frozen=True)
class ParsedContent:
    """Structured value decoded from a file's bytes."""

    path: str
    value: Any = NO_DATA  # JSON tree, markup tree, or NO_DATA
    format: ContentFormat = ContentFormat.NONE

    @property
    def has_data(self) -> bool:
        return self.format is not ContentFormat.NONE


@dataclass(frozen=True)
class ClassifiedAsset:
    """A file labelled with exactly one AssetKind."""

    path: str
    kind: AssetKind
    data: Any = None  # Inline payload; None for unclassified assets

    @property
    def is_inline(self) -> bool:
        """Whether the asset is embedded in the registry rather than referenced."""
        return self.kind is not AssetKind.UNCLASSIFIED


@dataclass
class Resolution:
    """Ordered assets and dependency paths produced by resolving a manifest."""

    assets: list[ClassifiedAsset] = field(default_factory=list)
    dependencies: set[str] = field(default_factory=set)


@dataclass
class CompileResult:
    """Generated registry source and the files it was built from."""

    source: str
    dependencies: list[str]
    assets: list[ClassifiedAsset] = field(default_factory=list)
