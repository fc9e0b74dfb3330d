"""Core utilities for manifest compilation.

This package contains the data model, error taxonomy, manifest schema
validation, content parsing and classification used by the resolver
and the emitters.
"""

from .classifier import CLASSIFICATION_RULES, classify, classify_content
from .content import parse_content, parse_markup
from .errors import (
    AssetRegistryError,
    CycleError,
    DiscoveryError,
    KeyCollisionError,
    ManifestParseError,
    ReadError,
)
from .types import (
    NO_DATA,
    AssetKind,
    ClassifiedAsset,
    CompileResult,
    ContentFormat,
    Manifest,
    ParsedContent,
    RawFile,
    Resolution,
)
from .validator import parse_manifest, validate_manifest, validate_manifest_with_error_details

__all__ = [
    "AssetKind",
    "AssetRegistryError",
    "CLASSIFICATION_RULES",
    "ClassifiedAsset",
    "CompileResult",
    "ContentFormat",
    "CycleError",
    "DiscoveryError",
    "KeyCollisionError",
    "Manifest",
    "ManifestParseError",
    "NO_DATA",
    "ParsedContent",
    "RawFile",
    "ReadError",
    "Resolution",
    "classify",
    "classify_content",
    "parse_content",
    "parse_manifest",
    "parse_markup",
    "validate_manifest",
    "validate_manifest_with_error_details",
]
