"""Structural classification of parsed asset content.

Each asset kind is recognised by a structural predicate over the parsed
value. ``CLASSIFICATION_RULES`` is evaluated top to bottom and the first
matching rule decides the kind; a document that looks like both a tileset
and a stage is a tileset.
"""

from collections.abc import Callable
from pathlib import PurePath
from typing import Any

from .types import NO_DATA, AssetKind, ClassifiedAsset, ParsedContent

ASEPRITE_APP = "http://www.aseprite.org/"

# Extensions (lowercase) loaded as raw image bytes at runtime
RAW_IMAGE_EXTENSIONS = {".png"}


def _child(value: Any, key: str) -> Any:
    """Return ``value[key]`` when value is an object, else None."""
    if isinstance(value, dict):
        return value.get(key)
    return None


def is_path(value: Any) -> bool:
    meta = _child(value, "meta")
    return isinstance(meta, dict) and meta.get("type") == "path"


def is_sprite(value: Any) -> bool:
    meta = _child(value, "meta")
    return isinstance(meta, dict) and meta.get("app") == ASEPRITE_APP


def is_tileset(value: Any) -> bool:
    if not isinstance(value, dict):
        return False
    return value.get("type") == "tileset" or isinstance(value.get("tileset"), dict)


def is_stage(value: Any) -> bool:
    """Tiled map documents: a ``map`` root whose attributes carry ``tiledversion``."""
    attributes = _child(_child(value, "map"), "$")
    return isinstance(attributes, dict) and isinstance(attributes.get("tiledversion"), str)


CLASSIFICATION_RULES: tuple[tuple[AssetKind, Callable[[Any], bool]], ...] = (
    (AssetKind.PATH, is_path),
    (AssetKind.SPRITE, is_sprite),
    (AssetKind.TILESET, is_tileset),
    (AssetKind.STAGE, is_stage),
)


def classify(path: str, value: Any = NO_DATA) -> ClassifiedAsset:
    """Assign exactly one AssetKind to a file.

    Args:
        path: Path of the file
        value: Parsed content, or NO_DATA if the file could not be parsed

    Returns:
        ClassifiedAsset. Structural kinds carry the parsed value, raw images
        carry their own path and everything else is unclassified.
    """
    for kind, predicate in CLASSIFICATION_RULES:
        if predicate(value):
            return ClassifiedAsset(path, kind, value)

    if value is NO_DATA and PurePath(path).suffix.lower() in RAW_IMAGE_EXTENSIONS:
        return ClassifiedAsset(path, AssetKind.RAWIMAGE, path)

    return ClassifiedAsset(path, AssetKind.UNCLASSIFIED)


def classify_content(content: ParsedContent) -> ClassifiedAsset:
    return classify(content.path, content.value)
