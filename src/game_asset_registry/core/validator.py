"""Manifest parsing and JSON Schema validation.

This module loads the formal JSON Schema of each manifest dialect and
validates manifest documents before they are resolved.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import ValidationError

from .errors import ManifestParseError
from .types import Manifest

# Schema files ship inside the package, one per dialect
SCHEMA_DIR = Path(__file__).parent / "schemas"

# Dialect name -> (includes key, excludes key, imports key)
DIALECT_FIELDS: dict[str, tuple[str, str, str]] = {
    "revised": ("includes", "excludes", "imports"),
    "legacy": ("include", "exclude", "imports"),
}


@lru_cache(maxsize=None)
def load_schema(dialect: str = "revised") -> dict[str, Any]:
    """Load the JSON schema for a manifest dialect from disk.

    Args:
        dialect: 'revised' or 'legacy'

    Returns:
        Dictionary containing the JSON Schema.

    Raises:
        ValueError: If the dialect is unknown
        FileNotFoundError: If schema file doesn't exist
    """
    if dialect not in DIALECT_FIELDS:
        raise ValueError(
            f"Unknown manifest dialect: '{dialect}'. "
            f"Available dialects: {', '.join(DIALECT_FIELDS)}"
        )

    schema_path = SCHEMA_DIR / f"manifest.{dialect}.schema.json"
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")

    with schema_path.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def validate_manifest(document: Any, dialect: str = "revised") -> None:
    """Validate a manifest document against its dialect's JSON Schema.

    Raises:
        ValidationError: If the document doesn't conform to the schema
    """
    jsonschema.validate(instance=document, schema=load_schema(dialect))


def validate_manifest_with_error_details(
    document: Any, dialect: str = "revised"
) -> tuple[bool, str | None]:
    """Validate a manifest and return detailed error information.

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        validate_manifest(document, dialect)
        return True, None
    except ValidationError as e:
        error_path = " -> ".join(str(p) for p in e.path) if e.path else "root"
        error_msg = f"Validation error at {error_path}: {e.message}"

        if e.instance:
            error_msg += f"\nInvalid value: {e.instance}"

        return False, error_msg


def parse_manifest(
    text: str | bytes, dialect: str = "revised", source: str | None = None
) -> Manifest:
    """Parse and validate a manifest document.

    Args:
        text: Raw manifest JSON
        dialect: Field naming dialect of the document
        source: Path of the manifest, used in error messages

    Returns:
        Immutable Manifest

    Raises:
        ManifestParseError: If the text is not JSON or fails validation
    """
    label = source or "<manifest>"

    try:
        document = json.loads(text)
    except ValueError as e:
        raise ManifestParseError(f"Invalid manifest JSON in {label}: {e}", path=source) from e

    is_valid, error_msg = validate_manifest_with_error_details(document, dialect)
    if not is_valid:
        raise ManifestParseError(f"Invalid manifest {label}: {error_msg}", path=source)

    includes_key, excludes_key, imports_key = DIALECT_FIELDS[dialect]
    return Manifest(
        includes=tuple(document.get(includes_key, ())),
        excludes=tuple(document.get(excludes_key, ())),
        imports=tuple(document.get(imports_key, ())),
    )
