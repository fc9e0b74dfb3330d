"""Compiler configuration."""

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from .core.validator import DIALECT_FIELDS
from .emitters.base import COLLISION_POLICIES
from .registry import FormatRegistry


@dataclass(frozen=True)
class CompilerConfig:
    """Settings for one compilation.

    Attributes:
        module_format: Registered module format, 'commonjs' or 'esm'
        dialect: Manifest field naming, 'revised' or 'legacy'
        runtime_module: Module exporting the runtime ``Assets`` class
        preload: Whether the runtime loads every asset up front
        detect_cycles: Fail on import cycles instead of recursing
        on_key_collision: 'last-wins' or 'error'
    """

    module_format: str = "commonjs"
    dialect: str = "revised"
    runtime_module: str = "mu-engine"
    preload: bool = True
    detect_cycles: bool = True
    on_key_collision: str = "last-wins"

    def __post_init__(self) -> None:
        _check_choice("module format", self.module_format, tuple(FormatRegistry.list_formats()))
        _check_choice("manifest dialect", self.dialect, tuple(DIALECT_FIELDS))
        _check_choice("key collision policy", self.on_key_collision, COLLISION_POLICIES)

        if not self.runtime_module:
            raise ValueError("runtime_module must not be empty")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "CompilerConfig":
        """Build a config from a mapping, ignoring None values.

        Raises:
            ValueError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown config options: {', '.join(sorted(unknown))}")

        return replace(cls(), **{k: v for k, v in values.items() if v is not None})


def _check_choice(label: str, value: str, choices: tuple[str, ...]) -> None:
    if value not in choices:
        raise ValueError(f"Unknown {label}: '{value}'. Expected one of: {', '.join(choices)}")
