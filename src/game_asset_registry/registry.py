"""Format registry for emitter creation.

This module provides a central registry of module formats, mapping a
format name such as 'commonjs' or 'esm' to the emitter that produces it.
"""

import importlib
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .emitters.base import RegistryEmitter


class FormatRegistry:
    """Central registry for emitter factories.

    Emitters register themselves when the ``emitters`` package is imported.
    Keeping the registry separate from the emitters lets a host build tool
    add its own output format without touching the pipeline.
    """

    _factories: dict[str, Callable[..., "RegistryEmitter"]] = {}

    @classmethod
    def register_format(cls, name: str, factory: Callable[..., "RegistryEmitter"]) -> None:
        """Register a factory for creating emitters of a module format.

        Example:
            >>> FormatRegistry.register_format('esm', ESModuleEmitter)
        """
        cls._factories[name] = factory

    @classmethod
    def create_emitter(cls, format_name: str, **kwargs) -> "RegistryEmitter":
        """Create an emitter for a registered format.

        Args:
            format_name: Name of the registered format
            **kwargs: Arguments passed to the emitter factory

        Raises:
            ValueError: If format_name is not registered

        Example:
            >>> emitter = FormatRegistry.create_emitter('esm', base_dir='/game')
        """
        cls.discover_formats()

        if format_name not in cls._factories:
            available = ", ".join(cls._factories.keys()) or "none"
            raise ValueError(
                f"Unknown module format: '{format_name}'. Available formats: {available}"
            )

        return cls._factories[format_name](**kwargs)

    @classmethod
    def list_formats(cls) -> list[str]:
        """List all registered format names.

        Example:
            >>> FormatRegistry.list_formats()
            ['commonjs', 'esm']
        """
        cls.discover_formats()
        return list(cls._factories.keys())

    @classmethod
    def discover_formats(cls) -> None:
        """Import the built-in emitters, which register themselves."""
        importlib.import_module(".emitters", package="game_asset_registry")


def format_for_version(version: int | None) -> str:
    """Map a host build tool's loader API version to a module format.

    Hosts at version 2 or later consume ES modules; older ones and hosts
    that report no version get CommonJS.
    """
    if version is not None and version >= 2:
        return "esm"
    return "commonjs"
