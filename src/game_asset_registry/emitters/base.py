"""Base emitter for generated asset registries.

This module turns an ordered list of classified assets into JavaScript
source that constructs the runtime ``Assets`` registry. Classified assets
are embedded inline as ``{"type": kind, "data": ...}`` records; anything
unclassified is referenced from a companion module compiled elsewhere.
"""

import json
import logging
import os
import re
from abc import ABC, abstractmethod
from pathlib import PurePath

from ..core.errors import KeyCollisionError
from ..core.types import ClassifiedAsset

logger = logging.getLogger(__name__)

COLLISION_POLICIES = ("last-wins", "error")

IDENTIFIER_SEPARATORS = re.compile(r"[-_]")


def registry_key(path: str) -> str:
    """Derive the registry key of a file: its base name up to the first dot.

    Example:
        "sprites/walk-cycle.json" -> "walk-cycle"
    """
    return PurePath(path).name.split(".")[0]


def export_identifier(stem: str) -> str:
    """Derive the companion module export name from a file stem.

    Example:
        "walk-cycle" -> "WalkCycle"
        "boss_intro" -> "BossIntro"
    """
    return "".join(
        segment[0].upper() + segment[1:].lower()
        for segment in IDENTIFIER_SEPARATORS.split(stem)
        if segment
    )


class RegistryEmitter(ABC):
    """Abstract base class for registry emitters.

    Subclasses decide how the runtime library and companion modules are
    imported and how the registry is exported; the entries themselves are
    the same for every module format.
    """

    format_name = ""

    def __init__(
        self,
        base_dir: str | os.PathLike[str] = ".",
        runtime_module: str = "mu-engine",
        preload: bool = True,
        on_key_collision: str = "last-wins",
    ):
        """Initialize the emitter.

        Args:
            base_dir: Directory the generated file lives in. Companion
                      module paths are made relative to it.
            runtime_module: Module that exports the ``Assets`` class
            preload: Whether the runtime loads every asset up front
            on_key_collision: 'last-wins' keeps the later of two assets
                              sharing a key; 'error' raises KeyCollisionError
        """
        if on_key_collision not in COLLISION_POLICIES:
            raise ValueError(
                f"Unknown key collision policy: '{on_key_collision}'. "
                f"Available policies: {', '.join(COLLISION_POLICIES)}"
            )

        self.base_dir = os.fspath(base_dir)
        self.runtime_module = runtime_module
        self.preload = preload
        self.on_key_collision = on_key_collision

    def companion_module(self, path: str) -> str:
        """Module specifier of the companion module for an unclassified file.

        Example:
            base_dir "/game", path "/game/enemies/bat-swarm.js" -> "./enemies/bat-swarm"
        """
        module = os.path.join(os.path.dirname(path), registry_key(path))
        relative = PurePath(os.path.relpath(module, self.base_dir)).as_posix()

        if relative.startswith("../"):
            return relative
        return f"./{relative}"

    def build_entries(self, assets: list[ClassifiedAsset]) -> dict[str, ClassifiedAsset]:
        """Key assets by registry key in input order.

        A repeated key replaces the earlier asset but keeps its position,
        the same way a duplicate key behaves in a JavaScript object literal.

        Raises:
            KeyCollisionError: On a repeated key when on_key_collision is 'error'
        """
        entries: dict[str, ClassifiedAsset] = {}

        for asset in assets:
            key = registry_key(asset.path)
            previous = entries.get(key)

            if previous is not None:
                if self.on_key_collision == "error":
                    raise KeyCollisionError(key, previous.path, asset.path)
                logger.warning(
                    "Registry key '%s' from %s replaces %s", key, asset.path, previous.path
                )

            entries[key] = asset

        return entries

    def emit(self, assets: list[ClassifiedAsset]) -> str:
        """Generate the registry module source for the given assets."""
        entries = self.build_entries(assets)
        companions: dict[str, str] = {}

        lines = [
            f"    {json.dumps(key)}: {self._entry_value(asset, companions)},"
            for key, asset in entries.items()
        ]

        registry = "\n".join(
            [
                "new Assets({",
                f"  preload: {'true' if self.preload else 'false'},",
                "  assets: {",
                *lines,
                "  },",
                "})",
            ]
        )
        return self.wrap(registry, companions)

    def _entry_value(self, asset: ClassifiedAsset, companions: dict[str, str]) -> str:
        if asset.is_inline:
            return json.dumps({"type": asset.kind.value, "data": asset.data}, ensure_ascii=False)

        module = self.module_reference(self.companion_module(asset.path), companions)
        name = export_identifier(registry_key(asset.path))
        return f"{{ data: {module}[{json.dumps(name)}] }}"

    @abstractmethod
    def module_reference(self, module: str, companions: dict[str, str]) -> str:
        """Return a JavaScript expression evaluating to a companion module.

        Args:
            module: Module specifier, e.g. './b'
            companions: Module specifier -> binding name, shared by one
                        emit() call. Formats that need top-level imports
                        record them here.
        """
        pass

    @abstractmethod
    def wrap(self, registry: str, companions: dict[str, str]) -> str:
        """Wrap the registry expression in a complete module."""
        pass
