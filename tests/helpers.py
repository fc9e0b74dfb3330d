"""Shared helpers for compiler tests."""

import asyncio
import json
from collections.abc import Sequence
from pathlib import Path

from game_asset_registry.core.errors import DiscoveryError, ReadError
from game_asset_registry.sources.base import FileSource


class MemoryFileSource(FileSource):
    """In-memory FileSource with scripted glob results and read delays.

    Glob patterns are not interpreted: ``globs`` maps each exact pattern
    to the paths it expands to. ``delays`` lets a test make some reads
    finish later than others.
    """

    def __init__(
        self,
        files: dict[str, bytes | str] | None = None,
        globs: dict[str, list[str]] | None = None,
        delays: dict[str, float] | None = None,
    ):
        self.files = {
            path: content.encode() if isinstance(content, str) else content
            for path, content in (files or {}).items()
        }
        self.globs = globs or {}
        self.delays = delays or {}
        self.reads: list[str] = []

    async def expand(self, pattern: str, ignore: Sequence[str] = ()) -> list[str]:
        await asyncio.sleep(self.delays.get(pattern, 0))
        if pattern not in self.globs:
            raise DiscoveryError(f"Failed to expand pattern {pattern}", path=pattern)
        return [path for path in self.globs[pattern] if path not in ignore]

    async def read(self, path: str) -> bytes:
        await asyncio.sleep(self.delays.get(path, 0))
        if path not in self.files:
            raise ReadError(f"Failed to read {path}: No such file or directory", path=path)
        self.reads.append(path)
        return self.files[path]


def write_json(path: Path, document: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


TILED_MAP = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<map version="1.2" tiledversion="1.2.1" orientation="orthogonal">\n'
    '  <tileset firstgid="1" source="tiles.tsx"/>\n'
    '  <layer id="1" name="ground"/>\n'
    '  <objectgroup id="2" name="spawns"/>\n'
    '  <layer id="3" name="top"/>\n'
    "</map>\n"
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01"
