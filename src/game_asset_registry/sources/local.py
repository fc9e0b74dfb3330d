"""Local disk FileSource.

Glob expansion and reads are blocking calls, so both run in worker
threads to keep the event loop free for sibling tasks.
"""

import asyncio
import glob
import os
from collections.abc import Sequence

from ..core.errors import DiscoveryError, ReadError
from .base import FileSource


def _glob_files(pattern: str, ignore: Sequence[str]) -> list[str]:
    matches = glob.glob(pattern, recursive=True)

    ignored: set[str] = set()
    for ignore_pattern in ignore:
        ignored.update(os.path.normpath(p) for p in glob.glob(ignore_pattern, recursive=True))

    return [
        path
        for path in matches
        if os.path.isfile(path) and os.path.normpath(path) not in ignored
    ]


def _read_file(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


class LocalFileSource(FileSource):
    """FileSource backed by the local filesystem.

    Example:
        >>> source = LocalFileSource()
        >>> paths = await source.expand('/assets/**/*.json')
        >>> content = await source.read(paths[0])
    """

    async def expand(self, pattern: str, ignore: Sequence[str] = ()) -> list[str]:
        try:
            return await asyncio.to_thread(_glob_files, pattern, tuple(ignore))
        except (OSError, ValueError) as e:
            raise DiscoveryError(f"Failed to expand pattern {pattern}: {e}", path=pattern) from e

    async def read(self, path: str) -> bytes:
        try:
            return await asyncio.to_thread(_read_file, path)
        except OSError as e:
            raise ReadError(f"Failed to read {path}: {e.strerror or e}", path=path) from e
