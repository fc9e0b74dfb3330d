"""Recursive manifest resolution.

This module turns a manifest into the ordered list of classified assets
it describes. Imported manifests are resolved first, each relative to its
own directory, followed by the manifest's own includes:

    assets(A) ++ assets(B) ++ local assets        # imports: [A, B]

Every stage fans out over its inputs concurrently and recombines the
results in input order, so read completion order never affects output.
"""

import asyncio
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .core.classifier import classify_content
from .core.concurrency import fan_out
from .core.content import parse_content
from .core.errors import AssetRegistryError, CycleError
from .core.types import ClassifiedAsset, RawFile, Resolution
from .core.validator import parse_manifest
from .sources.base import FileSource
from .sources.discovery import FileDiscoverer
from .sources.local import LocalFileSource

logger = logging.getLogger(__name__)


@dataclass
class _ResolutionState:
    """Dependencies recorded during one top-level resolve() call."""

    dependencies: set[str] = field(default_factory=set)

    def record(self, path: str) -> None:
        self.dependencies.add(path)


async def _canonical(path: str | os.PathLike[str]) -> str:
    resolved = await asyncio.to_thread(Path(path).resolve)
    return str(resolved)


class ManifestResolver:
    """Resolve manifests into ordered, classified assets.

    Example:
        >>> resolver = ManifestResolver(LocalFileSource())
        >>> resolution = await resolver.resolve(text, Path('/game/assets'))
        >>> [asset.kind for asset in resolution.assets]
    """

    def __init__(
        self,
        source: FileSource | None = None,
        dialect: str = "revised",
        detect_cycles: bool = True,
    ):
        """Initialize the resolver.

        Args:
            source: Filesystem to read from (defaults to the local disk)
            dialect: Manifest field naming dialect ('revised' or 'legacy')
            detect_cycles: Fail with CycleError when a manifest imports
                           itself. Without it a cycle recurses until a
                           read fails.
        """
        self.source = source or LocalFileSource()
        self.discoverer = FileDiscoverer(self.source)
        self.dialect = dialect
        self.detect_cycles = detect_cycles

    async def resolve(
        self,
        manifest_text: str | bytes,
        working_dir: str | os.PathLike[str],
        *,
        origin: str | None = None,
    ) -> Resolution:
        """Resolve a manifest and everything it imports.

        Args:
            manifest_text: Raw manifest JSON
            working_dir: Directory that includes and imports are relative to
            origin: Path of the manifest file, if it has one. Used for
                    cycle detection and error messages.

        Returns:
            Resolution with assets in import-then-local order and every
            file read at any depth as a dependency

        Raises:
            AssetRegistryError: On the first failure anywhere in the tree.
                                Its ``dependencies`` hold every file
                                recorded before the failure.
        """
        state = _ResolutionState()
        chain = (await _canonical(origin),) if origin else ()

        try:
            assets = await self._resolve(manifest_text, str(working_dir), origin, chain, state)
        except AssetRegistryError as e:
            raise e.with_dependencies(state.dependencies)

        return Resolution(assets=assets, dependencies=state.dependencies)

    async def _resolve(
        self,
        manifest_text: str | bytes,
        working_dir: str,
        origin: str | None,
        chain: tuple[str, ...],
        state: _ResolutionState,
    ) -> list[ClassifiedAsset]:
        manifest = parse_manifest(manifest_text, self.dialect, source=origin)

        import_paths = [os.path.normpath(os.path.join(working_dir, p)) for p in manifest.imports]
        imported = await fan_out(
            self._resolve_import(path, chain, state) for path in import_paths
        )

        files = await self.discoverer.discover(manifest.includes, manifest.excludes, working_dir)
        raw_files = await fan_out(self._read(path, state) for path in files)
        local = [self._classify(raw) for raw in raw_files]

        logger.debug(
            "Resolved %s: %d imported, %d local assets",
            origin or working_dir,
            sum(len(assets) for assets in imported),
            len(local),
        )
        return [asset for assets in imported for asset in assets] + local

    async def _resolve_import(
        self, path: str, chain: tuple[str, ...], state: _ResolutionState
    ) -> list[ClassifiedAsset]:
        canonical = await _canonical(path)
        if self.detect_cycles and canonical in chain:
            raise CycleError(chain + (canonical,))

        state.record(path)
        content = await self.source.read(path)

        return await self._resolve(
            content, os.path.dirname(path), path, chain + (canonical,), state
        )

    async def _read(self, path: str, state: _ResolutionState) -> RawFile:
        state.record(path)
        return RawFile(path, await self.source.read(path))

    def _classify(self, raw: RawFile) -> ClassifiedAsset:
        asset = classify_content(parse_content(raw))
        logger.debug("Classified %s as %s", raw.path, asset.kind.value)
        return asset
