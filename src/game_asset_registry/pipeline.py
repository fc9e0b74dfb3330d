"""Compilation pipeline for asset registries.

This module provides the main interface for compiling a manifest into
generated registry source. The pipeline resolves the manifest tree,
emits the registry in the configured module format and reports every
file the output depends on.
"""

import asyncio
import logging
import os
from pathlib import Path

from .config import CompilerConfig
from .core.errors import AssetRegistryError
from .core.types import CompileResult
from .registry import FormatRegistry
from .resolver import ManifestResolver
from .sources.base import FileSource
from .sources.local import LocalFileSource

logger = logging.getLogger(__name__)


class CompilationPipeline:
    """Main interface for registry generation.

    Example:
        >>> pipeline = CompilationPipeline(CompilerConfig(module_format='esm'))
        >>> result = pipeline.compile_file_sync(Path('assets/manifest.json'))
        >>> print(result.source)
        >>> for path in result.dependencies:
        ...     watch(path)
    """

    def __init__(self, config: CompilerConfig | None = None, source: FileSource | None = None):
        """Initialize the pipeline.

        Args:
            config: Compiler settings (defaults to CompilerConfig())
            source: Filesystem to read from (defaults to the local disk)
        """
        self.config = config or CompilerConfig()
        self.source = source or LocalFileSource()
        self.resolver = ManifestResolver(
            self.source,
            dialect=self.config.dialect,
            detect_cycles=self.config.detect_cycles,
        )

    async def compile(
        self,
        manifest_text: str | bytes,
        working_dir: str | os.PathLike[str],
        *,
        origin: str | None = None,
    ) -> CompileResult:
        """Compile manifest text into registry source.

        Args:
            manifest_text: Raw manifest JSON
            working_dir: Directory includes and imports are relative to.
                         The generated module is assumed to live here.
            origin: Path of the manifest file, if any

        Returns:
            CompileResult with the generated source and sorted dependencies

        Raises:
            AssetRegistryError: If resolution or emission fails. No source
                                is produced; ``dependencies`` on the error
                                lists the files touched before the failure.
        """
        resolution = await self.resolver.resolve(manifest_text, working_dir, origin=origin)

        emitter = FormatRegistry.create_emitter(
            self.config.module_format,
            base_dir=working_dir,
            runtime_module=self.config.runtime_module,
            preload=self.config.preload,
            on_key_collision=self.config.on_key_collision,
        )

        try:
            source = emitter.emit(resolution.assets)
        except AssetRegistryError as e:
            raise e.with_dependencies(resolution.dependencies)

        logger.info(
            "Compiled %d assets from %d files", len(resolution.assets), len(resolution.dependencies)
        )
        return CompileResult(
            source=source,
            dependencies=sorted(resolution.dependencies),
            assets=resolution.assets,
        )

    async def compile_file(self, manifest_path: str | os.PathLike[str]) -> CompileResult:
        """Compile a manifest file.

        The manifest itself is reported as a dependency alongside every
        file it pulls in.

        Raises:
            ReadError: If the manifest cannot be read
            AssetRegistryError: If compilation fails
        """
        path = os.fspath(manifest_path)

        try:
            manifest_text = await self.source.read(path)
        except AssetRegistryError as e:
            raise e.with_dependencies([path])

        try:
            result = await self.compile(
                manifest_text, os.path.dirname(path) or ".", origin=path
            )
        except AssetRegistryError as e:
            raise e.with_dependencies(e.dependencies | {path})

        result.dependencies = sorted(set(result.dependencies) | {path})
        return result

    def compile_file_sync(self, manifest_path: str | Path) -> CompileResult:
        """Blocking wrapper around compile_file() for non-async callers."""
        return asyncio.run(self.compile_file(manifest_path))
