"""Command-line interface for the asset registry compiler.

This module provides the CLI entry point for compiling an asset manifest
into a generated registry module.
"""

import argparse
import logging
import sys
from collections.abc import Iterable
from pathlib import Path

from .config import CompilerConfig
from .core.errors import AssetRegistryError
from .core.types import CompileResult
from .core.validator import DIALECT_FIELDS
from .pipeline import CompilationPipeline
from .registry import FormatRegistry


def compile_manifest(manifest_path: Path, config: CompilerConfig) -> CompileResult:
    """Compile a manifest file into registry source.

    Args:
        manifest_path: Path to the root manifest
        config: Compiler settings

    Returns:
        CompileResult with the generated source and its dependencies

    Raises:
        AssetRegistryError: If compilation fails
    """
    print(f"Compiling manifest: {manifest_path}", file=sys.stderr)
    pipeline = CompilationPipeline(config)
    result = pipeline.compile_file_sync(manifest_path)
    print(
        f"Registered {len(result.assets)} assets from {len(result.dependencies)} files",
        file=sys.stderr,
    )
    return result


def write_dependencies(deps_file: Path, dependencies: Iterable[str]) -> None:
    """Write one dependency path per line for the host build tool."""
    deps_file.write_text("".join(f"{path}\n" for path in sorted(dependencies)), encoding="utf-8")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asset-registry",
        description="Compile an asset manifest into a generated asset registry module",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Basic usage, CommonJS output on stdout
  asset-registry assets/manifest.json

  # ES module output written next to the manifest
  asset-registry assets/manifest.json --format esm --output assets/index.js

  # Report dependencies for the build tool to watch
  asset-registry assets/manifest.json --output assets/index.js --deps-file build/assets.d
        """,
    )

    parser.add_argument("manifest", help="Path to the root manifest (JSON)")

    parser.add_argument(
        "--format",
        dest="module_format",
        choices=FormatRegistry.list_formats(),
        help="Module format of the generated registry (default: commonjs)",
    )

    parser.add_argument(
        "--dialect",
        choices=list(DIALECT_FIELDS),
        help="Manifest field names: includes/excludes (revised, default) or include/exclude (legacy)",
    )

    parser.add_argument("--runtime-module", help="Module exporting Assets (default: mu-engine)")

    parser.add_argument(
        "--no-preload",
        dest="preload",
        action="store_false",
        default=None,
        help="Do not preload assets at runtime",
    )

    parser.add_argument(
        "--no-cycle-check",
        dest="detect_cycles",
        action="store_false",
        default=None,
        help="Do not check manifest imports for cycles",
    )

    parser.add_argument(
        "--strict-keys",
        dest="on_key_collision",
        action="store_const",
        const="error",
        help="Fail when two assets derive the same registry key instead of keeping the last",
    )

    parser.add_argument("--output", "-o", help="Write the registry here instead of stdout")

    parser.add_argument("--deps-file", help="Write dependency paths here, one per line")

    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the compiler."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    manifest_path = Path(args.manifest)
    if not manifest_path.is_file():
        print(f"Error: Manifest does not exist: {manifest_path}", file=sys.stderr)
        sys.exit(1)

    try:
        config = CompilerConfig.from_mapping(
            {
                "module_format": args.module_format,
                "dialect": args.dialect,
                "runtime_module": args.runtime_module,
                "preload": args.preload,
                "detect_cycles": args.detect_cycles,
                "on_key_collision": args.on_key_collision,
            }
        )
        result = compile_manifest(manifest_path, config)

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    except AssetRegistryError as e:
        if args.deps_file:
            write_dependencies(Path(args.deps_file), e.dependencies)
        print(f"Error: Failed to compile manifest: {e}", file=sys.stderr)
        sys.exit(1)

    if args.deps_file:
        write_dependencies(Path(args.deps_file), result.dependencies)

    if args.output:
        Path(args.output).write_text(result.source, encoding="utf-8")
        print(f"Wrote {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(result.source)


if __name__ == "__main__":
    main()
