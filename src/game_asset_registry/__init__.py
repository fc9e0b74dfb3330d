"""Game Asset Registry - Manifest Compiler.

This package compiles declarative asset manifests into generated registry
modules: it discovers the files a manifest names, classifies each one by
its structure and emits JavaScript source describing the asset table.
"""

# Core library interface
from .config import CompilerConfig
from .pipeline import CompilationPipeline
from .registry import FormatRegistry, format_for_version
from .resolver import ManifestResolver

# Core utilities
from .core import (
    AssetKind,
    AssetRegistryError,
    ClassifiedAsset,
    CompileResult,
    CycleError,
    DiscoveryError,
    KeyCollisionError,
    Manifest,
    ManifestParseError,
    ReadError,
    classify,
    parse_content,
    parse_manifest,
)

# Filesystem and emitters
from .emitters import CommonJSEmitter, ESModuleEmitter, RegistryEmitter
from .sources import FileDiscoverer, FileSource, LocalFileSource

# CLI
from .cli import compile_manifest, main

__version__ = "0.1.0"

__all__ = [
    # Primary library interface
    "CompilationPipeline",
    "CompilerConfig",
    "FormatRegistry",
    "ManifestResolver",
    "format_for_version",
    # Core utilities
    "AssetKind",
    "ClassifiedAsset",
    "CompileResult",
    "Manifest",
    "classify",
    "parse_content",
    "parse_manifest",
    # Errors
    "AssetRegistryError",
    "CycleError",
    "DiscoveryError",
    "KeyCollisionError",
    "ManifestParseError",
    "ReadError",
    # Filesystem and emitters
    "FileDiscoverer",
    "FileSource",
    "LocalFileSource",
    "CommonJSEmitter",
    "ESModuleEmitter",
    "RegistryEmitter",
    # CLI
    "compile_manifest",
    "main",
]
