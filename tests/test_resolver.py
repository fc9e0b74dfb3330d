"""Tests for recursive manifest resolution."""

import asyncio
import json
import threading
from pathlib import Path

import pytest

from game_asset_registry.core.errors import CycleError, ManifestParseError, ReadError
from game_asset_registry.core.types import AssetKind
from game_asset_registry.resolver import ManifestResolver

from helpers import PNG_BYTES, MemoryFileSource

PATH_DOC = json.dumps({"meta": {"type": "path"}, "points": []})


def manifest(**fields: list[str]) -> str:
    return json.dumps(fields)


def resolve(source: MemoryFileSource, text: str, working_dir: str = "/game", **kwargs):
    return asyncio.run(ManifestResolver(source, **kwargs).resolve(text, working_dir))


class TestLocalAssets:
    """Test resolution of a manifest without imports."""

    def test_discovery_order_survives_read_order(self) -> None:
        """Test that slow reads do not reorder local assets."""
        source = MemoryFileSource(
            files={"/game/c.json": "{}", "/game/a.json": PATH_DOC, "/game/b.png": PNG_BYTES},
            globs={"/game/*": ["/game/c.json", "/game/a.json", "/game/b.png"]},
            delays={"/game/c.json": 0.05, "/game/a.json": 0.02},
        )

        resolution = resolve(source, manifest(includes=["*"]))

        assert [a.path for a in resolution.assets] == [
            "/game/c.json",
            "/game/a.json",
            "/game/b.png",
        ]
        assert [a.kind for a in resolution.assets] == [
            AssetKind.UNCLASSIFIED,
            AssetKind.PATH,
            AssetKind.RAWIMAGE,
        ]
        assert source.reads[0] == "/game/b.png"

    def test_excludes(self) -> None:
        """Test that excluded files are neither read nor listed."""
        source = MemoryFileSource(
            files={"/game/a.json": "{}", "/game/skip.json": "{}"},
            globs={"/game/*.json": ["/game/a.json", "/game/skip.json"]},
        )

        resolution = resolve(source, manifest(includes=["*.json"], excludes=["skip.json"]))

        assert [a.path for a in resolution.assets] == ["/game/a.json"]
        assert resolution.dependencies == {"/game/a.json"}

    def test_empty_manifest(self) -> None:
        """Test that an empty manifest resolves to nothing."""
        resolution = resolve(MemoryFileSource(), "{}")

        assert resolution.assets == []
        assert resolution.dependencies == set()

    def test_unparsable_files_are_dependencies(self) -> None:
        """Test that unclassified files are still tracked."""
        source = MemoryFileSource(
            files={"/game/enemy.js": "export const Enemy = {};"},
            globs={"/game/*.js": ["/game/enemy.js"]},
        )

        resolution = resolve(source, manifest(includes=["*.js"]))

        assert resolution.assets[0].kind is AssetKind.UNCLASSIFIED
        assert resolution.dependencies == {"/game/enemy.js"}

    def test_local_read_failure(self) -> None:
        """Test that one unreadable file fails the whole resolution."""
        source = MemoryFileSource(
            files={"/game/a.json": "{}"},
            globs={"/game/*.json": ["/game/a.json", "/game/gone.json"]},
        )

        with pytest.raises(ReadError) as exc_info:
            resolve(source, manifest(includes=["*.json"]))

        assert exc_info.value.path == "/game/gone.json"
        assert "/game/gone.json" in exc_info.value.dependencies

    def test_deeply_nested_file_is_unclassified(self) -> None:
        """Test that a pathologically nested file does not fail the resolution."""
        source = MemoryFileSource(
            files={"/game/deep.dat": b"[" * 100000, "/game/a.json": PATH_DOC},
            globs={"/game/*": ["/game/deep.dat", "/game/a.json"]},
        )

        resolution = resolve(source, manifest(includes=["*"]))

        assert [a.kind for a in resolution.assets] == [AssetKind.UNCLASSIFIED, AssetKind.PATH]
        assert resolution.dependencies == {"/game/deep.dat", "/game/a.json"}


class TestImports:
    """Test import ordering and recursion."""

    def _tree(self, delays: dict[str, float] | None = None) -> MemoryFileSource:
        return MemoryFileSource(
            files={
                "/game/a/manifest.json": manifest(includes=["*.json"], imports=["../shared/m.json"]),
                "/game/a/a1.json": "{}",
                "/game/shared/m.json": manifest(includes=["*.png"]),
                "/game/shared/s.png": PNG_BYTES,
                "/game/b/manifest.json": manifest(includes=["*.json"]),
                "/game/b/b1.json": PATH_DOC,
                "/game/local.json": "{}",
            },
            globs={
                "/game/a/*.json": ["/game/a/manifest.json", "/game/a/a1.json"],
                "/game/shared/*.png": ["/game/shared/s.png"],
                "/game/b/*.json": ["/game/b/manifest.json", "/game/b/b1.json"],
                "/game/local.json": ["/game/local.json"],
            },
            delays=delays,
        )

    def test_import_then_local_order(self) -> None:
        """Test that imports come first, in import order, then local assets."""
        source = self._tree()

        resolution = resolve(
            source,
            manifest(includes=["local.json"], imports=["a/manifest.json", "b/manifest.json"]),
        )

        assert [a.path for a in resolution.assets] == [
            "/game/shared/s.png",
            "/game/a/manifest.json",
            "/game/a/a1.json",
            "/game/b/manifest.json",
            "/game/b/b1.json",
            "/game/local.json",
        ]

    def test_order_independent_of_completion(self) -> None:
        """Test that a slow first import still comes first."""
        source = self._tree(delays={"/game/a/manifest.json": 0.05})

        resolution = resolve(source, manifest(imports=["a/manifest.json", "b/manifest.json"]))

        assert resolution.assets[0].path == "/game/shared/s.png"
        assert resolution.assets[-1].path == "/game/b/b1.json"

    def test_dependencies_at_every_depth(self) -> None:
        """Test that manifests and files from nested imports are dependencies."""
        source = self._tree()

        resolution = resolve(source, manifest(imports=["a/manifest.json"]))

        assert resolution.dependencies == {
            "/game/a/manifest.json",
            "/game/a/a1.json",
            "/game/shared/m.json",
            "/game/shared/s.png",
        }

    def test_missing_import(self) -> None:
        """Test that a missing import fails and is reported as a dependency."""
        with pytest.raises(ReadError) as exc_info:
            resolve(MemoryFileSource(), manifest(imports=["nope.json"]))

        assert exc_info.value.path == "/game/nope.json"
        assert exc_info.value.dependencies == {"/game/nope.json"}

    def test_malformed_import(self) -> None:
        """Test that a malformed sub-manifest fails the parent."""
        source = MemoryFileSource(files={"/game/sub/m.json": "{broken"})

        with pytest.raises(ManifestParseError, match="/game/sub/m.json"):
            resolve(source, manifest(imports=["sub/m.json"]))

    def test_legacy_dialect_imports(self) -> None:
        """Test that sub-manifests use the resolver's dialect."""
        source = MemoryFileSource(
            files={"/game/sub/m.json": json.dumps({"include": ["*.json"]}), "/game/sub/x.json": "{}"},
            globs={"/game/sub/*.json": ["/game/sub/x.json"]},
        )

        resolution = resolve(source, json.dumps({"imports": ["sub/m.json"]}), dialect="legacy")

        assert [a.path for a in resolution.assets] == ["/game/sub/x.json"]


class TestCycles:
    """Test import cycle detection."""

    def test_self_import(self) -> None:
        """Test that a manifest importing itself is a cycle."""
        source = MemoryFileSource(files={"/game/m.json": manifest(imports=["m.json"])})

        with pytest.raises(CycleError) as exc_info:
            resolve(source, manifest(imports=["m.json"]))

        assert exc_info.value.cycle[-2:] == ("/game/m.json", "/game/m.json")

    def test_indirect_cycle(self) -> None:
        """Test that a -> b -> a is detected."""
        source = MemoryFileSource(
            files={
                "/game/a.json": manifest(imports=["b.json"]),
                "/game/b.json": manifest(imports=["a.json"]),
            }
        )

        with pytest.raises(CycleError, match="a.json -> /game/b.json -> /game/a.json"):
            resolve(source, manifest(imports=["a.json"]))

    def test_diamond_is_not_a_cycle(self) -> None:
        """Test that one manifest imported on two branches is allowed."""
        source = MemoryFileSource(
            files={
                "/game/a.json": manifest(imports=["shared.json"]),
                "/game/b.json": manifest(imports=["shared.json"]),
                "/game/shared.json": manifest(includes=["s.json"]),
                "/game/s.json": "{}",
            },
            globs={"/game/s.json": ["/game/s.json"]},
        )

        resolution = resolve(source, manifest(imports=["a.json", "b.json"]))

        assert [a.path for a in resolution.assets] == ["/game/s.json", "/game/s.json"]

    def test_path_canonicalisation_runs_off_the_event_loop(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that resolving manifest paths never blocks the event loop thread."""
        original_resolve = Path.resolve
        threads: list[threading.Thread] = []

        def recording_resolve(self: Path, strict: bool = False) -> Path:
            threads.append(threading.current_thread())
            return original_resolve(self, strict=strict)

        monkeypatch.setattr(Path, "resolve", recording_resolve)
        source = MemoryFileSource(
            files={"/game/m.json": manifest(imports=["sub/m.json"]), "/game/sub/m.json": "{}"}
        )

        asyncio.run(
            ManifestResolver(source).resolve(
                source.files["/game/m.json"], "/game", origin="/game/m.json"
            )
        )

        assert len(threads) == 2
        assert threading.main_thread() not in threads
