"""Shared fixtures for resource extraction tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from resource_extractor.sources import DirectoryAssetSource
from tests.unit.extractor.support import RecordingAssetSource


@pytest.fixture()
def asset_root(tmp_path: Path) -> Path:
    """Bundled assets laid out like a Flutter application's asset tree."""
    root = tmp_path / "assets"
    flutter = root / "flutter_assets"
    (flutter / "fonts" / "nested" / "deep").mkdir(parents=True)
    (flutter / "isolate_snapshot_data").write_bytes(b"snapshot")
    (flutter / "kernel_blob.bin").write_bytes(b"kernel" * 10_000)
    (flutter / "fonts" / "Roboto.ttf").write_bytes(b"font")
    (flutter / "fonts" / "nested" / "deep" / "glyphs.bin").write_bytes(b"glyphs")
    (root / "icudtl.dat").write_bytes(b"icu")
    (root / "unrelated.txt").write_text("not registered")
    return root


@pytest.fixture()
def directory_source(asset_root: Path) -> DirectoryAssetSource:
    return DirectoryAssetSource(asset_root)


@pytest.fixture()
def source(directory_source: DirectoryAssetSource) -> RecordingAssetSource:
    return RecordingAssetSource(directory_source)


@pytest.fixture()
def dest(tmp_path: Path) -> Path:
    return tmp_path / "data"
