"""Tests for resource_extractor.sources: asset source implementations."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from resource_extractor.sources import AssetSource, DirectoryAssetSource, PackageAssetSource


class TestDirectoryAssetSource:
    def test_lists_sorted_children(self, directory_source: DirectoryAssetSource) -> None:
        assert directory_source.list("flutter_assets") == [
            "fonts",
            "isolate_snapshot_data",
            "kernel_blob.bin",
        ]

    def test_root_listing(self, directory_source: DirectoryAssetSource) -> None:
        assert "flutter_assets" in directory_source.list("")

    def test_leaf_and_missing_list_empty(self, directory_source: DirectoryAssetSource) -> None:
        assert directory_source.list("icudtl.dat") == []
        assert directory_source.list("nope") == []

    def test_open_reads_bytes(self, directory_source: DirectoryAssetSource) -> None:
        with directory_source.open("flutter_assets/fonts/Roboto.ttf") as handle:
            assert handle.read() == b"font"

    def test_open_missing_raises(self, directory_source: DirectoryAssetSource) -> None:
        with pytest.raises(FileNotFoundError):
            directory_source.open("nope")

    def test_satisfies_protocol(self, directory_source: DirectoryAssetSource) -> None:
        assert isinstance(directory_source, AssetSource)


@pytest.fixture()
def bundled_package(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Importable package with package data under ``assets/``."""
    pkg = tmp_path / "site" / "bundled_app"
    (pkg / "assets" / "flutter_assets").mkdir(parents=True)
    (pkg / "__init__.py").write_text("")
    (pkg / "assets" / "flutter_assets" / "kernel_blob.bin").write_bytes(b"kernel")
    (pkg / "assets" / "icudtl.dat").write_bytes(b"icu")
    monkeypatch.syspath_prepend(str(tmp_path / "site"))
    monkeypatch.delitem(sys.modules, "bundled_app", raising=False)
    return "bundled_app"


class TestPackageAssetSource:
    def test_lists_package_data(self, bundled_package: str) -> None:
        source = PackageAssetSource(bundled_package, "assets")
        assert source.list("") == ["flutter_assets", "icudtl.dat"]
        assert source.list("flutter_assets") == ["kernel_blob.bin"]
        assert source.list("icudtl.dat") == []

    def test_open(self, bundled_package: str) -> None:
        source = PackageAssetSource(bundled_package, "assets")
        with source.open("flutter_assets/kernel_blob.bin") as handle:
            assert handle.read() == b"kernel"

    def test_open_missing(self, bundled_package: str) -> None:
        with pytest.raises(FileNotFoundError):
            PackageAssetSource(bundled_package, "assets").open("missing.bin")
