"""Read-only asset sources the extractor copies from.

An asset source addresses entries by ``/``-separated relative paths and
answers two questions: which children a path has, and what bytes a leaf
holds. A path is a directory iff it lists at least one child.
"""

from __future__ import annotations

import importlib.resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class AssetSource(Protocol):
    """Hierarchical, read-only store of bundled assets."""

    def list(self, path: str) -> list[str]:
        """Return child names of *path*; empty for a leaf or a missing path."""
        ...

    def open(self, path: str) -> BinaryIO:
        """Open the leaf at *path* for binary reading."""
        ...


class DirectoryAssetSource:
    """Assets laid out as a plain directory tree on disk."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def _resolve(self, path: str) -> Path:
        return self.root.joinpath(*[part for part in path.split("/") if part])

    def list(self, path: str) -> list[str]:
        target = self._resolve(path)
        if not target.is_dir():
            return []
        # A directory that exists but cannot be read raises OSError here.
        return sorted(entry.name for entry in target.iterdir())

    def open(self, path: str) -> BinaryIO:
        return self._resolve(path).open("rb")

    def __repr__(self) -> str:
        return f"DirectoryAssetSource({str(self.root)!r})"


class PackageAssetSource:
    """Assets bundled as package data inside an installed Python package.

    Args:
        package: Importable package name holding the assets.
        subdir: Optional directory inside the package used as the asset root.
    """

    def __init__(self, package: str, subdir: str = "") -> None:
        self.package = package
        self.subdir = subdir.strip("/")

    def _root(self) -> Traversable:
        root = importlib.resources.files(self.package)
        for part in self.subdir.split("/"):
            if part:
                root = root.joinpath(part)
        return root

    def _resolve(self, path: str) -> Traversable:
        node = self._root()
        for part in path.split("/"):
            if part:
                node = node.joinpath(part)
        return node

    def list(self, path: str) -> list[str]:
        node = self._resolve(path)
        if not node.is_dir():
            return []
        return sorted(child.name for child in node.iterdir() if child.name != "__pycache__")

    def open(self, path: str) -> BinaryIO:
        node = self._resolve(path)
        if not node.is_file():
            raise FileNotFoundError(f"Asset not found in package {self.package}: {path}")
        return node.open("rb")  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"PackageAssetSource({self.package!r}, subdir={self.subdir!r})"
