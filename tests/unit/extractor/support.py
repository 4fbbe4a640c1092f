"""Test doubles and helpers for resource extraction tests."""

from __future__ import annotations

import io
import threading
from pathlib import Path
from typing import BinaryIO

from resource_extractor.sources import DirectoryAssetSource


class RecordingAssetSource:
    """Wraps a directory source, recording opens and failing on demand."""

    def __init__(
        self,
        inner: DirectoryAssetSource,
        fail_on: set[str] | None = None,
        fail_after: int | None = None,
    ) -> None:
        self.inner = inner
        self.fail_on = fail_on or set()
        self.fail_after = fail_after
        self.opened: list[str] = []
        self.listed: list[str] = []

    def list(self, path: str) -> list[str]:
        self.listed.append(path)
        return self.inner.list(path)

    def open(self, path: str) -> BinaryIO:
        if path in self.fail_on:
            raise OSError(f"simulated read failure: {path}")
        if self.fail_after is not None and len(self.opened) >= self.fail_after:
            raise OSError(f"simulated read failure after {self.fail_after} assets: {path}")
        self.opened.append(path)
        return self.inner.open(path)


class BlockingAssetSource(RecordingAssetSource):
    """Holds every open() until released, so tests can act mid-run."""

    def __init__(self, inner: DirectoryAssetSource) -> None:
        super().__init__(inner)
        self.entered = threading.Event()
        self.release = threading.Event()

    def open(self, path: str) -> BinaryIO:
        self.entered.set()
        self.release.wait(timeout=10)
        return super().open(path)


class BrokenStream(io.RawIOBase):
    """Readable stream that returns one chunk, then fails."""

    def __init__(self, payload: bytes) -> None:
        self._payload = payload
        self._sent = False

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        if not self._sent:
            self._sent = True
            return self._payload
        raise OSError("simulated stream failure")


class BrokenStreamSource(RecordingAssetSource):
    """Source whose stream for *broken* fails after the first chunk."""

    def __init__(self, inner: DirectoryAssetSource, broken: str) -> None:
        super().__init__(inner)
        self.broken = broken

    def open(self, path: str) -> BinaryIO:
        if path == self.broken:
            self.opened.append(path)
            return BrokenStream(b"partial")  # type: ignore[return-value]
        return super().open(path)


def files_under(root: Path) -> set[str]:
    """Relative POSIX paths of every file below *root*."""
    if not root.exists():
        return set()
    return {path.relative_to(root).as_posix() for path in root.rglob("*") if path.is_file()}
