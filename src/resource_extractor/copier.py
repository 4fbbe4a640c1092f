"""Stream leaf assets into the destination, leaving existing files alone."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from resource_extractor.config import DEFAULT_BUFFER_SIZE
from resource_extractor.exceptions import ExtractionCancelled
from resource_extractor.sources import AssetSource

logger = logging.getLogger(__name__)

BUFFER_SIZE = DEFAULT_BUFFER_SIZE


@dataclass
class CopyStats:
    copied: int = 0
    skipped: int = 0


def destination_path(dest_dir: Path, asset: str) -> Path:
    return dest_dir.joinpath(*asset.split("/"))


def copy_asset(
    source: AssetSource,
    asset: str,
    output: Path,
    buffer_size: int = BUFFER_SIZE,
    abort: threading.Event | None = None,
) -> None:
    """Copy one leaf asset to *output* in ``buffer_size`` chunks."""
    output.parent.mkdir(parents=True, exist_ok=True)
    with source.open(asset) as src, output.open("wb") as dst:
        while True:
            if abort is not None and abort.is_set():
                raise ExtractionCancelled(asset)
            chunk = src.read(buffer_size)
            if not chunk:
                break
            dst.write(chunk)
        dst.flush()


def copy_leaves(
    source: AssetSource,
    leaves: Iterable[str],
    dest_dir: Path,
    buffer_size: int = BUFFER_SIZE,
    abort: threading.Event | None = None,
    stats: CopyStats | None = None,
) -> CopyStats:
    """Copy every leaf that does not exist yet under *dest_dir*.

    Existing files are skipped without looking at their content. The first
    read or write error aborts the whole loop and propagates; counts
    gathered so far remain in *stats* when one is passed in.
    """
    if stats is None:
        stats = CopyStats()
    for asset in leaves:
        if abort is not None and abort.is_set():
            raise ExtractionCancelled(asset)

        output = destination_path(dest_dir, asset)
        # Dangling symlinks count as present.
        if output.is_symlink() or output.exists():
            logger.debug("Skipping %s, already extracted", asset)
            stats.skipped += 1
            continue

        copy_asset(source, asset, output, buffer_size=buffer_size, abort=abort)
        logger.debug("Extracted %s", asset)
        stats.copied += 1
    return stats
