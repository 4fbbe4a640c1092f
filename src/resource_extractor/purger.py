"""Best-effort removal of extracted resources and marker files.

Only paths that the task tracks (registered resources and the children
discovered beneath them) plus marker files are ever deleted. Unrelated
files in the destination are left untouched.
"""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import Iterable

from resource_extractor.copier import destination_path

logger = logging.getLogger(__name__)


def _list_markers(dest_dir: Path, prefix: str) -> list[Path]:
    try:
        return [entry for entry in dest_dir.iterdir() if entry.name.startswith(prefix)]
    except OSError as exc:
        logger.warning("Cannot list %s for marker cleanup: %s", dest_dir, exc)
        return []


def purge(
    dest_dir: Path,
    membership: Iterable[str],
    marker_prefix: str,
    prune_empty_dirs: bool = True,
) -> int:
    """Delete every tracked resource under *dest_dir* and all marker files.

    Tracked directories are walked breadth-first and every file found is
    deleted; a failure on one path never stops the others. When
    *prune_empty_dirs* is set, the walked directories are removed deepest
    first once empty.

    Returns:
        Number of files deleted, marker files included.
    """
    try:
        if not dest_dir.is_dir():
            return 0
    except OSError as exc:
        logger.warning("Cannot inspect %s for purge: %s", dest_dir, exc)
        return 0

    deleted = 0
    directories: list[tuple[int, Path]] = []
    pending = deque(membership)
    seen: set[str] = set()
    while pending:
        resource = pending.popleft()
        if resource in seen:
            continue
        seen.add(resource)

        target = destination_path(dest_dir, resource)
        try:
            if target.is_symlink() or target.is_file():
                target.unlink()
                deleted += 1
                continue
            if not target.is_dir():
                continue
            directories.append((resource.count("/"), target))
            children = [entry.name for entry in target.iterdir()]
        except OSError as exc:
            logger.warning("Failed to purge %s: %s", target, exc)
            continue
        for child in children:
            pending.append(f"{resource}/{child}")

    for marker in _list_markers(dest_dir, marker_prefix):
        try:
            marker.unlink()
            deleted += 1
        except OSError as exc:
            logger.warning("Failed to delete marker %s: %s", marker.name, exc)

    if prune_empty_dirs:
        for _, directory in sorted(directories, key=lambda item: item[0], reverse=True):
            try:
                directory.rmdir()
            except OSError:
                # Not empty: it still holds files nobody asked us to manage.
                logger.debug("Keeping non-empty directory %s", directory)

    logger.debug("Purged %d file(s) from %s", deleted, dest_dir)
    return deleted
