"""Breadth-first expansion of registered asset paths into leaf files."""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterator

from resource_extractor.sources import AssetSource

logger = logging.getLogger(__name__)


def iter_leaves(source: AssetSource, membership: set[str]) -> Iterator[str]:
    """Yield every leaf reachable from the paths in *membership*.

    Directory entries are expanded into ``entry/child`` for each child
    listed by *source*. Each discovered child is added to *membership*
    before it is yielded or expanded further, so a later purge knows about
    it even if the run stops part way. Paths already in *membership* are
    not queued twice.

    Children of a directory are discovered together; no other ordering is
    guaranteed.
    """
    pending = deque(sorted(membership))
    while pending:
        asset = pending.popleft()
        children = source.list(asset)
        if not children:
            yield asset
            continue

        logger.debug("Expanding asset directory %s (%d entries)", asset, len(children))
        for child in children:
            child_path = f"{asset}/{child}"
            if child_path in membership:
                continue
            membership.add(child_path)
            pending.append(child_path)
