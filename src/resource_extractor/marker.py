"""Version marker: the file whose name records what the destination holds.

A consistent destination carries exactly one empty marker file named
``<prefix><versionCode>-<lastUpdateTime>``. Anything else (no marker,
several markers, or a single marker for another version) means the
destination is stale and must be extracted again.
"""

from __future__ import annotations

import logging
from pathlib import Path

from resource_extractor.config import DEFAULT_MARKER_PREFIX
from resource_extractor.identity import IdentityProvider

logger = logging.getLogger(__name__)

TIMESTAMP_PREFIX = DEFAULT_MARKER_PREFIX


class VersionMarker:
    """Computes, reads and writes the version marker of a destination."""

    def __init__(self, identity: IdentityProvider, prefix: str = TIMESTAMP_PREFIX) -> None:
        self.identity = identity
        self.prefix = prefix

    def expected_marker(self) -> str | None:
        """Return the marker for the installed version, ``None`` if unknown."""
        identity = self.identity.current_version_identity()
        if identity is None:
            return None
        return f"{self.prefix}{identity.marker_suffix()}"

    def current_markers(self, dest_dir: Path) -> list[str]:
        """Return the names of all marker files present in *dest_dir*."""
        if not dest_dir.is_dir():
            return []
        return sorted(
            entry.name for entry in dest_dir.iterdir() if entry.name.startswith(self.prefix)
        )

    def is_stale(self, dest_dir: Path) -> str | None:
        """Return the marker to write after extracting, or ``None`` if current.

        An unknown identity always counts as stale and yields the bare
        prefix, so the destination is re-extracted on every run.
        """
        expected = self.expected_marker()
        if expected is None:
            logger.warning("Application identity unavailable; forcing re-extraction")
            return self.prefix

        existing = self.current_markers(dest_dir)
        if len(existing) != 1 or existing[0] != expected:
            logger.debug("Destination %s is stale (expected %s, found %s)", dest_dir, expected, existing)
            return expected
        return None

    def write(self, dest_dir: Path, marker: str) -> bool:
        """Create the empty marker file. Failures are logged, not raised."""
        try:
            (dest_dir / marker).touch()
        except OSError as exc:
            logger.warning("Failed to write resource marker %s: %s", marker, exc)
            return False
        return True
