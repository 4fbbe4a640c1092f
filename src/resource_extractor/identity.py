"""Application identity providers used to compute the version marker."""

from __future__ import annotations

import logging
from importlib import metadata
from pathlib import Path
from typing import Protocol, runtime_checkable

from resource_extractor.models import VersionIdentity

logger = logging.getLogger(__name__)


@runtime_checkable
class IdentityProvider(Protocol):
    """Answers which version of the application is installed right now."""

    def current_version_identity(self) -> VersionIdentity | None:
        """Return the installed identity, or ``None`` when it is unavailable."""
        ...


class StaticIdentityProvider:
    """Identity fixed at construction time."""

    def __init__(self, version_code: int | str | None, last_update_time: int = 0) -> None:
        self._identity = (
            None if version_code is None else VersionIdentity(version_code, last_update_time)
        )

    @classmethod
    def unavailable(cls) -> "StaticIdentityProvider":
        return cls(None)

    def current_version_identity(self) -> VersionIdentity | None:
        return self._identity


class DistributionIdentityProvider:
    """Identity of an installed distribution, read through ``importlib.metadata``.

    ``version_code`` is the distribution version and ``last_update_time`` the
    modification time of its metadata in milliseconds, which changes every
    time the distribution is reinstalled or upgraded.
    """

    def __init__(self, distribution: str) -> None:
        self.distribution = distribution

    def current_version_identity(self) -> VersionIdentity | None:
        try:
            dist = metadata.distribution(self.distribution)
        except metadata.PackageNotFoundError:
            logger.warning("Distribution %s is not installed", self.distribution)
            return None

        version = dist.version
        if not version:
            logger.warning("Distribution %s has no version metadata", self.distribution)
            return None

        try:
            last_update_time = self._metadata_mtime_ms(dist)
        except OSError as exc:
            logger.warning("Cannot stat metadata of %s: %s", self.distribution, exc)
            return None
        return VersionIdentity(version, last_update_time)

    @staticmethod
    def _metadata_mtime_ms(dist: metadata.Distribution) -> int:
        for entry in dist.files or []:
            if entry.name == "METADATA" or entry.name == "PKG-INFO":
                located = Path(str(dist.locate_file(entry)))
                return located.stat().st_mtime_ns // 1_000_000
        return 0
