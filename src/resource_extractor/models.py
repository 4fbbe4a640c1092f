"""Data types shared by the extraction components.

Defines the task lifecycle states, the application version identity, the
report returned once a task settles, and asset path normalization.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class TaskState(StrEnum):
    """Lifecycle states of an extraction task."""

    CREATED = "created"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_settled(self) -> bool:
        return self in (TaskState.COMPLETED, TaskState.FAILED)


@dataclass(frozen=True)
class VersionIdentity:
    """Version of the installed application.

    ``version_code`` is a build number (or a distribution version string)
    and ``last_update_time`` the install/update instant in milliseconds.
    """

    version_code: int | str
    last_update_time: int

    def marker_suffix(self) -> str:
        return f"{self.version_code}-{self.last_update_time}"


@dataclass(frozen=True)
class ExtractionReport:
    """Outcome of one extraction task, returned by ``wait_for_completion``."""

    state: TaskState
    marker: str | None = None
    copied: int = 0
    skipped: int = 0
    purged: int = 0
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.state == TaskState.COMPLETED

    def to_dict(self) -> dict[str, Any]:
        return {
            "state": str(self.state),
            "marker": self.marker,
            "copied": self.copied,
            "skipped": self.skipped,
            "purged": self.purged,
            "error": self.error,
        }


def normalize_asset_path(path: str) -> str:
    """Return *path* as a clean ``/``-separated relative asset path.

    Raises:
        ValueError: If the path is empty, absolute, or walks outside the
            asset root through ``.`` or ``..`` segments.
    """
    if not isinstance(path, str):
        raise ValueError(f"Asset path must be a string, got {type(path).__name__}")
    if path.startswith("/") or path.startswith("\\") or (len(path) > 1 and path[1] == ":"):
        raise ValueError(f"Asset path must be relative: {path!r}")

    parts = [part for part in path.replace("\\", "/").split("/") if part]
    if not parts:
        raise ValueError("Asset path must not be empty")
    if any(part in (".", "..") for part in parts):
        raise ValueError(f"Asset path must not contain '.' or '..' segments: {path!r}")
    return "/".join(parts)
