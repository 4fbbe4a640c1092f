"""Destination directory providers.

Provides the writable, persistent directory extracted assets land in:
- a fixed path supplied by the embedding application
- the per-user data directory of an application (via platformdirs)
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from platformdirs import user_data_dir


@runtime_checkable
class DestinationProvider(Protocol):
    """Answers where extracted assets live."""

    def data_directory(self) -> Path:
        """Return the absolute path of the writable data directory."""
        ...


class FixedDataDirectory:
    """Destination at a path chosen by the caller."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def data_directory(self) -> Path:
        return self.path.absolute()


class PlatformDataDirectory:
    """Per-user data directory of an application.

    Resolves to ``~/.local/share/<app>`` on Linux,
    ``~/Library/Application Support/<app>`` on macOS and
    ``%LOCALAPPDATA%\\<author>\\<app>`` on Windows.
    """

    def __init__(self, app_name: str, app_author: str | None = None) -> None:
        if not app_name:
            raise ValueError("app_name must not be empty")
        self.app_name = app_name
        self.app_author = app_author

    def data_directory(self) -> Path:
        return Path(user_data_dir(self.app_name, self.app_author or False)).absolute()
