"""Extractor settings stored in the ``extractor:`` section of a YAML file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ruamel.yaml import YAML

from resource_extractor.exceptions import ExtractorError

DEFAULT_MARKER_PREFIX = "res_timestamp-"
DEFAULT_BUFFER_SIZE = 16 * 1024


class ExtractorConfigError(ExtractorError, ValueError):
    """Raised when extractor configuration is invalid."""


@dataclass(slots=True)
class ExtractorConfig:
    """Tunables for an extraction task."""

    marker_prefix: str = DEFAULT_MARKER_PREFIX
    buffer_size: int = DEFAULT_BUFFER_SIZE
    prune_empty_dirs: bool = True
    repair_when_current: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.marker_prefix, str) or not self.marker_prefix.strip():
            raise ExtractorConfigError("marker_prefix must be a non-empty string")
        if "/" in self.marker_prefix or "\\" in self.marker_prefix:
            raise ExtractorConfigError(f"marker_prefix must be a plain file name: {self.marker_prefix!r}")
        if isinstance(self.buffer_size, bool) or not isinstance(self.buffer_size, int) or self.buffer_size <= 0:
            raise ExtractorConfigError(f"buffer_size must be a positive integer, got {self.buffer_size!r}")

    def to_dict(self) -> dict[str, object]:
        return {
            "marker_prefix": self.marker_prefix,
            "buffer_size": self.buffer_size,
            "prune_empty_dirs": self.prune_empty_dirs,
            "repair_when_current": self.repair_when_current,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object] | None) -> "ExtractorConfig":
        if not isinstance(data, dict):
            return cls()

        kwargs: dict[str, object] = {}
        prefix = data.get("marker_prefix")
        if prefix is not None:
            kwargs["marker_prefix"] = prefix
        buffer_size = data.get("buffer_size")
        if buffer_size is not None:
            kwargs["buffer_size"] = buffer_size
        for flag in ("prune_empty_dirs", "repair_when_current"):
            value = data.get(flag)
            if value is None:
                continue
            if not isinstance(value, bool):
                raise ExtractorConfigError(f"{flag} must be true or false, got {value!r}")
            kwargs[flag] = value
        return cls(**kwargs)  # type: ignore[arg-type]


def load_extractor_config(config_path: Path) -> ExtractorConfig:
    """Load extractor settings from *config_path*.

    A missing file yields the defaults. Keys outside the ``extractor``
    section, and unknown keys inside it, are ignored.
    """
    if not config_path.exists():
        return ExtractorConfig()

    yaml = YAML(typ="safe")
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle) or {}
    except Exception as exc:
        raise ExtractorConfigError(f"Failed to parse {config_path}: {exc}") from exc

    section = payload.get("extractor") if isinstance(payload, dict) else None
    return ExtractorConfig.from_dict(section if isinstance(section, dict) else None)
