"""Exception hierarchy for resource extraction."""

from __future__ import annotations


class ExtractorError(Exception):
    """Base exception for resource extraction errors."""
    pass


class ExtractorUsageError(ExtractorError, RuntimeError):
    """The task was driven in an order its lifecycle does not allow.

    Raised for caller misuse (starting twice, registering resources after
    start, waiting before start), never for environmental failures.
    """


class ExtractionCancelled(ExtractorError):
    """An abort was requested while the worker was extracting."""

    def __init__(self, asset: str | None = None):
        self.asset = asset
        if asset:
            super().__init__(f"Extraction cancelled before copying {asset}")
        else:
            super().__init__("Extraction cancelled")
