"""Versioned, idempotent extraction of bundled assets into a data directory.

Typical use::

    task = ExtractionTask(
        PackageAssetSource("myapp", "assets"),
        DistributionIdentityProvider("myapp"),
        PlatformDataDirectory("myapp"),
    )
    task.add_resources(["fonts", "models/kernel_blob.bin"]).start()
    ...
    report = task.wait_for_completion()
"""

from importlib import metadata

from resource_extractor.config import ExtractorConfig, ExtractorConfigError, load_extractor_config
from resource_extractor.exceptions import ExtractionCancelled, ExtractorError, ExtractorUsageError
from resource_extractor.extractor import ExtractionTask
from resource_extractor.home import DestinationProvider, FixedDataDirectory, PlatformDataDirectory
from resource_extractor.identity import (
    DistributionIdentityProvider,
    IdentityProvider,
    StaticIdentityProvider,
)
from resource_extractor.marker import TIMESTAMP_PREFIX, VersionMarker
from resource_extractor.models import ExtractionReport, TaskState, VersionIdentity
from resource_extractor.sources import AssetSource, DirectoryAssetSource, PackageAssetSource

try:
    __version__ = metadata.version("resource-extractor")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "AssetSource",
    "DestinationProvider",
    "DirectoryAssetSource",
    "DistributionIdentityProvider",
    "ExtractionCancelled",
    "ExtractionReport",
    "ExtractionTask",
    "ExtractorConfig",
    "ExtractorConfigError",
    "ExtractorError",
    "ExtractorUsageError",
    "FixedDataDirectory",
    "IdentityProvider",
    "PackageAssetSource",
    "PlatformDataDirectory",
    "StaticIdentityProvider",
    "TIMESTAMP_PREFIX",
    "TaskState",
    "VersionIdentity",
    "VersionMarker",
    "load_extractor_config",
    "__version__",
]
