"""ExtractionTask: copy registered assets into the data directory once per version.

Lifecycle (backed by ``transitions.LockedMachine``)::

    created --begin--> running --succeed--> completed
                               \\--fail----> failed

``start()`` runs the extraction body on a background daemon thread and
returns at once. ``wait_for_completion()`` blocks until the worker settles.
Every environmental failure (I/O error, cancellation, an interrupted wait)
ends in a full purge of the destination, so after the wait returns the
destination holds either a complete, marked extraction or none of the
registered resources and no marker.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Iterable

from transitions import MachineError
from transitions.extensions import LockedMachine

from resource_extractor.config import ExtractorConfig
from resource_extractor.copier import CopyStats, copy_leaves
from resource_extractor.exceptions import ExtractionCancelled, ExtractorUsageError
from resource_extractor.home import DestinationProvider
from resource_extractor.identity import IdentityProvider
from resource_extractor.marker import VersionMarker
from resource_extractor.models import ExtractionReport, TaskState, normalize_asset_path
from resource_extractor.purger import purge
from resource_extractor.sources import AssetSource
from resource_extractor.walker import iter_leaves

logger = logging.getLogger(__name__)

__all__ = ["ExtractionTask"]

_TRANSITIONS: list[dict[str, Any]] = [
    {"trigger": "begin", "source": TaskState.CREATED.value, "dest": TaskState.RUNNING.value},
    {"trigger": "succeed", "source": TaskState.RUNNING.value, "dest": TaskState.COMPLETED.value},
    {"trigger": "fail", "source": TaskState.RUNNING.value, "dest": TaskState.FAILED.value},
]


class _TaskLifecycle:
    """Model object the state machine attaches ``state`` and triggers to."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.state: str = ""

    def on_state_change(self, event: Any) -> None:
        transition = getattr(event, "transition", None)
        logger.debug(
            "Extraction task %s: %s -> %s",
            self.name,
            getattr(transition, "source", "?"),
            getattr(transition, "dest", self.state),
        )


class ExtractionTask:
    """Single-shot background extraction of a set of bundled assets.

    Args:
        source: Where the bundled assets are read from.
        identity: Reports the installed application version.
        destination: Reports the writable data directory.
        config: Optional tunables; defaults to ``ExtractorConfig()``.
        name: Label used in log messages and the worker thread name.
    """

    def __init__(
        self,
        source: AssetSource,
        identity: IdentityProvider,
        destination: DestinationProvider,
        config: ExtractorConfig | None = None,
        name: str = "resources",
    ) -> None:
        self._source = source
        self._destination = destination
        self._config = config or ExtractorConfig()
        self._marker = VersionMarker(identity, self._config.marker_prefix)
        self._resources: set[str] = set()

        self._lifecycle = _TaskLifecycle(name)
        self._machine = LockedMachine(
            model=self._lifecycle,
            states=[state.value for state in TaskState],
            transitions=_TRANSITIONS,
            initial=TaskState.CREATED.value,
            auto_transitions=False,
            send_event=True,
            after_state_change="on_state_change",
        )

        self._abort = threading.Event()
        self._done = threading.Event()
        self._thread: threading.Thread | None = None
        self._outcome: ExtractionReport | None = None
        self._failure: BaseException | None = None
        self._report: ExtractionReport | None = None
        self._dest_dir: Path | None = None
        self._stats = CopyStats()
        self._purged = 0

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_resource(self, name: str) -> "ExtractionTask":
        """Register one asset path (file or directory) for extraction."""
        self._require_created("add_resource")
        self._resources.add(normalize_asset_path(name))
        return self

    def add_resources(self, names: Iterable[str]) -> "ExtractionTask":
        """Register several asset paths for extraction."""
        self._require_created("add_resources")
        normalized = [normalize_asset_path(name) for name in names]
        self._resources.update(normalized)
        return self

    @property
    def resources(self) -> frozenset[str]:
        """Snapshot of the tracked asset paths.

        While the task is running the worker owns this set and grows it as
        directories are expanded, so it is only readable before ``start()``
        or once the task has settled.
        """
        if self.state == TaskState.RUNNING:
            raise ExtractorUsageError("resources is not readable while extraction is running")
        return frozenset(self._resources)

    @property
    def state(self) -> TaskState:
        return TaskState(self._lifecycle.state)

    def done(self) -> bool:
        """Return True once the worker has settled."""
        return self._done.is_set()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> "ExtractionTask":
        """Begin extracting on a background worker without blocking."""
        try:
            self._lifecycle.begin()  # type: ignore[attr-defined]
        except MachineError as exc:
            raise ExtractorUsageError(
                f"Extraction task {self._lifecycle.name!r} cannot start from state {self.state}"
            ) from exc

        self._thread = threading.Thread(
            target=self._run,
            name=f"resource-extractor-{self._lifecycle.name}",
            daemon=True,  # Never keep the process alive for extraction
        )
        self._thread.start()
        return self

    def cancel(self) -> None:
        """Ask the worker to abort; the run then ends as failed and purged."""
        if self.state == TaskState.CREATED:
            raise ExtractorUsageError("cancel() called before start()")
        self._abort.set()

    def wait_for_completion(self) -> ExtractionReport:
        """Block until the worker settles and return its report.

        Never raises for environmental failures: a failed, cancelled or
        interrupted run comes back as a ``FAILED`` report after the
        destination has been purged.
        """
        if self._thread is None:
            raise ExtractorUsageError("wait_for_completion() called before start()")
        if self._report is not None:
            return self._report

        try:
            self._done.wait()
        except KeyboardInterrupt:
            logger.warning("Interrupted while waiting for resource extraction; discarding resources")
            self._abort.set()
            self._done.wait()
            self._report = self._discard("interrupted while waiting")
            return self._report

        if self._failure is not None:
            self._report = self._discard(str(self._failure) or type(self._failure).__name__)
        else:
            assert self._outcome is not None
            self._report = self._outcome
        return self._report

    # ------------------------------------------------------------------
    # Worker
    # ------------------------------------------------------------------

    def _run(self) -> None:
        try:
            self._outcome = self._execute()
        except BaseException as exc:
            # Surfaced to the waiting caller through wait_for_completion().
            self._failure = exc
        finally:
            self._done.set()

    def _execute(self) -> ExtractionReport:
        try:
            marker = self._extract()
        except (OSError, ExtractionCancelled) as exc:
            logger.warning("Exception unpacking resources: %s", exc)
            self._settle_failed()
            return self._build_report(error=str(exc) or type(exc).__name__)
        except Exception:
            logger.exception("Unexpected error while extracting resources")
            self._settle_failed()
            raise

        self._lifecycle.succeed()  # type: ignore[attr-defined]
        return self._build_report(marker=marker)

    def _extract(self) -> str | None:
        if self._abort.is_set():
            raise ExtractionCancelled()

        dest_dir = self._destination.data_directory()
        self._dest_dir = dest_dir
        dest_dir.mkdir(parents=True, exist_ok=True)

        marker = self._marker.is_stale(dest_dir)
        if marker is None:
            current = self._marker.expected_marker()
            if not self._config.repair_when_current:
                logger.info("Resources in %s are current (%s)", dest_dir, current)
                return current
            logger.info("Resources in %s are current; restoring missing files", dest_dir)
        else:
            logger.info("Extracting %d resource(s) into %s", len(self._resources), dest_dir)
            self._purge()

        stats = copy_leaves(
            self._source,
            iter_leaves(self._source, self._resources),
            dest_dir,
            buffer_size=self._config.buffer_size,
            abort=self._abort,
            stats=self._stats,
        )

        if marker is None:
            return self._marker.expected_marker()
        self._marker.write(dest_dir, marker)
        logger.info(
            "Extracted resources into %s (copied=%d, skipped=%d)", dest_dir, stats.copied, stats.skipped
        )
        return marker

    def _purge(self) -> int:
        if self._dest_dir is None:
            return 0
        try:
            deleted = purge(
                self._dest_dir,
                self._resources,
                self._config.marker_prefix,
                prune_empty_dirs=self._config.prune_empty_dirs,
            )
        except OSError as exc:
            logger.warning("Purge of %s stopped early: %s", self._dest_dir, exc)
            return 0
        self._purged += deleted
        return deleted

    def _discard(self, error: str) -> ExtractionReport:
        """Settle a run the caller will not use and wipe what it left behind."""
        try:
            self._purge()
        finally:
            if self.state == TaskState.RUNNING:
                self._lifecycle.fail()  # type: ignore[attr-defined]
        return self._build_report(error=error)

    def _settle_failed(self) -> None:
        try:
            self._purge()
        finally:
            self._lifecycle.fail()  # type: ignore[attr-defined]

    def _build_report(self, marker: str | None = None, error: str | None = None) -> ExtractionReport:
        return ExtractionReport(
            state=self.state if error is None else TaskState.FAILED,
            marker=marker if error is None else None,
            copied=self._stats.copied,
            skipped=self._stats.skipped,
            purged=self._purged,
            error=error,
        )

    def _require_created(self, operation: str) -> None:
        if self.state != TaskState.CREATED:
            raise ExtractorUsageError(f"{operation}() called after start()")
