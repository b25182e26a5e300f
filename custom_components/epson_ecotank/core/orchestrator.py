"""One poll cycle: fetch the three pages, extract, publish.

Cycle flow:
    network page -> status page -> maintenance page -> publish -> schedule

A transport failure aborts the remaining fetches. A non-200 answer only
drops that page. Values from the pages that were read are published
either way; connectivity is reported True only when all three pages came
back with HTTP 200.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..const import STATE_CONNECTION, STATE_IP
from ..printer_config.schema import DocumentKind
from .extractor import ExtractionOutcome, FieldExtractor, FieldValue
from .fetcher import FetchError, FetchResult, PageFetcher
from .fields import INK_CHANNELS, DocumentSpec
from .settings import PrinterSettings
from .sink import Scheduler, StateDescriptor, StateSink

_LOGGER = logging.getLogger(__name__)

RunBlocking = Callable[..., Awaitable[Any]]


class CycleState(str, Enum):
    """Where the orchestrator is within a cycle."""

    IDLE = "idle"
    FETCHING_NETWORK = "fetching_network"
    FETCHING_STATUS = "fetching_status"
    FETCHING_MAINTENANCE = "fetching_maintenance"
    PUBLISHING = "publishing"
    SCHEDULED = "scheduled"
    STOPPED = "stopped"


_FETCH_STATES = {
    DocumentKind.NETWORK: CycleState.FETCHING_NETWORK,
    DocumentKind.STATUS: CycleState.FETCHING_STATUS,
    DocumentKind.MAINTENANCE: CycleState.FETCHING_MAINTENANCE,
}


class CancellationToken:
    """Set once when polling stops; never reset."""

    def __init__(self) -> None:
        """Initialize an uncancelled token."""
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        """Return True once cancel() was called."""
        return self._cancelled

    def cancel(self) -> None:
        """Mark polling as stopping."""
        self._cancelled = True


def describe_error(err: BaseException) -> str:
    """Serialize an exception for the error log."""
    return json.dumps(
        {"type": type(err).__name__, "message": str(err), "args": [repr(arg) for arg in err.args]},
        ensure_ascii=False,
    )


@dataclass
class DocumentReport:
    """What happened to one page during a cycle."""

    spec: DocumentSpec
    result: FetchResult
    outcome: ExtractionOutcome | None = None

    @property
    def ok(self) -> bool:
        """Return True if the page was read with HTTP 200."""
        return self.result.ok

    @property
    def error(self) -> FetchError | None:
        """Return the transport error, if any."""
        return self.result.error


@dataclass
class CycleReport:
    """Summary of one poll cycle, kept for diagnostics."""

    started: float = field(default_factory=time.time)
    documents: list[DocumentReport] = field(default_factory=list)
    aborted: bool = False
    connected: bool = False
    published: dict[str, FieldValue] = field(default_factory=dict)
    unpublished: dict[str, FieldValue] = field(default_factory=dict)
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly view of the report."""
        return {
            "started": self.started,
            "aborted": self.aborted,
            "connected": self.connected,
            "error": self.error,
            "documents": [
                {
                    "kind": doc.spec.kind.value,
                    "status_code": doc.result.status_code,
                    "error": None if doc.error is None else {"kind": doc.error.kind, "message": doc.error.message},
                    "fields_found": sorted(doc.outcome) if doc.outcome is not None else [],
                }
                for doc in self.documents
            ],
            "published": dict(self.published),
            "unpublished": dict(self.unpublished),
        }


class CycleOrchestrator:
    """Runs poll cycles against one printer.

    Fetching is blocking and runs through ``run_blocking`` (the executor);
    extraction and publishing happen on the caller's loop.
    """

    def __init__(
        self,
        settings: PrinterSettings,
        documents: Sequence[DocumentSpec],
        sink: StateSink,
        scheduler: Scheduler,
        token: CancellationToken,
        fetcher: PageFetcher | None = None,
        extractor: FieldExtractor | None = None,
        run_blocking: RunBlocking | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            settings: Printer address and interval
            documents: Pages in fetch order with their field tables
            sink: Where values are published
            scheduler: Schedules the next cycle
            token: Stop flag shared with the engine
            fetcher: Page fetcher, a new PageFetcher by default
            extractor: Field extractor, a new FieldExtractor by default
            run_blocking: Awaitable executor for blocking calls, asyncio.to_thread by default
        """
        self.settings = settings
        self.documents = tuple(documents)
        self.sink = sink
        self.scheduler = scheduler
        self.fetcher = fetcher or PageFetcher()
        self.extractor = extractor or FieldExtractor()
        self._token = token
        self._run_blocking: RunBlocking = run_blocking or asyncio.to_thread
        self.state = CycleState.IDLE
        self.last_report: CycleReport | None = None

    async def async_run_cycle(self) -> CycleReport | None:
        """Run one cycle. Never raises.

        Returns:
            The cycle report, or None when polling is stopping.
        """
        if self._token.cancelled:
            _LOGGER.debug("Polling is stopping, skipping cycle")
            self.state = CycleState.STOPPED
            return None

        report = CycleReport()
        try:
            await self._async_fetch_documents(report)
            self._publish(report)
        except Exception as err:  # noqa: BLE001
            _LOGGER.error("Unexpected error polling %s: %s", self.settings.address, describe_error(err), exc_info=True)
            report.error = describe_error(err)
            report.connected = False
            self.sink.publish(STATE_CONNECTION, False)

        self.last_report = report
        self.state = CycleState.STOPPED if self._token.cancelled else CycleState.IDLE
        return report

    def schedule_next(self, action: Callable[[], Awaitable[None]]) -> Callable[[], None] | None:
        """Schedule the next cycle after the configured interval.

        Returns:
            Callable cancelling the scheduled cycle, or None when stopping.
        """
        if self._token.cancelled:
            _LOGGER.debug("Polling is stopping, not scheduling another cycle")
            self.state = CycleState.STOPPED
            return None
        cancel = self.scheduler.schedule(self.settings.interval, action)
        self.state = CycleState.SCHEDULED
        _LOGGER.debug("Next poll of %s in %d minutes", self.settings.address, self.settings.interval_minutes)
        return cancel

    async def _async_fetch_documents(self, report: CycleReport) -> None:
        for spec in self.documents:
            if self._token.cancelled:
                report.aborted = True
                return

            self.state = _FETCH_STATES[spec.kind]
            url = self.settings.page_url(spec.path)
            result: FetchResult = await self._run_blocking(self.fetcher.fetch, url)
            doc = DocumentReport(spec=spec, result=result)
            report.documents.append(doc)

            if self._token.cancelled:
                report.aborted = True
                return

            if result.error is not None:
                if result.error.is_unreachable:
                    _LOGGER.debug("Printer offline, next try in %d minutes", self.settings.interval_minutes)
                else:
                    error = result.error.exception or RuntimeError(result.error.message)
                    _LOGGER.error("Error fetching %s: %s", url, describe_error(error))
                report.aborted = True
                return

            if not result.ok:
                _LOGGER.warning("Cannot read %s page from printer: HTTP %s", spec.kind.value, result.status_code)
                continue

            doc.outcome = self.extractor.extract(result.body or "", spec.descriptors)

    def _publish(self, report: CycleReport) -> None:
        # stop() already reported the printer as disconnected
        if self._token.cancelled:
            return

        self.state = CycleState.PUBLISHING
        ink_descriptors: dict[str, StateDescriptor] = {
            channel.level.key: channel.state_descriptor for channel in INK_CHANNELS
        }

        for doc in report.documents:
            if not doc.ok or doc.outcome is None:
                continue
            self._publish_value(report, STATE_IP, self.settings.address)
            for descriptor in doc.spec.descriptors:
                if descriptor.key in ink_descriptors:
                    self.sink.ensure_descriptor(descriptor.key, ink_descriptors[descriptor.key])
                if descriptor.key not in doc.outcome:
                    continue
                value = doc.outcome[descriptor.key]
                if descriptor.publish:
                    self._publish_value(report, descriptor.key, value)
                else:
                    report.unpublished[descriptor.key] = value

        report.connected = (
            not report.aborted
            and len(report.documents) == len(self.documents)
            and all(doc.ok for doc in report.documents)
        )
        self.sink.publish(STATE_CONNECTION, report.connected)

    def _publish_value(self, report: CycleReport, key: str, value: FieldValue) -> None:
        self.sink.publish(key, value)
        report.published[key] = value
