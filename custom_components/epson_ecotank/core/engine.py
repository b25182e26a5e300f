"""Start/stop lifecycle around the poll cycle."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..const import STATE_CONNECTION
from .extractor import FieldExtractor
from .fetcher import PageFetcher
from .fields import DocumentSpec
from .orchestrator import CancellationToken, CycleOrchestrator, RunBlocking
from .settings import PrinterSettings
from .sink import Scheduler, StateSink

_LOGGER = logging.getLogger(__name__)


class PrinterPollingEngine:
    """Polls one printer until stopped.

    The first cycle runs as soon as the engine starts; every completed
    cycle schedules exactly one successor. stop() prevents any further
    fetch from being issued and reports the printer as disconnected.
    """

    def __init__(
        self,
        settings: PrinterSettings,
        documents: Sequence[DocumentSpec],
        sink: StateSink,
        scheduler: Scheduler,
        fetcher: PageFetcher | None = None,
        extractor: FieldExtractor | None = None,
        run_blocking: RunBlocking | None = None,
    ):
        """Initialize the engine."""
        self.settings = settings
        self.sink = sink
        self._token = CancellationToken()
        self._cancel_timer: Callable[[], None] | None = None
        self.orchestrator = CycleOrchestrator(
            settings,
            documents,
            sink,
            scheduler,
            self._token,
            fetcher=fetcher,
            extractor=extractor,
            run_blocking=run_blocking,
        )

    @property
    def stopping(self) -> bool:
        """Return True once stop() was called."""
        return self._token.cancelled

    async def async_start(self) -> bool:
        """Run the first cycle and keep polling.

        Returns:
            False if no host is configured (nothing is polled), True otherwise.
        """
        if not self.settings.host:
            _LOGGER.warning("No printer IP address configured, not polling")
            return False
        _LOGGER.info(
            "Polling Epson EcoTank at %s every %d minutes",
            self.settings.address,
            self.settings.interval_minutes,
        )
        await self.async_poll()
        return True

    async def async_poll(self) -> None:
        """Run one cycle and schedule the next."""
        self._cancel_timer = None
        await self.orchestrator.async_run_cycle()
        self._cancel_timer = self.orchestrator.schedule_next(self.async_poll)

    def stop(self) -> None:
        """Stop polling and report the printer as disconnected."""
        self._token.cancel()
        if self._cancel_timer is not None:
            self._cancel_timer()
            self._cancel_timer = None
        self.sink.publish(STATE_CONNECTION, False)
        self.orchestrator.fetcher.close()
        _LOGGER.info("Epson EcoTank polling stopped")
