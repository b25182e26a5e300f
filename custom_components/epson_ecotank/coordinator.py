"""Home Assistant side of the polling engine.

Provides:
- EcoTankStateStore: push-mode coordinator that receives published values
- HassScheduler: schedules the next poll cycle on the event loop
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HassJob, HomeAssistant
from homeassistant.helpers.event import async_call_later
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator
from homeassistant.util import dt as dt_util

from .core.sink import StateDescriptor

if TYPE_CHECKING:
    from .core.engine import PrinterPollingEngine

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishedState:
    """A value written by the engine."""

    value: Any
    ack: bool
    timestamp: datetime


class EcoTankStateStore(DataUpdateCoordinator[dict[str, PublishedState]]):
    """Keyed store of printer values shared by all entities of an entry.

    The engine drives polling itself, so the coordinator never refreshes;
    every publish pushes the new data to listening entities.
    """

    def __init__(self, hass: HomeAssistant, entry: ConfigEntry, name: str) -> None:
        """Initialize the store."""
        super().__init__(
            hass,
            _LOGGER,
            name=name,
            update_interval=None,
            config_entry=entry,
        )
        self.data = {}
        self.descriptors: dict[str, StateDescriptor] = {}
        self.engine: PrinterPollingEngine | None = None

    def ensure_descriptor(self, key: str, descriptor: StateDescriptor) -> None:
        """Register the descriptor for a key unless one already exists."""
        if key not in self.descriptors:
            _LOGGER.debug("Registering %s as %s", key, descriptor)
            self.descriptors[key] = descriptor

    def publish(self, key: str, value: Any, ack: bool = True) -> None:
        """Write a value and notify entities."""
        data = dict(self.data or {})
        data[key] = PublishedState(value=value, ack=ack, timestamp=dt_util.utcnow())
        self.async_set_updated_data(data)

    def value(self, key: str) -> Any:
        """Return the last published value for a key, or None."""
        state = (self.data or {}).get(key)
        return None if state is None else state.value


class HassScheduler:
    """Schedules one-shot poll cycles with async_call_later."""

    def __init__(self, hass: HomeAssistant) -> None:
        """Initialize the scheduler."""
        self._hass = hass

    def schedule(self, delay: timedelta, action: Callable[[], Awaitable[None]]) -> Callable[[], None]:
        """Run the action once after the delay and return its cancel callback."""

        async def _run(_now: datetime) -> None:
            await action()

        job = HassJob(_run, "epson_ecotank poll", cancel_on_shutdown=True)
        return async_call_later(self._hass, delay, job)
