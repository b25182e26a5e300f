"""Diagnostics support for Epson EcoTank Monitor."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .const import CONF_HOST, CONF_PORT, CONF_SCAN_INTERVAL, DOMAIN, STATE_IP, STATE_MAC, STATE_SERIAL, VERSION
from .coordinator import EcoTankStateStore

_LOGGER = logging.getLogger(__name__)

REDACTED = "***REDACTED***"

# Published keys that identify the printer or the network it lives on
REDACTED_STATE_KEYS = {STATE_IP, STATE_MAC, STATE_SERIAL}


def _redact_values(values: dict[str, Any]) -> dict[str, Any]:
    """Replace identifying values with a placeholder."""
    return {key: REDACTED if key in REDACTED_STATE_KEYS else value for key, value in values.items()}


def _published_states(store: EcoTankStateStore) -> dict[str, Any]:
    states: dict[str, Any] = {}
    for key, state in (store.data or {}).items():
        states[key] = {
            "value": REDACTED if key in REDACTED_STATE_KEYS else state.value,
            "ack": state.ack,
            "timestamp": state.timestamp.isoformat(),
        }
    return states


def _engine_info(store: EcoTankStateStore) -> dict[str, Any]:
    engine = store.engine
    if engine is None:
        return {"running": False}
    orchestrator = engine.orchestrator
    report = orchestrator.last_report
    last_cycle = None
    if report is not None:
        last_cycle = report.as_dict()
        last_cycle["published"] = _redact_values(last_cycle["published"])
        host = engine.settings.host
        for document in last_cycle["documents"]:
            if document["error"] is not None and host:
                document["error"]["message"] = document["error"]["message"].replace(host, REDACTED)
        if last_cycle["error"] and host:
            last_cycle["error"] = last_cycle["error"].replace(host, REDACTED)
    return {
        "running": not engine.stopping,
        "state": orchestrator.state.value,
        "interval_minutes": engine.settings.interval_minutes,
        "has_port": bool(engine.settings.port),
        "last_cycle": last_cycle,
    }


async def async_get_config_entry_diagnostics(hass: HomeAssistant, entry: ConfigEntry) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    store: EcoTankStateStore = hass.data[DOMAIN][entry.entry_id]
    settings = {**entry.data, **entry.options}
    host = settings.get(CONF_HOST)
    title = entry.title.replace(host, REDACTED) if host else entry.title

    diagnostics = {
        "version": VERSION,
        "config_entry": {
            "title": title,
            "host": REDACTED if host else None,
            "port": settings.get(CONF_PORT) or None,
            "scan_interval": settings.get(CONF_SCAN_INTERVAL),
        },
        "engine": _engine_info(store),
        "descriptors": {key: asdict(descriptor) for key, descriptor in store.descriptors.items()},
        "states": _published_states(store),
    }
    _LOGGER.debug("Generated diagnostics for %s", entry.entry_id)
    return diagnostics
