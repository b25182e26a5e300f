"""Connection settings for one printer."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from ..const import CONF_HOST, CONF_PORT, CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL

_LOGGER = logging.getLogger(__name__)


def _parse_interval(raw: Any) -> int:
    """Return the polling interval in minutes, falling back to the default."""
    if raw is None or raw == "":
        return DEFAULT_SCAN_INTERVAL
    try:
        minutes = int(raw)
    except (TypeError, ValueError):
        _LOGGER.warning("Invalid scan interval %r, using %d minutes", raw, DEFAULT_SCAN_INTERVAL)
        return DEFAULT_SCAN_INTERVAL
    if minutes <= 0:
        _LOGGER.warning("Scan interval must be positive, using %d minutes", DEFAULT_SCAN_INTERVAL)
        return DEFAULT_SCAN_INTERVAL
    return minutes


@dataclass(frozen=True)
class PrinterSettings:
    """Where the printer lives and how often to poll it.

    Attributes:
        host: Hostname or IP address, empty when not configured
        port: Port as text, empty for the default HTTP port
        interval_minutes: Minutes between poll cycles
    """

    host: str
    port: str = ""
    interval_minutes: int = DEFAULT_SCAN_INTERVAL

    @classmethod
    def from_config(cls, data: Mapping[str, Any]) -> PrinterSettings:
        """Build settings from config entry data and options."""
        host = str(data.get(CONF_HOST) or "").strip()
        port = data.get(CONF_PORT)
        port_text = "" if port is None else str(port).strip()
        return cls(
            host=host,
            port=port_text,
            interval_minutes=_parse_interval(data.get(CONF_SCAN_INTERVAL)),
        )

    @property
    def address(self) -> str:
        """Return host, with ':port' appended when a port is set."""
        if self.port:
            return f"{self.host}:{self.port}"
        return self.host

    @property
    def base_url(self) -> str:
        """Return the printer's base URL."""
        return f"http://{self.address}"

    def page_url(self, path: str) -> str:
        """Return the full URL of a page on the printer."""
        return f"{self.base_url}{path}"

    @property
    def interval(self) -> timedelta:
        """Return the delay between poll cycles."""
        return timedelta(minutes=self.interval_minutes)
