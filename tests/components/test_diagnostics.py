"""Tests for Epson EcoTank Monitor diagnostics platform."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from custom_components.epson_ecotank.const import (
    DOMAIN,
    NETWORK_PAGE,
    STATE_FIRMWARE,
    STATE_IP,
    STATE_MAC,
    STATE_SERIAL,
)
from custom_components.epson_ecotank.coordinator import PublishedState
from custom_components.epson_ecotank.core.engine import PrinterPollingEngine
from custom_components.epson_ecotank.core.fetcher import ERROR_UNREACHABLE, FetchError, FetchResult
from custom_components.epson_ecotank.core.fields import INK_CHANNELS
from custom_components.epson_ecotank.diagnostics import REDACTED, async_get_config_entry_diagnostics
from tests.fakes import FakeFetcher, run_inline

_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_entry():
    """Create mock config entry."""
    entry = Mock()
    entry.entry_id = "test_entry"
    entry.title = "Epson EcoTank (192.168.1.50)"
    entry.data = {"host": "192.168.1.50", "port": "", "scan_interval": 10}
    entry.options = {}
    return entry


def _hass_with(store):
    hass = Mock()
    hass.data = {DOMAIN: {"test_entry": store}}
    return hass


def _store(engine=None):
    store = Mock()
    store.engine = engine
    store.descriptors = {}
    store.data = {
        STATE_IP: PublishedState(value="192.168.1.50", ack=True, timestamp=_NOW),
        STATE_MAC: PublishedState(value="A4:EE:57:12:34:56", ack=True, timestamp=_NOW),
        STATE_SERIAL: PublishedState(value="X5BN012345", ack=True, timestamp=_NOW),
        STATE_FIRMWARE: PublishedState(value="06.51.HF22JB", ack=True, timestamp=_NOW),
    }
    return store


class TestDiagnostics:
    """Tests for async_get_config_entry_diagnostics."""

    @pytest.mark.asyncio
    async def test_identifying_values_redacted(self, mock_entry):
        """Address, MAC and serial never appear in diagnostics."""
        store = _store()

        diagnostics = await async_get_config_entry_diagnostics(_hass_with(store), mock_entry)

        assert "192.168.1.50" not in str(diagnostics)
        assert "A4:EE:57:12:34:56" not in str(diagnostics)
        assert "X5BN012345" not in str(diagnostics)
        assert diagnostics["config_entry"]["title"] == f"Epson EcoTank ({REDACTED})"
        assert diagnostics["states"][STATE_FIRMWARE]["value"] == "06.51.HF22JB"
        assert diagnostics["states"][STATE_FIRMWARE]["timestamp"] == _NOW.isoformat()
        assert diagnostics["engine"] == {"running": False}

    @pytest.mark.asyncio
    async def test_last_cycle_redacts_host_in_errors(self, mock_entry, document_specs, settings, sink, scheduler):
        """Error messages from the last cycle do not leak the host."""
        error = FetchError(
            ERROR_UNREACHABLE,
            "HTTPConnectionPool(host='192.168.1.50', port=80): Max retries exceeded",
        )
        engine = PrinterPollingEngine(
            settings,
            document_specs,
            sink,
            scheduler,
            fetcher=FakeFetcher({NETWORK_PAGE: FetchResult(url="", error=error)}),
            run_blocking=run_inline,
        )
        await engine.async_start()

        diagnostics = await async_get_config_entry_diagnostics(_hass_with(_store(engine)), mock_entry)

        engine_info = diagnostics["engine"]
        assert engine_info["running"] is True
        assert engine_info["state"] == "scheduled"
        assert engine_info["interval_minutes"] == 10
        last_cycle = engine_info["last_cycle"]
        assert last_cycle["aborted"] is True
        assert last_cycle["connected"] is False
        assert last_cycle["documents"][0]["error"]["kind"] == ERROR_UNREACHABLE
        assert "192.168.1.50" not in str(diagnostics)

    @pytest.mark.asyncio
    async def test_descriptors_included(self, mock_entry):
        """Registered descriptors are listed."""
        store = _store()
        channel = INK_CHANNELS[0]
        store.descriptors = {channel.level.key: channel.state_descriptor}

        diagnostics = await async_get_config_entry_diagnostics(_hass_with(store), mock_entry)

        assert diagnostics["descriptors"][channel.level.key]["role"] == "level.volume"
