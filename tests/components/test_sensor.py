"""Tests for Epson EcoTank sensors and the connectivity binary sensor."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
from homeassistant.components.binary_sensor import BinarySensorDeviceClass
from homeassistant.components.sensor import SensorStateClass
from homeassistant.const import PERCENTAGE, EntityCategory

from custom_components.epson_ecotank.binary_sensor import EcoTankConnectivitySensor
from custom_components.epson_ecotank.const import (
    DOMAIN,
    STATE_CONNECTION,
    STATE_FIRMWARE,
    STATE_MODEL,
    STATE_PAGE_COUNT,
)
from custom_components.epson_ecotank.core.fields import INK_CHANNELS
from custom_components.epson_ecotank.core.sink import StateDescriptor
from custom_components.epson_ecotank.sensor import (
    INFO_SENSORS,
    EcoTankInfoSensor,
    EcoTankInkLevelSensor,
    EcoTankPageCountSensor,
    async_setup_entry,
    device_info_for,
)


@pytest.fixture
def mock_store():
    """Create a mock store backed by a plain dict of values."""
    values: dict = {}
    store = Mock()
    store.values = values
    store.value = lambda key: values.get(key)
    store.descriptors = {}
    store.engine = Mock()
    store.engine.settings.address = "192.168.1.50"
    return store


@pytest.fixture
def mock_entry():
    """Create mock config entry."""
    entry = Mock()
    entry.entry_id = "test_entry"
    entry.title = "Epson EcoTank (192.168.1.50)"
    entry.data = {"host": "192.168.1.50"}
    return entry


def _cyan():
    return next(channel for channel in INK_CHANNELS if channel.color == "cyan")


class TestDeviceInfo:
    """Tests for device_info_for."""

    def test_uses_reported_model(self, mock_store, mock_entry):
        """The reported model replaces the generic one."""
        mock_store.values[STATE_MODEL] = "ET-2750 Series"

        info = device_info_for(mock_store, mock_entry)

        assert info["identifiers"] == {(DOMAIN, "test_entry")}
        assert info["model"] == "ET-2750 Series"
        assert info["configuration_url"] == "http://192.168.1.50"

    def test_defaults_before_first_poll(self, mock_store, mock_entry):
        """Without values the generic model is used."""
        assert device_info_for(mock_store, mock_entry)["model"] == "EcoTank"


class TestInfoSensor:
    """Tests for EcoTankInfoSensor."""

    def test_unavailable_until_published(self, mock_store, mock_entry):
        """The sensor has no state before the printer reported one."""
        sensor = EcoTankInfoSensor(mock_store, mock_entry, STATE_FIRMWARE)

        assert sensor.available is False
        assert sensor.native_value is None

    def test_value(self, mock_store, mock_entry):
        """The published value is the state."""
        mock_store.values[STATE_FIRMWARE] = "06.51.HF22JB"
        sensor = EcoTankInfoSensor(mock_store, mock_entry, STATE_FIRMWARE)

        assert sensor.available is True
        assert sensor.native_value == "06.51.HF22JB"
        assert sensor.unique_id == "test_entry_info_firmware"
        assert sensor.entity_category == EntityCategory.DIAGNOSTIC

    def test_model_is_not_diagnostic(self, mock_store, mock_entry):
        """The model is a primary sensor."""
        sensor = EcoTankInfoSensor(mock_store, mock_entry, STATE_MODEL)

        assert sensor.entity_category is None


class TestPageCountSensor:
    """Tests for EcoTankPageCountSensor."""

    def test_page_count(self, mock_store, mock_entry):
        """The counter only grows."""
        mock_store.values[STATE_PAGE_COUNT] = 1234
        sensor = EcoTankPageCountSensor(mock_store, mock_entry)

        assert sensor.native_value == 1234
        assert sensor.state_class == SensorStateClass.TOTAL_INCREASING


class TestInkLevelSensor:
    """Tests for EcoTankInkLevelSensor."""

    def test_level(self, mock_store, mock_entry):
        """Ink levels are percentages."""
        mock_store.values["inks.cyan"] = 84
        sensor = EcoTankInkLevelSensor(mock_store, mock_entry, _cyan())

        assert sensor.native_value == 84
        assert sensor.native_unit_of_measurement == PERCENTAGE
        assert sensor.unique_id == "test_entry_inks_cyan"

    def test_attributes_from_descriptor(self, mock_store, mock_entry):
        """The registered descriptor shows up as attributes."""
        mock_store.descriptors["inks.cyan"] = _cyan().state_descriptor
        sensor = EcoTankInkLevelSensor(mock_store, mock_entry, _cyan())

        assert sensor.extra_state_attributes == {"role": "level.volume", "unit": "%"}

    def test_no_attributes_before_registration(self, mock_store, mock_entry):
        """Nothing is reported before the descriptor exists."""
        mock_store.descriptors["inks.black"] = StateDescriptor(name="x", value_type="number", role="level.volume")
        sensor = EcoTankInkLevelSensor(mock_store, mock_entry, _cyan())

        assert sensor.extra_state_attributes == {}


class TestConnectivitySensor:
    """Tests for EcoTankConnectivitySensor."""

    def test_off_before_first_poll(self, mock_store, mock_entry):
        """No connection value reads as disconnected."""
        sensor = EcoTankConnectivitySensor(mock_store, mock_entry)

        assert sensor.available is True
        assert sensor.is_on is False
        assert sensor.device_class == BinarySensorDeviceClass.CONNECTIVITY

    @pytest.mark.parametrize("connected", [True, False])
    def test_follows_connection(self, mock_store, mock_entry, connected):
        """The state follows the published connection value."""
        mock_store.values[STATE_CONNECTION] = connected
        sensor = EcoTankConnectivitySensor(mock_store, mock_entry)

        assert sensor.is_on is connected
        assert sensor.unique_id == "test_entry_info_connection"


class TestSetupEntry:
    """Tests for the sensor platform setup."""

    @pytest.mark.asyncio
    async def test_creates_all_sensors(self, mock_store, mock_entry):
        """Info, page count and one sensor per ink tank are added."""
        hass = Mock()
        hass.data = {DOMAIN: {"test_entry": mock_store}}
        add_entities = Mock()

        await async_setup_entry(hass, mock_entry, add_entities)

        entities = add_entities.call_args.args[0]
        assert len(entities) == len(INFO_SENSORS) + 1 + len(INK_CHANNELS)
        assert sum(isinstance(entity, EcoTankInkLevelSensor) for entity in entities) == 4
