"""Sensor platform for Epson EcoTank Monitor."""

from __future__ import annotations

import logging
from typing import Any

from homeassistant.components.sensor import SensorEntity, SensorStateClass
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import PERCENTAGE, EntityCategory
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import (
    DOMAIN,
    STATE_FIRMWARE,
    STATE_FIRST_PRINT_DATE,
    STATE_IP,
    STATE_MAC,
    STATE_MODEL,
    STATE_NAME,
    STATE_PAGE_COUNT,
    STATE_SERIAL,
)
from .coordinator import EcoTankStateStore
from .core.fields import INK_CHANNELS, InkChannel

_LOGGER = logging.getLogger(__name__)

# state key -> (name, icon, diagnostic)
INFO_SENSORS: dict[str, tuple[str, str, bool]] = {
    STATE_MODEL: ("Model", "mdi:printer", False),
    STATE_NAME: ("Device Name", "mdi:label-outline", True),
    STATE_IP: ("IP Address", "mdi:ip-network", True),
    STATE_MAC: ("MAC Address", "mdi:network-outline", True),
    STATE_FIRMWARE: ("Firmware", "mdi:chip", True),
    STATE_SERIAL: ("Serial Number", "mdi:barcode", True),
    STATE_FIRST_PRINT_DATE: ("First Print Date", "mdi:calendar-start", True),
}


def device_info_for(store: EcoTankStateStore, entry: ConfigEntry) -> dict[str, Any]:
    """Build the device info shared by all entities of an entry."""
    engine = store.engine
    address = engine.settings.address if engine is not None else entry.title
    return {
        "identifiers": {(DOMAIN, entry.entry_id)},
        "name": "Epson EcoTank",
        "manufacturer": "Epson",
        "model": store.value(STATE_MODEL) or "EcoTank",
        "configuration_url": f"http://{address}",
    }


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up Epson EcoTank sensors."""
    store: EcoTankStateStore = hass.data[DOMAIN][entry.entry_id]

    entities: list[SensorEntity] = [EcoTankInfoSensor(store, entry, key) for key in INFO_SENSORS]
    entities.append(EcoTankPageCountSensor(store, entry))
    entities.extend(EcoTankInkLevelSensor(store, entry, channel) for channel in INK_CHANNELS)

    _LOGGER.debug("Created %s sensor entities", len(entities))
    async_add_entities(entities)


class EcoTankSensorBase(CoordinatorEntity[EcoTankStateStore], SensorEntity):
    """Base class for printer sensors backed by one published key."""

    _attr_has_entity_name = True

    def __init__(self, store: EcoTankStateStore, entry: ConfigEntry, key: str) -> None:
        """Initialize the sensor."""
        super().__init__(store)
        self._entry = entry
        self._key = key
        self._attr_unique_id = f"{entry.entry_id}_{key.replace('.', '_')}"
        self._attr_device_info = device_info_for(store, entry)  # type: ignore[assignment]

    @property
    def available(self) -> bool:
        """Available once the printer reported a value for this key."""
        return self.coordinator.value(self._key) is not None

    @property
    def native_value(self) -> Any:
        """Return the last published value."""
        return self.coordinator.value(self._key)


class EcoTankInfoSensor(EcoTankSensorBase):
    """Text sensor for a printer identity field."""

    def __init__(self, store: EcoTankStateStore, entry: ConfigEntry, key: str) -> None:
        """Initialize the sensor."""
        super().__init__(store, entry, key)
        name, icon, diagnostic = INFO_SENSORS[key]
        self._attr_name = name
        self._attr_icon = icon
        if diagnostic:
            self._attr_entity_category = EntityCategory.DIAGNOSTIC


class EcoTankPageCountSensor(EcoTankSensorBase):
    """Sensor for the total number of printed pages."""

    def __init__(self, store: EcoTankStateStore, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(store, entry, STATE_PAGE_COUNT)
        self._attr_name = "Total Printed Pages"
        self._attr_icon = "mdi:file-document-multiple"
        self._attr_native_unit_of_measurement = "pages"
        self._attr_state_class = SensorStateClass.TOTAL_INCREASING


class EcoTankInkLevelSensor(EcoTankSensorBase):
    """Sensor for one ink tank's fill level."""

    def __init__(self, store: EcoTankStateStore, entry: ConfigEntry, channel: InkChannel) -> None:
        """Initialize the sensor."""
        super().__init__(store, entry, channel.level.key)
        self._channel = channel
        self._attr_name = channel.level.display_name
        self._attr_icon = "mdi:water"
        self._attr_native_unit_of_measurement = PERCENTAGE
        self._attr_state_class = SensorStateClass.MEASUREMENT
        self._attr_suggested_display_precision = 0

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the registered descriptor of the level."""
        descriptor = self.coordinator.descriptors.get(self._key)
        if descriptor is None:
            return {}
        return {"role": descriptor.role, "unit": descriptor.unit}
