"""Binary sensor platform for Epson EcoTank Monitor."""

from __future__ import annotations

from homeassistant.components.binary_sensor import BinarySensorDeviceClass, BinarySensorEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN, STATE_CONNECTION
from .coordinator import EcoTankStateStore
from .sensor import device_info_for


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the printer connectivity sensor."""
    store: EcoTankStateStore = hass.data[DOMAIN][entry.entry_id]
    async_add_entities([EcoTankConnectivitySensor(store, entry)])


class EcoTankConnectivitySensor(CoordinatorEntity[EcoTankStateStore], BinarySensorEntity):
    """On when the last poll read all three printer pages."""

    _attr_has_entity_name = True
    _attr_device_class = BinarySensorDeviceClass.CONNECTIVITY

    def __init__(self, store: EcoTankStateStore, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(store)
        self._attr_name = "Connection"
        self._attr_unique_id = f"{entry.entry_id}_{STATE_CONNECTION.replace('.', '_')}"
        self._attr_device_info = device_info_for(store, entry)  # type: ignore[assignment]

    @property
    def available(self) -> bool:
        """Always available so an offline printer shows as disconnected."""
        return True

    @property
    def is_on(self) -> bool:
        """Return True if the printer answered every page."""
        return bool(self.coordinator.value(STATE_CONNECTION))
