"""The Epson EcoTank Monitor integration."""

from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers import device_registry as dr

from .const import DOMAIN, STATE_FIRMWARE, STATE_MODEL, STATE_SERIAL, VERSION
from .coordinator import EcoTankStateStore, HassScheduler
from .core.engine import PrinterPollingEngine
from .core.exceptions import InvalidLabelCatalogError
from .core.fields import build_document_specs
from .core.settings import PrinterSettings
from .printer_config import async_load_label_catalog

_LOGGER = logging.getLogger(__name__)

PLATFORMS: list[Platform] = [Platform.SENSOR, Platform.BINARY_SENSOR]


def _settings_for_entry(entry: ConfigEntry) -> PrinterSettings:
    """Merge entry data with options; options win."""
    return PrinterSettings.from_config({**entry.data, **entry.options})


def _update_device_registry(hass: HomeAssistant, entry: ConfigEntry, store: EcoTankStateStore) -> None:
    """Copy model, serial number and firmware reported by the printer into the device registry."""
    model = store.value(STATE_MODEL)
    serial = store.value(STATE_SERIAL)
    firmware = store.value(STATE_FIRMWARE)
    if model is None and serial is None and firmware is None:
        return

    device_registry = dr.async_get(hass)
    device = device_registry.async_get_device(identifiers={(DOMAIN, entry.entry_id)})
    if device is None:
        return

    updates = {"model": model, "serial_number": serial, "sw_version": firmware}
    changes = {key: value for key, value in updates.items() if value is not None and getattr(device, key) != value}
    if changes:
        device_registry.async_update_device(device.id, **changes)
        _LOGGER.debug("Updated device registry: %s", changes)


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Epson EcoTank Monitor from a config entry."""
    _LOGGER.info("Epson EcoTank Monitor version %s is starting", VERSION)

    settings = _settings_for_entry(entry)

    try:
        catalog = await async_load_label_catalog(hass)
    except InvalidLabelCatalogError as err:
        _LOGGER.error("Cannot load printer label catalog: %s", err)
        return False

    store = EcoTankStateStore(hass, entry, name=f"Epson EcoTank {settings.address}")
    engine = PrinterPollingEngine(
        settings,
        build_document_specs(catalog),
        store,
        HassScheduler(hass),
        run_blocking=hass.async_add_executor_job,
    )
    store.engine = engine

    hass.data.setdefault(DOMAIN, {})
    hass.data[DOMAIN][entry.entry_id] = store

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    @callback
    def _async_store_updated() -> None:
        _update_device_registry(hass, entry, store)

    entry.async_on_unload(store.async_add_listener(_async_store_updated))
    entry.async_on_unload(entry.add_update_listener(async_reload_entry))

    # The printer's web server can take a long time to answer; keep the
    # first cycle out of setup
    entry.async_create_background_task(hass, engine.async_start(), f"{DOMAIN}_start_{entry.entry_id}")

    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    store: EcoTankStateStore | None = hass.data.get(DOMAIN, {}).get(entry.entry_id)
    if store is not None and store.engine is not None:
        store.engine.stop()

    try:
        unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    except ValueError as err:
        # Platforms were never loaded (setup failed before platforms were added)
        _LOGGER.debug("Platforms were never loaded for entry %s: %s", entry.entry_id, err)
        unload_ok = True

    if unload_ok:
        hass.data.get(DOMAIN, {}).pop(entry.entry_id, None)

    return bool(unload_ok)


async def async_reload_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload config entry."""
    await hass.config_entries.async_reload(entry.entry_id)
