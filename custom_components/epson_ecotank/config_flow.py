"""Config flow for Epson EcoTank Monitor integration."""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.core import HomeAssistant, callback
from homeassistant.exceptions import HomeAssistantError

from .const import (
    CONF_HOST,
    CONF_PORT,
    CONF_SCAN_INTERVAL,
    DEFAULT_SCAN_INTERVAL,
    DOMAIN,
    MAX_SCAN_INTERVAL,
    MIN_SCAN_INTERVAL,
    STATUS_PAGE,
)
from .core.exceptions import CannotConnectError, ResourceFetchError
from .core.fetcher import PageFetcher
from .core.settings import PrinterSettings
from .lib.host_validation import is_valid_port, split_host_port

_LOGGER = logging.getLogger(__name__)

# Seconds; only the setup probe uses a timeout, polling leaves it to requests
QUICK_CHECK_TIMEOUT = 5

_INTERVAL_VALIDATOR = vol.All(vol.Coerce(int), vol.Range(min=MIN_SCAN_INTERVAL, max=MAX_SCAN_INTERVAL))


def _do_quick_connectivity_check(host: str, port: str) -> None:
    """Fetch the status page once (sync version for executor).

    Raises:
        CannotConnectError: If the page cannot be read.
    """
    settings = PrinterSettings(host=host, port=port)
    url = settings.page_url(STATUS_PAGE)
    fetcher = PageFetcher(timeout=QUICK_CHECK_TIMEOUT)
    try:
        fetcher.fetch(url).raise_for_error()
    except ResourceFetchError as err:
        _LOGGER.debug("Quick connectivity check failed: %s", err)
        raise CannotConnectError(
            f"Cannot read the status page of the printer at {settings.address}. "
            f"Check that the address is correct and the printer is switched on."
        ) from err
    finally:
        fetcher.close()
    _LOGGER.debug("Quick connectivity check passed: %s", url)


async def validate_input(hass: HomeAssistant, data: dict[str, Any]) -> dict[str, Any]:
    """Validate the user input allows us to connect.

    Returns:
        Dict with the entry title and the normalized host and port.

    Raises:
        InvalidHostError: If host or port are malformed.
        CannotConnectError: If the printer does not answer.
    """
    try:
        host, port = split_host_port(data[CONF_HOST])
    except ValueError as err:
        raise InvalidHostError(str(err)) from err

    explicit_port = str(data.get(CONF_PORT) or "").strip()
    if explicit_port:
        if not is_valid_port(explicit_port):
            raise InvalidHostError("Port must be between 1 and 65535")
        port = explicit_port

    _LOGGER.info("Performing quick connectivity check to %s", host)
    await hass.async_add_executor_job(_do_quick_connectivity_check, host, port)

    address = PrinterSettings(host=host, port=port).address
    return {"title": f"Epson EcoTank ({address})", "host": host, "port": port, "address": address}


@config_entries.HANDLERS.register(DOMAIN)
class EpsonEcoTankConfigFlow(config_entries.ConfigFlow):
    """Handle a config flow for Epson EcoTank Monitor."""

    VERSION = 1

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Get the options flow for this handler."""
        return OptionsFlowHandler()

    async def async_step_user(self, user_input: dict[str, Any] | None = None) -> config_entries.ConfigFlowResult:
        """Handle the initial step."""
        errors: dict[str, str] = {}

        if user_input is not None:
            try:
                info = await validate_input(self.hass, user_input)
            except InvalidHostError:
                errors["base"] = "invalid_host"
            except CannotConnectError:
                errors["base"] = "cannot_connect"
            except Exception:
                _LOGGER.exception("Unexpected exception during printer validation")
                errors["base"] = "unknown"
            else:
                await self.async_set_unique_id(info["address"])
                self._abort_if_unique_id_configured()
                return self.async_create_entry(
                    title=info["title"],
                    data={
                        CONF_HOST: info["host"],
                        CONF_PORT: info["port"],
                        CONF_SCAN_INTERVAL: user_input.get(CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL),
                    },
                )

        defaults = user_input or {}
        data_schema = vol.Schema(
            {
                vol.Required(CONF_HOST, default=defaults.get(CONF_HOST, "")): str,
                vol.Optional(CONF_PORT, default=defaults.get(CONF_PORT, "")): str,
                vol.Required(
                    CONF_SCAN_INTERVAL, default=defaults.get(CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL)
                ): _INTERVAL_VALIDATOR,
            }
        )
        return self.async_show_form(step_id="user", data_schema=data_schema, errors=errors)


class OptionsFlowHandler(config_entries.OptionsFlow):
    """Handle options flow for Epson EcoTank Monitor."""

    async def async_step_init(self, user_input: dict[str, Any] | None = None) -> config_entries.ConfigFlowResult:
        """Manage the options."""
        errors: dict[str, str] = {}

        if user_input is not None:
            port = str(user_input.get(CONF_PORT) or "").strip()
            if not is_valid_port(port):
                errors["base"] = "invalid_port"
            else:
                return self.async_create_entry(
                    title="",
                    data={CONF_PORT: port, CONF_SCAN_INTERVAL: user_input[CONF_SCAN_INTERVAL]},
                )

        current = {**self.config_entry.data, **self.config_entry.options}
        options_schema = vol.Schema(
            {
                vol.Optional(CONF_PORT, default=str(current.get(CONF_PORT) or "")): str,
                vol.Required(
                    CONF_SCAN_INTERVAL, default=current.get(CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL)
                ): _INTERVAL_VALIDATOR,
            }
        )

        return self.async_show_form(
            step_id="init",
            data_schema=options_schema,
            errors=errors,
            description_placeholders={"current_host": current.get(CONF_HOST, "")},
        )


class InvalidHostError(HomeAssistantError):
    """Error to indicate the host or port is malformed."""
