"""Constants for the Epson EcoTank Monitor integration."""

from __future__ import annotations

VERSION = "1.0.0"

DOMAIN = "epson_ecotank"
CONF_HOST = "host"
CONF_PORT = "port"
CONF_SCAN_INTERVAL = "scan_interval"

# Polling interval in minutes. The printer's web server is slow to render
# the status pages, so sub-minute polling is not offered.
DEFAULT_SCAN_INTERVAL = 10
MIN_SCAN_INTERVAL = 1
MAX_SCAN_INTERVAL = 1440

# Shell metacharacters rejected in host input
INVALID_HOST_CHARS = [";", "&", "|", "$", "`", "\n", "\r", "\t", "<", ">", "(", ")", "{", "}", "\\"]

# Embedded web server pages
STATUS_PAGE = "/PRESENTATION/ADVANCED/INFO_PRTINFO/TOP"
NETWORK_PAGE = "/PRESENTATION/ADVANCED/INFO_NWINFO/TOP"
MAINTENANCE_PAGE = "/PRESENTATION/ADVANCED/INFO_MENTINFO/TOP"

# The vendor UI draws a full ink tank as a 50px high bar
INK_BASELINE_HEIGHT = 50

# Published state keys
STATE_CONNECTION = "info.connection"
STATE_IP = "info.ip"
STATE_MAC = "info.mac"
STATE_FIRMWARE = "info.firmware"
STATE_SERIAL = "info.serial"
STATE_NAME = "info.name"
STATE_MODEL = "info.model"
STATE_FIRST_PRINT_DATE = "info.first_print_date"
STATE_PAGE_COUNT = "info.page_count"

INK_COLORS = ("cyan", "yellow", "black", "magenta")
