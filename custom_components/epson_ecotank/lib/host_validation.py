"""Host validation for printer addresses entered in the config flow.

Accepts a bare IPv4/IPv6 address or hostname, optionally written as an
http:// URL or with a ':port' suffix, and rejects shell metacharacters.
"""

from __future__ import annotations

import re
from urllib.parse import urlparse

from ..const import INVALID_HOST_CHARS

_IPV4_PATTERN = re.compile(r"^(\d{1,3}\.){3}\d{1,3}$")
_IPV6_PATTERN = re.compile(r"^([0-9a-fA-F]{0,4}:){2,7}[0-9a-fA-F]{0,4}$")
_HOSTNAME_PATTERN = re.compile(
    r"^[a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?" r"(\.[a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?)*$"
)
_HOST_PORT_PATTERN = re.compile(r"^([^:]+):(\d{1,5})$")


def is_valid_host(host: str) -> bool:
    """Check if a hostname or IP address is well formed and safe.

    Args:
        host: Hostname or IP address, without scheme or port

    Returns:
        True if the host is valid and contains no injection characters
    """
    if not host or len(host) > 253:
        return False

    if any(char in host for char in INVALID_HOST_CHARS):
        return False

    return bool(_IPV4_PATTERN.match(host) or _IPV6_PATTERN.match(host) or _HOSTNAME_PATTERN.match(host))


def is_valid_port(port: str) -> bool:
    """Return True for an empty port or a number in 1..65535."""
    if not port:
        return True
    return port.isdigit() and 0 < int(port) <= 65535


def split_host_port(value: str) -> tuple[str, str]:
    """Split user input into a validated host and port.

    Args:
        value: Host, host:port, or http:// URL

    Returns:
        (host, port) where port is "" when not given

    Raises:
        ValueError: If the input is not a valid printer address
    """
    if not value or not value.strip():
        raise ValueError("Host cannot be empty")

    cleaned = value.strip()
    port = ""

    if "://" in cleaned:
        parsed = urlparse(cleaned)
        if parsed.scheme != "http":
            raise ValueError("Only plain HTTP is supported")
        if not parsed.netloc:
            raise ValueError("Invalid URL format")
        try:
            port = "" if parsed.port is None else str(parsed.port)
        except ValueError as err:
            raise ValueError(f"Invalid port: {err}") from err
        host = parsed.hostname or ""
    else:
        host = cleaned
        match = _HOST_PORT_PATTERN.match(cleaned)
        if match:
            host, port = match.group(1), match.group(2)

    if not is_valid_host(host):
        raise ValueError("Invalid host format. Must be a valid IP address or hostname")
    if not is_valid_port(port):
        raise ValueError("Port must be between 1 and 65535")

    return host, port
