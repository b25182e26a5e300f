"""Exceptions for EcoTank printer monitoring.

These exceptions are raised during configuration loading and setup
validation. They are independent of Home Assistant and can be used in
any context.
"""

from __future__ import annotations


class CannotConnectError(Exception):
    """Error to indicate we cannot connect to the printer.

    Raised for network connectivity issues, timeouts, or connection refused.
    """

    def __init__(self, message: str | None = None):
        """Initialize error with optional message."""
        super().__init__(message or "Cannot connect to printer")
        self.user_message = message


class ResourceFetchError(Exception):
    """Error for HTTP fetch failures with URL/status context.

    Attributes:
        url: The URL that failed to fetch
        status_code: HTTP status code (if received)
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ):
        """Initialize fetch error with context."""
        super().__init__(message)
        self.url = url
        self.status_code = status_code

    def __str__(self) -> str:
        """Format error with context."""
        parts = [super().__str__()]
        if self.url:
            parts.append(f"url={self.url}")
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        return " | ".join(parts)


class InvalidLabelCatalogError(Exception):
    """Error raised when labels.yaml is missing or fails schema validation."""
