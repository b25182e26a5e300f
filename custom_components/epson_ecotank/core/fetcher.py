"""Page fetcher for the printer's embedded web server.

Issues a single plain HTTP GET per page. Failures are never raised: they
are returned as a FetchResult carrying the error so the caller can decide
how to report them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from .exceptions import ResourceFetchError

_LOGGER = logging.getLogger(__name__)

ERROR_UNREACHABLE = "unreachable"
ERROR_TRANSPORT = "transport"


@dataclass(frozen=True)
class FetchError:
    """Transport-level failure of a fetch.

    Attributes:
        kind: "unreachable" when no connection could be established,
              "transport" for any other failure raised by the HTTP library
        message: Error message
        exception: The original exception
    """

    kind: str
    message: str
    exception: BaseException | None = None

    @property
    def is_unreachable(self) -> bool:
        """Return True if the host could not be reached."""
        return self.kind == ERROR_UNREACHABLE


@dataclass(frozen=True)
class FetchResult:
    """Outcome of fetching one page."""

    url: str
    status_code: int | None = None
    body: str | None = None
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        """Return True only for a completed request answered with HTTP 200."""
        return self.error is None and self.status_code == 200

    def raise_for_error(self) -> None:
        """Raise ResourceFetchError unless the fetch succeeded."""
        if self.error is not None:
            raise ResourceFetchError(self.error.message, url=self.url)
        if not self.ok:
            raise ResourceFetchError("Unexpected HTTP status", url=self.url, status_code=self.status_code)


class PageFetcher:
    """Fetch pages from the printer with plain GET requests.

    No retries, no authentication and no custom headers. The request
    timeout defaults to None, which leaves it to the transport (requests
    waits indefinitely).
    """

    def __init__(self, session: requests.Session | None = None, timeout: float | None = None):
        """Initialize the fetcher.

        Args:
            session: Optional requests.Session to reuse connections
            timeout: Optional request timeout in seconds
        """
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch(self, url: str) -> FetchResult:
        """Fetch a page.

        Blocking; call it from an executor when running on an event loop.

        Args:
            url: Full page URL

        Returns:
            FetchResult with the body on HTTP 200, the status code for any
            response, or the transport error.
        """
        _LOGGER.debug("Fetching %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.ConnectionError as err:
            _LOGGER.debug("Connection to %s failed: %s", url, err)
            return FetchResult(url=url, error=FetchError(ERROR_UNREACHABLE, str(err), err))
        except requests.RequestException as err:
            _LOGGER.debug("Request to %s failed: %s: %s", url, type(err).__name__, err)
            return FetchResult(url=url, error=FetchError(ERROR_TRANSPORT, str(err), err))

        if response.status_code != 200:
            return FetchResult(url=url, status_code=response.status_code)

        # Pages carry localized labels; requests falls back to ISO-8859-1
        # when the server omits the charset
        if "charset" not in response.headers.get("Content-Type", "").lower():
            response.encoding = "utf-8"

        body = response.text
        _LOGGER.debug("Fetched %s (%d bytes)", url, len(body))
        return FetchResult(url=url, status_code=response.status_code, body=body)

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()
