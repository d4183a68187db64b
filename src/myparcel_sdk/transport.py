"""
HTTP transports for MyParcel requests.

A transport performs exactly one exchange: ``write`` sends the request,
``read`` returns the raw response body (or ``None`` when the exchange
failed), ``get_error`` explains a failure and ``close`` releases the
connection. ``RequestsTransport`` is the default implementation, built on
a ``requests.Session``.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Protocol, Sequence, Union

import requests
from requests.exceptions import (
    SSLError as RequestsSSLError,
    ConnectionError,
    Timeout,
    RequestException,
)

from .constants import DEFAULT_TIMEOUT
from .exceptions import InvalidArgumentError
from .log import get_logger

logger = get_logger("transport")


class Transport(Protocol):
    """What ``MyParcelRequest`` needs from an HTTP client."""

    def write(self, method: str, url: str, headers: Sequence[str], body: str = "") -> None:
        ...

    def read(self) -> Optional[bytes]:
        ...

    def get_error(self) -> str:
        ...

    def close(self) -> None:
        ...


@dataclass
class TransportConfig:
    """
    Settings for a transport.

    Attributes:
        timeout: Request timeout in seconds
        header: Prefix ``read()`` output with the status line and response headers
        follow_redirects: Follow 3xx responses
        auto_referer: Send a ``Referer`` header when following a redirect
    """

    timeout: Union[int, float] = DEFAULT_TIMEOUT
    header: bool = False
    follow_redirects: bool = True
    auto_referer: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)) or self.timeout <= 0:
            raise InvalidArgumentError("timeout", self.timeout, "positive number")


class _RefererSession(requests.Session):
    """Session that sets ``Referer`` to the previous URL on every redirect hop."""

    def rebuild_auth(self, prepared_request, response):
        super().rebuild_auth(prepared_request, response)
        prepared_request.headers["Referer"] = response.url


def parse_header_lines(lines: Sequence[str]) -> Dict[str, str]:
    """Turn ``"Name: value"`` lines into a header dict, skipping malformed lines."""
    headers = {}
    for line in lines:
        name, sep, value = line.partition(":")
        if not sep or not name.strip():
            logger.warning(f"Ignoring malformed header line: {line!r}")
            continue
        headers[name.strip()] = value.strip()
    return headers


class RequestsTransport:
    """
    Single-exchange transport on top of ``requests``.

    Network failures never raise from ``write``; they are recorded and
    reported through ``read()`` returning ``None`` and ``get_error()``.
    """

    def __init__(
        self,
        config: Optional[TransportConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            config: Transport settings (defaults to ``TransportConfig()``)
            session: Session to use; one is created (and owned) when omitted
        """
        self.config = config or TransportConfig()
        self._owns_session = session is None
        if session is None:
            session = _RefererSession() if self.config.auto_referer else requests.Session()
        self.session = session

        self._response: Optional[requests.Response] = None
        self._error = ""

    def write(self, method: str, url: str, headers: Sequence[str], body: str = "") -> None:
        """
        Send one request.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Target URL
            headers: Header lines in ``"Name: value"`` form
            body: Request body, sent as UTF-8
        """
        self._response = None
        self._error = ""

        request_headers = parse_header_lines(headers)
        data = body.encode("utf-8") if body else None

        # Header names only, the Authorization value must stay out of the logs
        logger.debug(f"Sending {method} request to {url} with headers={sorted(request_headers)} "
                     f"timeout={self.config.timeout}")

        try:
            self._response = self.session.request(
                method,
                url,
                headers=request_headers,
                data=data,
                timeout=self.config.timeout,
                allow_redirects=self.config.follow_redirects,
            )
        except RequestsSSLError as e:
            self._error = f"SSL error: {e}"
        except Timeout as e:
            self._error = f"Operation timed out after {self.config.timeout} seconds: {e}"
        except ConnectionError as e:
            self._error = f"Connection failed: {e}"
        except RequestException as e:
            self._error = f"{type(e).__name__}: {e}"

        if self._error:
            logger.error(f"{method} {url} failed: {self._error}")
            return

        logger.info(f"{method} {url} -> {self._response.status_code} "
                    f"({len(self._response.content)} bytes)")

    def read(self) -> Optional[bytes]:
        """Return the response body, or ``None`` if nothing was received."""
        if self._response is None:
            if not self._error:
                self._error = "No request has been sent"
            return None

        content = self._response.content
        if not self.config.header:
            return content

        lines = [f"HTTP/1.1 {self._response.status_code} {self._response.reason or ''}".rstrip()]
        lines.extend(f"{name}: {value}" for name, value in self._response.headers.items())
        head = "\r\n".join(lines) + "\r\n\r\n"
        return head.encode("latin-1", errors="replace") + content

    def get_error(self) -> str:
        return self._error

    def close(self) -> None:
        """Close the underlying session if this transport created it."""
        if self._response is not None:
            self._response.close()
        if self._owns_session:
            self.session.close()
        logger.debug("Transport closed")

    def __enter__(self) -> 'RequestsTransport':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
