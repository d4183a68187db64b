"""
MyParcelRequest: one authenticated call to the MyParcel API.

A request is configured once, sent once and then queried for its result:

    >>> request = MyParcelRequest().configure(api_key, body, REQUEST_HEADERS[Operation.SHIPMENT])
    >>> request.send("POST", RequestType.SHIPMENTS).get_result("data.ids", "id")
    [1, 2]

Configuration is captured in an immutable ``RequestSpec``; sending produces a
``RequestOutcome`` holding the decoded JSON tree or the raw PDF bytes.
Transport failures and API error payloads are raised as ``TransportError``
and ``ApiError``.
"""

import base64
import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Tuple, Union

from . import arr
from .constants import CHARSET, DEFAULT_TIMEOUT, PDF_PREFIX, REQUEST_URL, Operation, REQUEST_HEADERS, RequestType
from .exceptions import ApiError, ConfigError, InvalidArgumentError, RequestStateError, TransportError
from .log import get_logger
from .manifest import MANIFEST_PATHS, build_user_agent, read_manifest_version
from .transport import RequestsTransport, Transport, TransportConfig

logger = get_logger("request")

TransportFactory = Callable[[TransportConfig], Transport]


@dataclass(frozen=True)
class RequestSpec:
    """Everything needed to send a request, fixed at configuration time."""

    api_key: str
    body: str = ""
    headers: Tuple[str, ...] = ()

    @classmethod
    def build(
        cls, api_key: str, body: str = "", header_prefix: Union[str, Operation] = ""
    ) -> 'RequestSpec':
        """
        Build a spec with the content-type and basic-auth header lines.

        Args:
            api_key: MyParcel API key, stored as given
            body: Request payload, or the identifier for non-POST calls
            header_prefix: Header line up to the charset, or an ``Operation``
        """
        if isinstance(header_prefix, Operation):
            header_prefix = REQUEST_HEADERS[header_prefix]

        token = base64.b64encode((api_key or "").encode("utf-8")).decode("ascii")
        headers = (
            f"{header_prefix}{CHARSET}",
            f"Authorization: basic {token}",
        )
        return cls(api_key=api_key, body=body or "", headers=headers)


@dataclass
class RequestOutcome:
    """Result of sending a request.

    ``result`` keeps the decoded JSON even when ``error`` was extracted from it.
    """

    url: str
    result: Any = None
    error: Optional[str] = None
    is_pdf: bool = field(default=False)


def check_myparcel_errors(result: Any) -> Optional[str]:
    """
    Compose a message from the first entry of an ``errors`` payload.

    The message reads ``"<code> - <human> - <message>"``. Only the first
    error is reported.

    Args:
        result: Decoded response body

    Returns:
        The composed message, or ``None`` when there is no error payload
    """
    if not isinstance(result, dict):
        return None

    errors = result.get("errors")
    if not errors:
        return None
    if isinstance(errors, dict):
        errors = list(errors.values())
    elif not isinstance(errors, list):
        return None

    error = _unwrap_error(errors[0])
    if not isinstance(error, dict):
        error = {"error": error}

    if "message" in result:
        message = result["message"]
    elif "message" in error:
        message = error["message"]
    else:
        message = f"Unknown error: {json.dumps(error, separators=(',', ':'))}. Please contact MyParcel."

    code = ""
    if "code" in error:
        code = error["code"]
    elif error.get("fields"):
        code = _first(error["fields"])

    human = _first(error.get("human")) if error.get("human") else ""

    return " - ".join(_text(part) for part in (code, human, message))


def _unwrap_error(error: Any) -> Any:
    """Unwrap one level when the entry is a list of errors instead of an error."""
    if isinstance(error, list):
        return error[0] if error else {}

    if isinstance(error, dict) and error:
        first_key = next(iter(error))
        if isinstance(first_key, str) and first_key.isdigit():
            return error[first_key]

    return error


def _text(value: Any) -> str:
    """JSON null joins in as an empty string."""
    return "" if value is None else str(value)


def _first(value: Any) -> Any:
    if isinstance(value, list):
        return value[0] if value else ""
    return value


def decode_response(raw: Union[bytes, str]) -> Tuple[Any, bool]:
    """
    Decode a raw response body.

    Returns:
        ``(pdf_bytes, True)`` for a PDF document, else ``(json_tree, False)``.
        Empty or undecodable bodies decode to ``None``.
    """
    if isinstance(raw, str):
        raw = raw.encode("utf-8")

    if raw.startswith(PDF_PREFIX):
        return raw, True

    if not raw.strip():
        return None, False

    try:
        return json.loads(raw), False
    except ValueError as e:
        logger.warning(f"Response is neither a PDF nor JSON ({len(raw)} bytes): {e}")
        return None, False


class MyParcelRequest:
    """
    A single call to the MyParcel API.

    Instances are single-use: configure, send, then read the result.
    """

    def __init__(
        self,
        transport_factory: Optional[TransportFactory] = None,
        base_url: str = REQUEST_URL,
        timeout: Union[int, float] = DEFAULT_TIMEOUT,
        user_agent: Optional[str] = None,
        manifest_paths: Optional[Iterable[Union[str, Path]]] = None,
    ) -> None:
        """
        Initialize the request.

        Args:
            transport_factory: Callable returning a fresh ``Transport`` for a
                ``TransportConfig``; defaults to ``RequestsTransport``
            base_url: API base URL
            timeout: Transport timeout in seconds
            user_agent: Explicit User-Agent, overriding the manifest-derived one
            manifest_paths: Candidate manifest files for the SDK version
        """
        if not isinstance(base_url, str) or not base_url.strip():
            raise InvalidArgumentError("base_url", base_url, "non-empty string")

        self.base_url = base_url.rstrip("/")
        self.transport_config = TransportConfig(timeout=timeout)
        self.transport_factory = transport_factory or RequestsTransport
        self.manifest_paths = tuple(manifest_paths) if manifest_paths is not None else MANIFEST_PATHS

        self._user_agent = user_agent or None
        self._spec: Optional[RequestSpec] = None
        self._outcome: Optional[RequestOutcome] = None

    @property
    def spec(self) -> Optional[RequestSpec]:
        return self._spec

    @property
    def outcome(self) -> Optional[RequestOutcome]:
        return self._outcome

    def configure(
        self, api_key: str, body: str = "", header_prefix: Union[str, Operation] = ""
    ) -> 'MyParcelRequest':
        """
        Set the API key, body and content header for the call.

        The key is not validated here; ``send`` rejects an empty one.

        Args:
            api_key: MyParcel API key
            body: JSON payload for POST, or the identifier appended to the URL otherwise
            header_prefix: Header line up to the charset, or an ``Operation``

        Returns:
            self
        """
        if self._outcome is not None:
            raise RequestStateError("Request has already been sent")

        self._spec = RequestSpec.build(api_key, body, header_prefix)
        return self

    set_request_parameters = configure

    def get_request_url(self, uri: Union[str, RequestType] = RequestType.SHIPMENTS) -> str:
        if isinstance(uri, Enum):
            uri = uri.value
        return f"{self.base_url}/{uri}"

    def get_user_agent(self) -> Optional[str]:
        return self._user_agent

    def set_user_agent(self, user_agent: Optional[str] = None) -> 'MyParcelRequest':
        """
        Set the User-Agent, or derive it from the package manifest.

        An explicit agent always wins. Without one, the agent becomes
        ``MyParcelNL-SDK/<version>`` (``unknown`` when no manifest is found).
        """
        if user_agent:
            self._user_agent = user_agent
        if not self._user_agent:
            self._user_agent = build_user_agent(read_manifest_version(self.manifest_paths))
        return self

    def send(
        self, method: str = "POST", uri: Union[str, RequestType] = RequestType.SHIPMENTS
    ) -> 'MyParcelRequest':
        """
        Send the configured request and decode the response.

        Args:
            method: HTTP method; for anything but POST a non-empty body is
                appended to the URL as a path segment
            uri: Resource path under the base URL

        Returns:
            self, ready for ``get_result``

        Raises:
            ConfigError: When no API key was configured
            RequestStateError: When the request was already sent
            TransportError: When no response was received
            ApiError: When the response carries an ``errors`` payload
        """
        if not self._spec or not self._spec.api_key:
            raise ConfigError("api_key")

        if self._outcome is not None:
            raise RequestStateError("Request has already been sent")

        if not isinstance(method, str) or not method.strip():
            raise InvalidArgumentError("method", method, "non-empty string")

        method = method.upper()
        spec = self._spec

        self.set_user_agent()
        headers: List[str] = list(spec.headers)
        headers.append(f"User-Agent: {self._user_agent}")

        url = self.get_request_url(uri)
        if method != "POST" and spec.body:
            url += "/" + spec.body

        logger.info(f"Sending {method} request to {url}")

        transport = self.transport_factory(self.transport_config)
        transport_error = None
        try:
            transport.write(method, url, headers, spec.body)
            raw = transport.read()
            if raw is None or raw is False:
                raw = None
                transport_error = transport.get_error() or "No response received"
        finally:
            transport.close()

        outcome = RequestOutcome(url=url)
        if raw is None:
            outcome.error = transport_error
        else:
            outcome.result, outcome.is_pdf = decode_response(raw)
            if not outcome.is_pdf:
                outcome.error = check_myparcel_errors(outcome.result)

        self._outcome = outcome

        if raw is None:
            logger.error(f"{method} {url} failed: {outcome.error}")
            raise TransportError(outcome.error, url, spec.body)

        if outcome.error:
            logger.error(f"{method} {url} returned an error: {outcome.error}")
            raise ApiError(outcome.error, url, spec.body)

        logger.debug(f"{method} {url} succeeded ({'pdf' if outcome.is_pdf else 'json'})")
        return self

    def get_result(self, key: Optional[str] = None, pluck: Optional[str] = None) -> Any:
        """
        Get an item from the result using "dot" notation.

        Args:
            key: Dotted path into the decoded JSON; ``None`` returns the whole
                result (the JSON tree or the PDF bytes)
            pluck: Field to collect from each element of the list at ``key``

        Returns:
            The value found, or ``None`` when the path is missing
        """
        result = self._outcome.result if self._outcome else None
        result = arr.get(result, key)
        if pluck:
            result = arr.pluck(result, pluck)
        return result

    def get_error(self) -> Optional[str]:
        return self._outcome.error if self._outcome else None
