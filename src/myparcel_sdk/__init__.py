"""
myparcel_sdk - A client for the MyParcel shipping API.

This package builds authenticated requests for creating shipments and
retrieving labels, sends them and interprets the answer:
- Basic-auth and content-type headers per operation
- JSON responses decoded into plain Python trees, PDF labels kept as bytes
- MyParcel ``errors`` payloads turned into ``ApiError`` exceptions
- Dot-notation access to the result

Main Classes:
    MyParcelRequest: One configured, sendable API call
    RequestsTransport: Default HTTP transport built on requests

Exception Classes:
    MyParcelError: Base exception
    ConfigError: Raised when the API key is missing
    ApiError: Raised when the API returns an error payload
    TransportError: Raised when no response could be obtained
    RequestStateError: Raised when a request is reused
    InvalidArgumentError: Raised for invalid function arguments

Example:
    Create a shipment:

    >>> from myparcel_sdk import MyParcelRequest, Operation, RequestType
    >>> request = (
    ...     MyParcelRequest()
    ...     .configure(api_key, json.dumps(payload), Operation.SHIPMENT)
    ...     .send("POST", RequestType.SHIPMENTS)
    ... )
    >>> request.get_result("data.ids", "id")
    [1, 2]

    Download a label:

    >>> pdf = (
    ...     MyParcelRequest()
    ...     .configure(api_key, "1;2", Operation.RETRIEVE_LABEL_PDF)
    ...     .send("GET", RequestType.RETRIEVE_LABEL)
    ...     .get_result()
    ... )
"""

from .request import MyParcelRequest, RequestSpec, RequestOutcome, check_myparcel_errors
from .transport import RequestsTransport, Transport, TransportConfig
from .constants import REQUEST_URL, REQUEST_HEADERS, Operation, RequestType
from .log import configure_logging
from .exceptions import (
    MyParcelError,
    ConfigError,
    InvalidArgumentError,
    RequestStateError,
    RequestError,
    ApiError,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "MyParcelRequest",
    "RequestSpec",
    "RequestOutcome",
    "check_myparcel_errors",
    "RequestsTransport",
    "Transport",
    "TransportConfig",
    "REQUEST_URL",
    "REQUEST_HEADERS",
    "Operation",
    "RequestType",
    "configure_logging",
    "MyParcelError",
    "ConfigError",
    "InvalidArgumentError",
    "RequestStateError",
    "RequestError",
    "ApiError",
    "TransportError",
]
