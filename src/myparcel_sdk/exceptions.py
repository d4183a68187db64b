"""
Custom exceptions for the myparcel_sdk package.

This module defines specific exception classes for the error conditions
that can occur while configuring, sending and interpreting a MyParcel
API request.
"""

from typing import Optional, Any


class MyParcelError(Exception):
    """Base exception class for all myparcel_sdk related errors."""

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional additional details about the error
        """
        self.message = message
        self.details = details
        super().__init__(self.message)


class ConfigError(MyParcelError):
    """Raised when a required setting (such as the API key) is missing."""

    def __init__(self, setting: str = "api_key") -> None:
        self.setting = setting
        super().__init__(f"{setting} not found", {"setting": setting})


class InvalidArgumentError(MyParcelError):
    """Raised when invalid arguments are passed to methods."""

    def __init__(self, argument_name: str, argument_value: Any, expected: str) -> None:
        """Initialize the exception.

        Args:
            argument_name: Name of the invalid argument
            argument_value: The invalid value that was provided
            expected: Description of what was expected
        """
        self.argument_name = argument_name
        self.argument_value = argument_value
        self.expected = expected

        message = (
            f"Invalid argument '{argument_name}': got {type(argument_value).__name__} "
            f"({argument_value}), expected {expected}"
        )

        super().__init__(
            message,
            {
                "argument_name": argument_name,
                "argument_value": argument_value,
                "expected": expected,
            },
        )


class RequestStateError(MyParcelError):
    """Raised when a request is used out of order, e.g. sent twice."""


class RequestError(MyParcelError):
    """Base class for failures of a sent request.

    Carries the offending URL and request body for diagnostics.
    """

    def __init__(self, error: str, url: str, body: str = "") -> None:
        """Initialize the exception.

        Args:
            error: The error message reported by the API or the transport
            url: The URL the request was sent to
            body: The request body that was sent
        """
        self.error = error
        self.url = url
        self.body = body

        message = f"Error in MyParcel API request: {error} Url: {url} Request: {body}"

        super().__init__(message, {"error": error, "url": url, "body": body})


class ApiError(RequestError):
    """Raised when the MyParcel API answers with an ``errors`` payload."""


class TransportError(RequestError):
    """Raised when the transport failed to produce a response."""
