"""
Tests for the requests-based transport.
"""

import pytest
import requests
from unittest.mock import Mock, patch

from myparcel_sdk import RequestsTransport, TransportConfig, InvalidArgumentError
from myparcel_sdk.transport import parse_header_lines, _RefererSession


def mock_response(content=b"{}", status_code=200, headers=None, reason="OK"):
    response = Mock()
    response.status_code = status_code
    response.content = content
    response.headers = headers or {}
    response.reason = reason
    return response


class TestTransportConfig:
    """Test cases for TransportConfig."""

    def test_defaults(self):
        config = TransportConfig()

        assert config.timeout == 60
        assert config.header is False
        assert config.follow_redirects is True
        assert config.auto_referer is True

    @pytest.mark.parametrize("timeout", [0, -5, "60", True])
    def test_invalid_timeout(self, timeout):
        with pytest.raises(InvalidArgumentError):
            TransportConfig(timeout=timeout)


class TestRequestsTransport:
    """Test cases for RequestsTransport."""

    @patch("myparcel_sdk.transport.requests.Session.request")
    def test_successful_exchange(self, mock_request):
        """Test that headers, body and options reach requests."""
        mock_request.return_value = mock_response(b'{"data": {}}')

        transport = RequestsTransport(TransportConfig(timeout=15))
        transport.write(
            "POST",
            "https://api.myparcel.nl/shipments",
            ["Content-Type: application/vnd.shipment+json; charset=utf-8", "Authorization: basic a2V5"],
            '{"data": {}}',
        )

        assert transport.read() == b'{"data": {}}'
        assert transport.get_error() == ""
        mock_request.assert_called_once_with(
            "POST",
            "https://api.myparcel.nl/shipments",
            headers={
                "Content-Type": "application/vnd.shipment+json; charset=utf-8",
                "Authorization": "basic a2V5",
            },
            data=b'{"data": {}}',
            timeout=15,
            allow_redirects=True,
        )

    @patch("myparcel_sdk.transport.requests.Session.request")
    def test_empty_body_sends_no_data(self, mock_request):
        mock_request.return_value = mock_response()

        transport = RequestsTransport()
        transport.write("GET", "https://api.myparcel.nl/shipments/1", [])

        assert mock_request.call_args.kwargs["data"] is None

    @patch("myparcel_sdk.transport.requests.Session.request")
    def test_error_status_is_not_a_failure(self, mock_request):
        """Test that 4xx bodies are returned so the API error can be read."""
        mock_request.return_value = mock_response(b'{"errors": []}', status_code=422)

        transport = RequestsTransport()
        transport.write("POST", "https://api.myparcel.nl/shipments", [], "{}")

        assert transport.read() == b'{"errors": []}'

    @patch("myparcel_sdk.transport.requests.Session.request")
    def test_connection_error(self, mock_request):
        mock_request.side_effect = requests.exceptions.ConnectionError("refused")

        transport = RequestsTransport()
        transport.write("GET", "https://api.myparcel.nl/shipments", [])

        assert transport.read() is None
        assert transport.get_error() == "Connection failed: refused"

    @patch("myparcel_sdk.transport.requests.Session.request")
    def test_timeout(self, mock_request):
        mock_request.side_effect = requests.exceptions.ReadTimeout("slow")

        transport = RequestsTransport(TransportConfig(timeout=5))
        transport.write("GET", "https://api.myparcel.nl/shipments", [])

        assert transport.read() is None
        assert transport.get_error().startswith("Operation timed out after 5 seconds")

    @patch("myparcel_sdk.transport.requests.Session.request")
    def test_header_mode(self, mock_request):
        """Test that header mode prefixes the status line and headers."""
        mock_request.return_value = mock_response(
            b"{}", headers={"Content-Type": "application/json"}
        )

        transport = RequestsTransport(TransportConfig(header=True))
        transport.write("GET", "https://api.myparcel.nl/shipments", [])

        assert transport.read() == b"HTTP/1.1 200 OK\r\nContent-Type: application/json\r\n\r\n{}"

    def test_read_before_write(self):
        transport = RequestsTransport()

        assert transport.read() is None
        assert transport.get_error() == "No request has been sent"

    def test_owned_session_closed(self):
        transport = RequestsTransport()

        with patch.object(transport.session, "close") as mock_close:
            with transport:
                pass

        mock_close.assert_called_once()

    def test_injected_session_left_open(self):
        session = Mock(spec=requests.Session)

        RequestsTransport(session=session).close()

        session.close.assert_not_called()

    def test_session_type(self):
        assert isinstance(RequestsTransport().session, _RefererSession)
        assert not isinstance(
            RequestsTransport(TransportConfig(auto_referer=False)).session, _RefererSession
        )


class TestRefererSession:
    """Test cases for redirect referer handling."""

    def test_referer_set_on_redirect(self):
        session = _RefererSession()
        session.trust_env = False

        prepared = requests.PreparedRequest()
        prepared.prepare(method="GET", url="https://api.myparcel.nl/b", headers={})
        previous = Mock()
        previous.url = "https://api.myparcel.nl/a"
        previous.request.url = "https://api.myparcel.nl/a"

        session.rebuild_auth(prepared, previous)

        assert prepared.headers["Referer"] == "https://api.myparcel.nl/a"


def test_parse_header_lines():
    headers = parse_header_lines([
        "Accept: application/pdf; charset=utf-8",
        "Authorization: basic a2V5",
        "garbage",
    ])

    assert headers == {
        "Accept": "application/pdf; charset=utf-8",
        "Authorization": "basic a2V5",
    }
