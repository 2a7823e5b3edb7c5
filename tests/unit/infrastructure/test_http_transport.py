from typing import Any
from unittest.mock import Mock
import pytest
from requests import ConnectionError as RequestsConnectionError
from requests import HTTPError, Timeout
from helpdesk_widget.config import HelpdeskWidgetConfig
from helpdesk_widget.infrastructure.http_transport import RequestsHttpTransport
from helpdesk_widget.shared.errors import HelpdeskTransportError


def _make_config() -> HelpdeskWidgetConfig:
    return HelpdeskWidgetConfig(
        api_url="https://helpdesk.example.com/",
        api_key="service-key",
    )

def _make_transport_with_mock_session(json_payload: Any) -> tuple[RequestsHttpTransport, Mock]:
    transport = RequestsHttpTransport(_make_config())

    mock_session = Mock()
    mock_response = Mock()
    mock_response.status_code = 200
    mock_response.raise_for_status = Mock()
    mock_response.json = Mock(return_value=json_payload)

    mock_session.post = Mock(return_value=mock_response)

    transport._session = mock_session                                                                                       # type: ignore[attr-defined]
    return transport, mock_session

def test_session_carries_service_headers() -> None:
    transport = RequestsHttpTransport(_make_config())

    headers = transport._session.headers                                                                                    # type: ignore[attr-defined]
    assert headers["Accept"] == "application/json"
    assert headers["Content-Type"] == "application/json"
    assert headers["X-Service-Key"] == "service-key"

def test_post_sends_json_to_base_url_with_timeout() -> None:
    transport, mock_session = _make_transport_with_mock_session({"exists": True})

    data = transport.post("/api/external/check-user", {"email": "a@b.com"})

    assert data == {"exists": True}
    mock_session.post.assert_called_once_with(
        "https://helpdesk.example.com/api/external/check-user",
        json={"email": "a@b.com"},
        timeout=30.0,
    )

def test_post_without_body_sends_no_json() -> None:
    transport, mock_session = _make_transport_with_mock_session({})

    transport.post("/api/external/validate-key")

    _, kwargs = mock_session.post.call_args
    assert kwargs["json"] is None

def test_http_error_is_wrapped_with_status_code() -> None:
    transport = RequestsHttpTransport(_make_config())

    mock_session = Mock()
    mock_response = Mock()
    error_response = Mock()
    error_response.status_code = 401
    mock_response.raise_for_status.side_effect = HTTPError("401 unauthorized", response=error_response)
    mock_session.post.return_value = mock_response
    transport._session = mock_session                                                                                       # type: ignore[attr-defined]

    with pytest.raises(HelpdeskTransportError) as excinfo:
        _ = transport.post("/api/external/validate-key")

    assert excinfo.value.status_code == 401
    assert isinstance(excinfo.value.__cause__, HTTPError)

@pytest.mark.parametrize("error", [RequestsConnectionError("refused"), Timeout("slow")])
def test_network_errors_are_wrapped(error: Exception) -> None:
    transport = RequestsHttpTransport(_make_config())

    mock_session = Mock()
    mock_session.post.side_effect = error
    transport._session = mock_session                                                                                       # type: ignore[attr-defined]

    with pytest.raises(HelpdeskTransportError) as excinfo:
        _ = transport.post("/api/external/login", {"email": "a@b.com"})

    assert excinfo.value.status_code is None

def test_json_error_is_wrapped_in_transport_error() -> None:
    transport = RequestsHttpTransport(_make_config())

    mock_session = Mock()
    mock_response = Mock()
    mock_response.status_code = 200
    mock_response.raise_for_status = Mock()
    mock_response.json.side_effect = ValueError("invalid json")
    mock_session.post.return_value = mock_response
    transport._session = mock_session                                                                                       # type: ignore[attr-defined]

    with pytest.raises(HelpdeskTransportError):
        _ = transport.post("/api/external/login", {"email": "a@b.com"})
