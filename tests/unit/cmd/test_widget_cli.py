import json
from unittest.mock import Mock
import pytest
from helpdesk_widget.application.helpdesk_client import HelpdeskClient
from helpdesk_widget.cmd.widget import EXIT_CONFIG_ERROR, EXIT_FAILURE, EXIT_OK, run
from helpdesk_widget.domain.helpdesk import (
    CompanyCheck,
    Failure,
    Success,
    TokenGrant,
    UserCheck,
    UserIdentity,
)


def test_validate_key_prints_result(capsys: pytest.CaptureFixture[str]) -> None:
    mock_client = Mock(spec=HelpdeskClient)
    mock_client.validate_api_key.return_value = Success(CompanyCheck(company={"name": "Acme"}))

    code = run(["validate-key"], client=mock_client)

    assert code == EXIT_OK
    assert json.loads(capsys.readouterr().out) == {
        "success": True,
        "company": {"name": "Acme"},
    }

def test_failure_result_exits_non_zero(capsys: pytest.CaptureFixture[str]) -> None:
    mock_client = Mock(spec=HelpdeskClient)
    mock_client.check_user_exists.return_value = Failure(
        error="error verifying user",
        value=UserCheck(),
    )

    code = run(["check-user", "a@b.com"], client=mock_client)

    assert code == EXIT_FAILURE
    assert json.loads(capsys.readouterr().out)["error"] == "error verifying user"
    mock_client.check_user_exists.assert_called_once_with("a@b.com")

def test_token_command(capsys: pytest.CaptureFixture[str]) -> None:
    mock_client = Mock(spec=HelpdeskClient)
    mock_client.get_auth_token.return_value = Success(TokenGrant(token="tok"))

    code = run(["token", "a@b.com"], client=mock_client)

    assert code == EXIT_OK
    assert json.loads(capsys.readouterr().out)["token"] == "tok"

def test_widget_url_command_passes_token(capsys: pytest.CaptureFixture[str]) -> None:
    mock_client = Mock(spec=HelpdeskClient)
    mock_client.get_widget_url.return_value = "https://helpdesk.example.com/widget/tickets?token=T"

    code = run(
        ["widget-url", "a@b.com", "--first-name", "Ann", "--token", "T"],
        client=mock_client,
    )

    assert code == EXIT_OK
    assert capsys.readouterr().out.strip() == "https://helpdesk.example.com/widget/tickets?token=T"
    mock_client.get_widget_url.assert_called_once_with(
        UserIdentity(email="a@b.com", first_name="Ann", last_name=""),
        token="T",
    )

def test_forget_token_command() -> None:
    mock_client = Mock(spec=HelpdeskClient)

    code = run(["forget-token", "a@b.com"], client=mock_client)

    assert code == EXIT_OK
    mock_client.invalidate_token_cache.assert_called_once_with("a@b.com")

def test_missing_configuration_exits_with_config_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("HELPDESK_API_URL", raising=False)
    monkeypatch.delenv("HELPDESK_API_KEY", raising=False)

    code = run(["validate-key"])

    assert code == EXIT_CONFIG_ERROR
