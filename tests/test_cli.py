"""Tests for the trix command line."""

import json
from unittest.mock import patch

import pytest

from trix.cli import main
from trix.google import AuthFatalError, Credential, TokenCache
from trix.sheets import EmptyResultError, RemoteError, UpdateResult

TOKEN_INFO = {
    "status": "cached",
    "token_type": "Bearer",
    "has_refresh_token": False,
    "expiry": None,
    "expires_in": "unknown",
}


@pytest.fixture
def base_args(tmp_path, client_secret):
    return ["--client-secret", str(client_secret), "--cache-dir", str(tmp_path / ".credentials")]


@pytest.fixture
def mock_client():
    with patch("trix.sheets.SheetsClient") as client_cls:
        client = client_cls.return_value
        client.update.return_value = UpdateResult(
            spreadsheet_id="sheet-id",
            updated_range="RSVP!A3:C3",
            updated_rows=1,
            updated_columns=3,
            updated_cells=3,
        )
        client.append_row.return_value = client.update.return_value
        yield client_cls


class TestCommands:
    """Test CLI commands against a mocked client."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: trix" in capsys.readouterr().out

    def test_get(self, base_args, mock_client, capsys):
        mock_client.return_value.get.return_value = [["a", "b"]]

        assert main([*base_args, "get", "sheet-id", "RSVP!A1:B1"]) == 0

        mock_client.return_value.get.assert_called_once_with("RSVP!A1:B1")
        assert json.loads(capsys.readouterr().out) == [["a", "b"]]
        assert mock_client.call_args.args == ("sheet-id",)

    def test_update(self, base_args, mock_client, capsys):
        assert main([*base_args, "update", "sheet-id", "RSVP!A3:C3", '[["x", "y", 1]]']) == 0

        mock_client.return_value.update.assert_called_once_with("RSVP!A3:C3", [["x", "y", 1]])
        assert "3 cells" in capsys.readouterr().out

    def test_update_invalid_json(self, base_args, mock_client, capsys):
        assert main([*base_args, "update", "sheet-id", "RSVP!A1", "{nope"]) == 1
        assert "Invalid JSON" in capsys.readouterr().out
        mock_client.assert_not_called()

    def test_update_requires_matrix(self, base_args, mock_client, capsys):
        assert main([*base_args, "update", "sheet-id", "RSVP!A1", '["flat"]']) == 1
        assert "array of arrays" in capsys.readouterr().out

    def test_append(self, base_args, mock_client, capsys):
        assert main([*base_args, "append", "sheet-id", "x", "y", "z"]) == 0

        mock_client.return_value.append_row.assert_called_once_with([["x", "y", "z"]])
        assert "RSVP!A3:C3" in capsys.readouterr().out

    def test_append_uses_sheet_options(self, base_args, mock_client):
        main([*base_args, "--sheet", "Guests", "--columns", "b:d", "append", "sheet-id", "x"])

        config = mock_client.call_args.kwargs["config"]
        assert config.sheet_name == "Guests"
        assert config.data_columns == ("B", "D")

    def test_append_empty_sheet(self, base_args, mock_client, capsys):
        mock_client.return_value.append_row.side_effect = EmptyResultError("RSVP!A:C")

        assert main([*base_args, "append", "sheet-id", "x"]) == 1
        assert "No values found in RSVP!A:C" in capsys.readouterr().out

    def test_remote_error(self, base_args, mock_client, capsys):
        mock_client.return_value.get.side_effect = RemoteError("Unable to retrieve", 500)

        assert main([*base_args, "get", "sheet-id", "A1"]) == 1
        assert "Error: Unable to retrieve" in capsys.readouterr().out

    def test_invalid_columns(self, base_args):
        with pytest.raises(SystemExit):
            main([*base_args, "--columns", "C:A", "status"])


class TestTokenCommands:
    """Test login, status and logout."""

    def test_status_without_token(self, base_args, capsys):
        assert main([*base_args, "status"]) == 1
        assert "No token found" in capsys.readouterr().out

    def test_status_with_token(self, tmp_path, base_args, capsys):
        cache = TokenCache(tmp_path / ".credentials" / "sheets.googleapis.com-go-quickstart.json")
        cache.save(Credential(access_token="access", refresh_token="refresh"))

        assert main([*base_args, "status"]) == 0
        out = capsys.readouterr().out
        assert "cached" in out
        assert "Refresh token : yes" in out

    def test_status_missing_client_secret(self, tmp_path, capsys):
        assert main(["--client-secret", str(tmp_path / "missing.json"), "status"]) == 1
        assert "Client secret file not found" in capsys.readouterr().out

    def test_logout(self, tmp_path, base_args, capsys):
        path = tmp_path / ".credentials" / "sheets.googleapis.com-go-quickstart.json"
        TokenCache(path).save(Credential(access_token="access"))

        assert main([*base_args, "logout"]) == 0
        assert not path.exists()
        assert main([*base_args, "logout"]) == 0
        assert "No cached token" in capsys.readouterr().out

    def test_login(self, base_args, capsys):
        credential = Credential(access_token="access")
        with (
            patch("trix.google.CredentialManager.authorize", return_value=credential) as authorize,
            patch("trix.google.CredentialManager.token_info", return_value=TOKEN_INFO),
        ):
            assert main([*base_args, "login", "--no-browser"]) == 0

        authorize.assert_called_once()
        assert "Saving credential file to" in capsys.readouterr().out

    def test_login_failure(self, base_args, capsys):
        with patch(
            "trix.google.CredentialManager.authorize",
            side_effect=AuthFatalError("Unable to read authorization code"),
        ):
            assert main([*base_args, "login", "--no-browser"]) == 1

        assert "Unable to read authorization code" in capsys.readouterr().out
