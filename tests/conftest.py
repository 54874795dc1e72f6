"""Shared fixtures for trix tests."""

import json

import pytest


@pytest.fixture
def client_secret(tmp_path):
    """Create a mock client_secret.json file."""
    creds = {
        "installed": {
            "client_id": "test-client-id.apps.googleusercontent.com",
            "client_secret": "test-client-secret",
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": "https://oauth2.googleapis.com/token",
            "redirect_uris": ["http://localhost"],
        }
    }
    path = tmp_path / "client_secret.json"
    with open(path, "w") as f:
        json.dump(creds, f)
    return path


@pytest.fixture
def cached_token(tmp_path):
    """Create a mock token cache file."""
    token = {
        "access_token": "cached-access-token",
        "token_type": "Bearer",
        "refresh_token": "cached-refresh-token",
        "expiry": "2001-01-01T00:00:00Z",
    }
    path = tmp_path / ".credentials" / "token.json"
    path.parent.mkdir(mode=0o700)
    with open(path, "w") as f:
        json.dump(token, f)
    return path
