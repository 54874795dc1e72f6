"""Google OAuth credential acquisition using Authlib.

This module provides the installed-application OAuth 2.0 flow for the
Sheets API with:
- Client configuration parsed once from client_secret.json
- A file-based token cache that is trusted as-is
- An interactive authorization fallback with a pluggable code prompt
- Google API service creation from the resulting credential

A cache miss is routine and silently falls through to authorization.
Anything that goes wrong after that raises AuthFatalError.
"""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import requests
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.requests_client import OAuth2Session
from google.oauth2.credentials import Credentials as GoogleCredentials
from googleapiclient.discovery import build

from trix.config import CLIENT_SECRET_FILE, CREDENTIALS_DIR, TOKEN_CACHE_FILE
from trix.google.exceptions import (
    AuthFatalError,
    ConfigError,
    CredentialsNotFoundError,
)
from trix.google.token_cache import Credential, TokenCache

logger = logging.getLogger(__name__)


SCOPES = {
    "sheets": "https://www.googleapis.com/auth/spreadsheets",
    "sheets_readonly": "https://www.googleapis.com/auth/spreadsheets.readonly",
}

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
DEFAULT_REDIRECT_URI = "http://localhost"

# Fixed anti-forgery value sent with the authorization request
STATE_TOKEN = "state-token"

CodePrompt = Callable[[str], str]


def resolve_scopes(scopes: list[str]) -> list[str]:
    """Resolve scope names to full URLs."""
    resolved = []
    for scope in scopes:
        if scope.startswith("https://"):
            resolved.append(scope)
        elif scope in SCOPES:
            resolved.append(SCOPES[scope])
        else:
            raise ValueError(
                f"Unknown scope: {scope}. Use full URL or one of: {list(SCOPES.keys())}"
            )
    return resolved


@dataclass(frozen=True)
class ClientConfig:
    """OAuth client descriptor for an installed (or web) application."""

    client_id: str
    client_secret: str
    scopes: tuple[str, ...]
    auth_uri: str = AUTHORIZE_URL
    token_uri: str = TOKEN_URL
    redirect_uri: str = DEFAULT_REDIRECT_URI


def load_client_config(
    path: str | Path = CLIENT_SECRET_FILE,
    scopes: list[str] | None = None,
) -> ClientConfig:
    """Load OAuth client credentials from a client_secret.json file.

    Args:
        path: Path to the client descriptor downloaded from Google Cloud Console.
        scopes: Scope names or full URLs. Defaults to ["sheets"].

    Raises:
        CredentialsNotFoundError: If the file does not exist.
        ConfigError: If the file is not a valid client descriptor.
    """
    path = Path(path)
    resolved = resolve_scopes(scopes or ["sheets"])

    if not path.exists():
        raise CredentialsNotFoundError(str(path))

    try:
        with open(path) as f:
            creds = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Unable to read client secret file {path}: {e}") from e

    if not isinstance(creds, dict):
        raise ConfigError(f"Invalid client secret file {path}: expected a JSON object")

    # Handle both web and installed app credential formats
    if "installed" in creds:
        app_creds = creds["installed"]
    elif "web" in creds:
        app_creds = creds["web"]
    else:
        raise ConfigError("Invalid client_secret.json format. Expected 'installed' or 'web' key.")

    try:
        client_id = app_creds["client_id"]
        client_secret = app_creds["client_secret"]
    except (KeyError, TypeError) as e:
        raise ConfigError(f"Client secret file {path} is missing {e}") from e

    redirect_uris = app_creds.get("redirect_uris") or [DEFAULT_REDIRECT_URI]

    return ClientConfig(
        client_id=client_id,
        client_secret=client_secret,
        scopes=tuple(resolved),
        auth_uri=app_creds.get("auth_uri") or AUTHORIZE_URL,
        token_uri=app_creds.get("token_uri") or TOKEN_URL,
        redirect_uri=redirect_uris[0],
    )


def console_prompt(authorization_url: str) -> str:
    """Print the authorization URL and read the code from standard input.

    Blocks until the operator enters a line. The redirect URL pasted
    from the browser's address bar is accepted as well as the bare code.
    """
    print("Go to the following link in your browser then type the authorization code:")
    print(authorization_url)
    try:
        return input("Authorization code: ").strip()
    except EOFError:
        return ""


class CredentialManager:
    """Obtains a usable Sheets credential, caching it on disk.

    Example:
        >>> config = load_client_config("client_secret.json")
        >>> manager = CredentialManager(config, TokenCache(".credentials/token.json"))
        >>> service = manager.acquire()
        >>> service.spreadsheets().values().get(spreadsheetId=..., range="A1:C3").execute()
    """

    def __init__(
        self,
        client_config: ClientConfig,
        cache: TokenCache | None = None,
        prompt: CodePrompt | None = None,
    ):
        """Initialize the manager.

        Args:
            client_config: Parsed OAuth client descriptor.
            cache: Token cache. Defaults to .credentials/<TOKEN_CACHE_FILE>.
            prompt: Callable given the authorization URL that returns the
                authorization code. Defaults to console_prompt.
        """
        self.client_config = client_config
        self.cache = cache or TokenCache(CREDENTIALS_DIR / TOKEN_CACHE_FILE)
        self.prompt = prompt or console_prompt

        self.session = OAuth2Session(
            client_id=client_config.client_id,
            client_secret=client_config.client_secret,
            scope=" ".join(client_config.scopes),
            redirect_uri=client_config.redirect_uri,
            token_endpoint=client_config.token_uri,
            token_endpoint_auth_method="client_secret_post",
        )

    def acquire(self) -> Any:
        """Return a Sheets API service authorized with a cached or fresh credential.

        Raises:
            AuthFatalError: If the cache is unusable and interactive
                authorization fails.
        """
        credential = self.cache.load()
        if credential is None:
            credential = self.authorize()
        return self.build_service(credential)

    def authorize(self) -> Credential:
        """Run the interactive authorization flow and cache the result.

        Raises:
            AuthFatalError: If no code is supplied, the exchange is rejected
                or the cache cannot be written.
        """
        url = self.authorization_url()
        code = self.prompt(url)
        if not code or not code.strip():
            raise AuthFatalError("Unable to read authorization code")

        credential = self.exchange_code(code.strip())

        try:
            self.cache.save(credential)
        except OSError as e:
            raise AuthFatalError(f"Unable to cache oauth token: {e}") from e

        return credential

    def authorization_url(self) -> str:
        """Build the consent URL requesting offline access."""
        url, _ = self.session.create_authorization_url(
            self.client_config.auth_uri,
            state=STATE_TOKEN,
            access_type="offline",
        )
        return url

    def exchange_code(self, code: str) -> Credential:
        """Exchange an authorization code (or the full redirect URL) for a credential.

        Raises:
            AuthFatalError: If the token endpoint rejects the code or is unreachable.
        """
        if code.startswith(("http://", "https://")) and "code=" in code:
            kwargs: dict[str, Any] = {"authorization_response": code}
        else:
            kwargs = {"code": code}

        try:
            token = self.session.fetch_token(
                self.client_config.token_uri,
                state=STATE_TOKEN,
                **kwargs,
            )
            return Credential.from_token(token)
        except (AuthlibBaseError, requests.RequestException, KeyError, ValueError) as e:
            raise AuthFatalError(f"Unable to retrieve token from web: {e}") from e

    def get_credentials(self, credential: Credential) -> GoogleCredentials:
        """Wrap a credential for Google API client libraries.

        Expiry is not passed on; the cached token is used as-is.
        """
        return GoogleCredentials(
            token=credential.access_token,
            refresh_token=credential.refresh_token,
            token_uri=self.client_config.token_uri,
            client_id=self.client_config.client_id,
            client_secret=self.client_config.client_secret,
            scopes=list(self.client_config.scopes),
        )

    def build_service(self, credential: Credential, version: str = "v4") -> Any:
        """Build the Sheets API service for a credential."""
        creds = self.get_credentials(credential)
        return build("sheets", version, credentials=creds, cache_discovery=False)

    def token_info(self) -> dict[str, Any]:
        """Get information about the cached token.

        Returns:
            Dictionary with cache status, token type, expiry, etc.
        """
        if not self.cache.exists():
            return {"status": "no_token"}

        credential = self.cache.load()
        if credential is None:
            return {"status": "unreadable"}

        if credential.expiry:
            expires_in = credential.expiry - datetime.now(timezone.utc)
            expires_str = str(timedelta(seconds=max(0, int(expires_in.total_seconds()))))
            expiry = credential.expiry.isoformat()
        else:
            expires_str = "unknown"
            expiry = None

        return {
            "status": "cached",
            "token_type": credential.token_type,
            "has_refresh_token": bool(credential.refresh_token),
            "expiry": expiry,
            "expires_in": expires_str,
        }


def acquire(
    client_config: ClientConfig,
    cache: TokenCache | None = None,
    prompt: CodePrompt | None = None,
) -> Any:
    """Return an authorized Sheets API service.

    Shorthand for CredentialManager(client_config, cache, prompt).acquire().
    """
    return CredentialManager(client_config, cache=cache, prompt=prompt).acquire()
