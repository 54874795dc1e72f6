"""Google OAuth credential acquisition and token caching."""

from trix.google.exceptions import (
    AuthFatalError,
    ConfigError,
    CredentialsNotFoundError,
    GoogleAuthError,
)
from trix.google.oauth import (
    SCOPES,
    ClientConfig,
    CredentialManager,
    acquire,
    console_prompt,
    load_client_config,
)
from trix.google.token_cache import Credential, TokenCache

__all__ = [
    "SCOPES",
    "ClientConfig",
    "Credential",
    "CredentialManager",
    "TokenCache",
    "acquire",
    "console_prompt",
    "load_client_config",
    "GoogleAuthError",
    "ConfigError",
    "CredentialsNotFoundError",
    "AuthFatalError",
]
