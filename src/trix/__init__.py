"""trix - OAuth-cached helper for reading and writing one Google spreadsheet."""

from trix.config import SheetConfig
from trix.google import (
    AuthFatalError,
    ConfigError,
    CredentialManager,
    CredentialsNotFoundError,
    GoogleAuthError,
)
from trix.sheets import (
    EmptyResultError,
    RemoteError,
    SheetsClient,
    SheetsError,
    UpdateResult,
)

__version__ = "0.1.0"

__all__ = [
    "SheetConfig",
    "SheetsClient",
    "UpdateResult",
    "CredentialManager",
    "GoogleAuthError",
    "ConfigError",
    "CredentialsNotFoundError",
    "AuthFatalError",
    "SheetsError",
    "RemoteError",
    "EmptyResultError",
]
