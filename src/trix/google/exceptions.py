"""Google authentication exceptions."""


class GoogleAuthError(Exception):
    """Base exception for Google authentication errors."""

    pass


class ConfigError(GoogleAuthError):
    """Raised when the OAuth client secret file is malformed."""

    pass


class CredentialsNotFoundError(ConfigError):
    """Raised when OAuth client secret file is not found."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Client secret file not found at {path}. "
            "Please download OAuth credentials from Google Cloud Console."
        )


class AuthFatalError(GoogleAuthError):
    """Raised when interactive authorization cannot complete.

    Covers a missing authorization code, a rejected code exchange and a
    token cache that cannot be written.
    """

    pass
