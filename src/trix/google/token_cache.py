"""On-disk cache for the OAuth credential."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from trix.config import ensure_cache_dir

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credential:
    """An OAuth access token with its optional refresh token and expiry."""

    access_token: str
    token_type: str = "Bearer"
    refresh_token: str | None = None
    expiry: datetime | None = None

    @classmethod
    def from_token(cls, token: dict[str, Any]) -> Credential:
        """Build a Credential from an Authlib token response."""
        expires_at = token.get("expires_at")
        expiry = (
            datetime.fromtimestamp(float(expires_at), tz=timezone.utc) if expires_at else None
        )
        return cls(
            access_token=token["access_token"],
            token_type=token.get("token_type") or "Bearer",
            refresh_token=token.get("refresh_token"),
            expiry=expiry,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Credential:
        """Parse the cache file representation.

        Raises:
            KeyError: If access_token is missing.
            ValueError: If expiry is not an ISO 8601 timestamp.
        """
        if not isinstance(data, dict):
            raise ValueError("Token data must be a JSON object")

        access_token = data["access_token"]
        if not access_token:
            raise ValueError("Token has an empty access_token")

        expiry = data.get("expiry")
        if expiry:
            expiry = datetime.fromisoformat(expiry.replace("Z", "+00:00"))
            if expiry.tzinfo is None:
                expiry = expiry.replace(tzinfo=timezone.utc)
        else:
            expiry = None

        return cls(
            access_token=access_token,
            token_type=data.get("token_type", "Bearer"),
            refresh_token=data.get("refresh_token"),
            expiry=expiry,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "access_token": self.access_token,
            "token_type": self.token_type,
        }
        if self.refresh_token is not None:
            data["refresh_token"] = self.refresh_token
        if self.expiry:
            data["expiry"] = self.expiry.isoformat()
        return data


class TokenCache:
    """A single JSON file holding one Credential.

    The parent directory is created owner-only the first time the path
    is resolved. Nothing here checks expiry; a cached token is handed
    back exactly as it was written.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Cache file path, creating its directory on first use."""
        ensure_cache_dir(self._path.parent)
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> Credential | None:
        """Load the cached credential.

        Returns:
            The credential, or None if the file is missing or unreadable.
        """
        path = self._path
        try:
            ensure_cache_dir(path.parent)
            with open(path) as f:
                credential = Credential.from_dict(json.load(f))
        except FileNotFoundError:
            logger.info(f"No cached token at {path}")
            return None
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.info(f"Ignoring unreadable token cache {path}: {e}")
            return None

        logger.info(f"Loaded cached token from {path}")
        return credential

    def save(self, credential: Credential) -> Path:
        """Write the credential, replacing any previous content.

        Raises:
            OSError: If the file cannot be written.
        """
        path = self.path
        with open(path, "w") as f:
            json.dump(credential.to_dict(), f, indent=2)

        logger.info(f"Saved token to {path}")
        return path

    def clear(self) -> bool:
        """Delete the cache file.

        Returns:
            True if a file was removed.
        """
        if not self._path.exists():
            return False
        self._path.unlink()
        logger.info(f"Removed cached token {self._path}")
        return True
