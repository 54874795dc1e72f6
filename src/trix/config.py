"""Default locations and per-sheet configuration.

Files live relative to the working directory by default:
    client_secret.json                                    - OAuth client credentials
    .credentials/sheets.googleapis.com-go-quickstart.json - cached OAuth token
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

# Credential file paths
CLIENT_SECRET_FILE = Path("client_secret.json")
CREDENTIALS_DIR = Path(".credentials")
TOKEN_CACHE_FILE = "sheets.googleapis.com-go-quickstart.json"

# Sheet that append_row writes to
DEFAULT_SHEET_NAME = "RSVP"
DEFAULT_DATA_COLUMNS = ("A", "C")

_COLUMN_RE = re.compile(r"^[A-Z]+$")


def _column_index(column: str) -> int:
    index = 0
    for char in column:
        index = index * 26 + (ord(char) - ord("A") + 1)
    return index


@dataclass(frozen=True)
class SheetConfig:
    """Where a SheetsClient reads and writes, and where its token is cached.

    Attributes:
        sheet_name: Sheet (tab) that append_row targets.
        data_columns: Inclusive (start, end) column letters of a data row.
        cache_dir: Directory holding the cached token.
        cache_file_name: File name of the cached token inside cache_dir.
        client_secret_path: OAuth client descriptor downloaded from Google Cloud Console.
    """

    sheet_name: str = DEFAULT_SHEET_NAME
    data_columns: tuple[str, str] = DEFAULT_DATA_COLUMNS
    cache_dir: Path = CREDENTIALS_DIR
    cache_file_name: str = TOKEN_CACHE_FILE
    client_secret_path: Path = CLIENT_SECRET_FILE

    def __post_init__(self) -> None:
        if not self.sheet_name:
            raise ValueError("sheet_name must not be empty")

        start, end = (c.upper() for c in self.data_columns)
        for column in (start, end):
            if not _COLUMN_RE.match(column):
                raise ValueError(f"Invalid column letter: {column!r}")
        if _column_index(start) > _column_index(end):
            raise ValueError(f"Column range is reversed: {start}:{end}")

        # Frozen dataclass, so normalize through object.__setattr__
        object.__setattr__(self, "data_columns", (start, end))
        object.__setattr__(self, "cache_dir", Path(self.cache_dir))
        object.__setattr__(self, "client_secret_path", Path(self.client_secret_path))

    @property
    def token_path(self) -> Path:
        """Full path of the cached token file."""
        return self.cache_dir / self.cache_file_name


def parse_columns(spec: str) -> tuple[str, str]:
    """Parse a column span such as "A:C" into ("A", "C")."""
    start, sep, end = spec.partition(":")
    if not sep:
        end = start
    return start.strip().upper(), end.strip().upper()


def ensure_cache_dir(path: str | Path) -> Path:
    """Create the token cache directory (owner-only) if it doesn't exist.

    Returns:
        Path to the cache directory.
    """
    path = Path(path)
    path.mkdir(mode=0o700, parents=True, exist_ok=True)
    return path
