"""Google Sheets exceptions."""

from __future__ import annotations


class SheetsError(Exception):
    """Base exception for spreadsheet operation errors."""


class RemoteError(SheetsError):
    """Raised when the Sheets API returns an error or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class EmptyResultError(SheetsError):
    """Raised when append_row finds no existing rows to append after."""

    def __init__(self, range_notation: str):
        self.range = range_notation
        super().__init__(f"No values found in {range_notation}")
