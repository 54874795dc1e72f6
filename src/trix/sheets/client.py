"""Google Sheets API client implementation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httplib2
from google.auth import exceptions as google_auth_exceptions
from googleapiclient.errors import HttpError

from trix.config import SheetConfig
from trix.google import CredentialManager, TokenCache, load_client_config
from trix.google.oauth import CodePrompt
from trix.sheets.exceptions import EmptyResultError, RemoteError

logger = logging.getLogger(__name__)

VALUE_INPUT_OPTION = "USER_ENTERED"


@dataclass
class UpdateResult:
    """Summary the Sheets API returns for a values update."""

    spreadsheet_id: str
    updated_range: str
    updated_rows: int = 0
    updated_columns: int = 0
    updated_cells: int = 0

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> UpdateResult:
        return cls(
            spreadsheet_id=data.get("spreadsheetId", ""),
            updated_range=data.get("updatedRange", ""),
            updated_rows=data.get("updatedRows", 0),
            updated_columns=data.get("updatedColumns", 0),
            updated_cells=data.get("updatedCells", 0),
        )


class SheetsClient:
    """Google Sheets client bound to a single spreadsheet.

    Reads and writes ranges of one document, and appends rows to the
    configured sheet.

    Usage:
        client = SheetsClient("1BxiMVs0XRA5nFMdKvBdBZjgmUUqptlbs74OgvE2upms")

        # Read values
        rows = client.get("RSVP!A1:C10")

        # Write values
        client.update("RSVP!A2:C2", [["Alice", "yes", 2]])

        # Append after the last populated row of RSVP!A:C
        client.append_row([["Bob", "no", 0]])

    Note:
        Construction authorizes immediately. Without a cached token this
        runs the interactive OAuth flow through ``prompt``.
    """

    def __init__(
        self,
        spreadsheet_id: str,
        config: SheetConfig | None = None,
        service: Any = None,
        prompt: CodePrompt | None = None,
        scopes: list[str] | None = None,
    ) -> None:
        """Initialize Sheets client.

        Args:
            spreadsheet_id: Google Sheets spreadsheet ID.
            config: Sheet and credential locations. Defaults to SheetConfig().
            service: Pre-built Sheets API service. Skips authorization when given.
            prompt: Authorization code prompt used when no token is cached.
            scopes: OAuth scopes. Defaults to ["sheets"].

        Raises:
            ConfigError: If the client secret file is missing or malformed.
            AuthFatalError: If interactive authorization fails.
        """
        self._spreadsheet_id = spreadsheet_id
        self._config = config or SheetConfig()

        if service is None:
            client_config = load_client_config(self._config.client_secret_path, scopes)
            manager = CredentialManager(
                client_config,
                cache=TokenCache(self._config.token_path),
                prompt=prompt,
            )
            service = manager.acquire()
        self._service = service

    @property
    def spreadsheet_id(self) -> str:
        return self._spreadsheet_id

    @property
    def config(self) -> SheetConfig:
        return self._config

    @property
    def data_range(self) -> str:
        """Whole-column range read to find the next empty row, e.g. "RSVP!A:C"."""
        start, end = self._config.data_columns
        return f"{self._config.sheet_name}!{start}:{end}"

    def row_range(self, row: int) -> str:
        """Single-row range of the data columns, e.g. "RSVP!A3:C3"."""
        start, end = self._config.data_columns
        return f"{self._config.sheet_name}!{start}{row}:{end}{row}"

    # =========================================================================
    # Values
    # =========================================================================

    def get(self, range_notation: str) -> list[list[Any]]:
        """Read values from a range.

        Args:
            range_notation: A1 notation (e.g., "Sheet1!A1:C10").

        Returns:
            2D list of cell values.

        Raises:
            RemoteError: If the API call fails.
        """
        request = (
            self._service.spreadsheets()
            .values()
            .get(spreadsheetId=self._spreadsheet_id, range=range_notation)
        )
        result = self._execute(request, f"retrieve data from {range_notation}")
        return result.get("values", [])

    def update(self, range_notation: str, values: list[list[Any]]) -> UpdateResult:
        """Write values to a range as if typed by a user.

        Args:
            range_notation: A1 notation (e.g., "Sheet1!A1:C1").
            values: 2D list of values, sent unmodified.

        Returns:
            UpdateResult with the number of rows, columns and cells updated.

        Raises:
            RemoteError: If the API call fails.
        """
        logger.debug(f"Updating {range_notation} with values: {values}")

        request = (
            self._service.spreadsheets()
            .values()
            .update(
                spreadsheetId=self._spreadsheet_id,
                range=range_notation,
                valueInputOption=VALUE_INPUT_OPTION,
                body={"values": values},
            )
        )
        result = self._execute(request, f"update data on {range_notation}")
        return UpdateResult.from_response(result)

    def append_row(self, values: list[list[Any]]) -> UpdateResult:
        """Write a row directly below the last populated row of the data range.

        The row count of ``data_range`` decides the target row, so a sheet
        without any rows (not even a header) is an error. Two writers
        appending at the same time can compute the same row and overwrite
        each other; there is no locking.

        Args:
            values: 2D list holding the row to write.

        Returns:
            UpdateResult for the written row.

        Raises:
            EmptyResultError: If the data range has no rows.
            RemoteError: If reading or writing fails.
        """
        rows = self.get(self.data_range)
        if not rows:
            raise EmptyResultError(self.data_range)

        for row in rows:
            logger.debug(f"Existing row: {row}")

        write_row = len(rows) + 1
        return self.update(self.row_range(write_row), values)

    def _execute(self, request: Any, action: str) -> dict[str, Any]:
        """Execute an API request, wrapping failures in RemoteError."""
        try:
            return request.execute()
        except HttpError as e:
            raise RemoteError(
                f"Unable to {action}: {e.reason}", status_code=e.resp.status
            ) from e
        except (
            OSError,
            httplib2.HttpLib2Error,
            google_auth_exceptions.GoogleAuthError,
        ) as e:
            raise RemoteError(f"Unable to {action}: {e}") from e
