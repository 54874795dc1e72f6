"""Google Sheets client for a single spreadsheet.

Usage:
    from trix.sheets import SheetsClient

    # Initialize (authorizes, prompting for a code on first run)
    client = SheetsClient("1BxiMVs0XRA5nFMdKvBdBZjgmUUqptlbs74OgvE2upms")

    # Read values
    values = client.get("RSVP!A1:C10")

    # Write values
    client.update("RSVP!A2:C2", [["Alice", "yes", 2]])

    # Append a row to RSVP!A:C
    client.append_row([["Bob", "no", 0]])

OAuth Setup:
    1. Download OAuth credentials from Google Cloud Console as client_secret.json
    2. Authorize: trix login
"""

from __future__ import annotations

from trix.sheets.client import SheetsClient, UpdateResult
from trix.sheets.exceptions import EmptyResultError, RemoteError, SheetsError

__all__ = ["SheetsClient", "UpdateResult", "SheetsError", "RemoteError", "EmptyResultError"]
