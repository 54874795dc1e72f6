"""CLI for trix - authorize and edit one Google spreadsheet.

Usage:
    trix login                                  # Interactive OAuth login
    trix status                                 # Show client secret and token status
    trix logout                                 # Delete the cached token
    trix get <spreadsheet-id> <range>           # Print range values as JSON
    trix update <spreadsheet-id> <range> <json> # Write a JSON matrix to a range
    trix append <spreadsheet-id> <value>...     # Append a row to the data sheet

Global options:
    --client-secret PATH   OAuth client descriptor (default: client_secret.json)
    --cache-dir PATH       Token cache directory (default: .credentials)
    --sheet NAME           Sheet used by append (default: RSVP)
    --columns A:C          Data columns used by append (default: A:C)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import webbrowser
from pathlib import Path

from trix.config import (
    CLIENT_SECRET_FILE,
    CREDENTIALS_DIR,
    DEFAULT_DATA_COLUMNS,
    DEFAULT_SHEET_NAME,
    SheetConfig,
    parse_columns,
)


def _make_prompt(no_browser: bool):
    """Code prompt that optionally opens the consent page first."""
    from trix.google import console_prompt

    def prompt(url: str) -> str:
        if not no_browser:
            webbrowser.open(url)
        return console_prompt(url)

    return prompt


def _manager(config: SheetConfig, no_browser: bool = True):
    from trix.google import CredentialManager, TokenCache, load_client_config

    client_config = load_client_config(config.client_secret_path)
    return CredentialManager(
        client_config,
        cache=TokenCache(config.token_path),
        prompt=_make_prompt(no_browser),
    )


def cmd_login(config: SheetConfig, no_browser: bool = False) -> int:
    """Run the OAuth flow and cache a fresh token."""
    from trix.google import AuthFatalError, ConfigError

    print("=" * 60)
    print("TRIX GOOGLE LOGIN")
    print("=" * 60)
    print()

    try:
        manager = _manager(config, no_browser)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    try:
        manager.authorize()
    except AuthFatalError as e:
        print(f"\nError: {e}")
        return 1

    print(f"\nSaving credential file to: {config.token_path}")
    return cmd_status(config)


def cmd_status(config: SheetConfig) -> int:
    """Show client secret and cached token status."""
    from trix.google import ConfigError

    secret_mark = "[x]" if config.client_secret_path.exists() else "[ ]"
    token_mark = "[x]" if config.token_path.exists() else "[ ]"
    print(f"Client secret : {secret_mark} {config.client_secret_path}")
    print(f"Token cache   : {token_mark} {config.token_path}")

    try:
        manager = _manager(config)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    info = manager.token_info()
    if info["status"] == "no_token":
        print("No token found - run 'trix login'")
        return 1
    if info["status"] == "unreadable":
        print("Token cache is unreadable - run 'trix login'")
        return 1

    print(f"Status        : {info['status']}")
    print(f"Token type    : {info['token_type']}")
    print(f"Refresh token : {'yes' if info['has_refresh_token'] else 'no'}")
    print(f"Expires in    : {info['expires_in']}")
    return 0


def cmd_logout(config: SheetConfig) -> int:
    """Delete the cached token."""
    from trix.google import TokenCache

    if TokenCache(config.token_path).clear():
        print(f"Removed {config.token_path}")
    else:
        print("No cached token")
    return 0


def cmd_get(config: SheetConfig, spreadsheet_id: str, range_notation: str) -> int:
    """Print the values of a range."""
    client = _client(config, spreadsheet_id)
    values = client.get(range_notation)
    print(json.dumps(values, indent=2))
    return 0


def cmd_update(
    config: SheetConfig, spreadsheet_id: str, range_notation: str, values_json: str
) -> int:
    """Write a JSON matrix into a range."""
    try:
        values = json.loads(values_json)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON: {e}")
        return 1

    if not isinstance(values, list) or not all(isinstance(row, list) for row in values):
        print("Error: values must be a JSON array of arrays")
        return 1

    client = _client(config, spreadsheet_id)
    result = client.update(range_notation, values)
    print(f"Updated {result.updated_range}: {result.updated_cells} cells")
    return 0


def cmd_append(config: SheetConfig, spreadsheet_id: str, values: list[str]) -> int:
    """Append one row to the data sheet."""
    client = _client(config, spreadsheet_id)
    result = client.append_row([values])
    print(f"Updated {result.updated_range}: {result.updated_cells} cells")
    return 0


def _client(config: SheetConfig, spreadsheet_id: str):
    from trix.sheets import SheetsClient

    return SheetsClient(spreadsheet_id, config=config, prompt=_make_prompt(True))


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    from trix.google import GoogleAuthError
    from trix.sheets import SheetsError

    parser = argparse.ArgumentParser(
        prog="trix",
        description="Read and write a Google spreadsheet with a cached OAuth token",
    )
    parser.add_argument(
        "--client-secret",
        type=Path,
        default=CLIENT_SECRET_FILE,
        help=f"OAuth client descriptor (default: {CLIENT_SECRET_FILE})",
    )
    parser.add_argument(
        "--cache-dir",
        type=Path,
        default=CREDENTIALS_DIR,
        help=f"Token cache directory (default: {CREDENTIALS_DIR})",
    )
    parser.add_argument(
        "--sheet",
        default=DEFAULT_SHEET_NAME,
        help=f"Sheet used by append (default: {DEFAULT_SHEET_NAME})",
    )
    parser.add_argument(
        "--columns",
        default=":".join(DEFAULT_DATA_COLUMNS),
        help="Data columns used by append (default: %(default)s)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # login
    login_parser = subparsers.add_parser("login", help="Interactive OAuth login")
    login_parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Don't open browser automatically",
    )

    subparsers.add_parser("status", help="Show token status")
    subparsers.add_parser("logout", help="Delete the cached token")

    # get
    get_parser = subparsers.add_parser("get", help="Print range values as JSON")
    get_parser.add_argument("spreadsheet_id", help="Spreadsheet ID")
    get_parser.add_argument("range", help="A1 notation, e.g. RSVP!A1:C10")

    # update
    update_parser = subparsers.add_parser("update", help="Write values to a range")
    update_parser.add_argument("spreadsheet_id", help="Spreadsheet ID")
    update_parser.add_argument("range", help="A1 notation, e.g. RSVP!A2:C2")
    update_parser.add_argument("values", help='JSON matrix, e.g. [["a", "b", "c"]]')

    # append
    append_parser = subparsers.add_parser("append", help="Append a row to the data sheet")
    append_parser.add_argument("spreadsheet_id", help="Spreadsheet ID")
    append_parser.add_argument("values", nargs="+", help="Cell values of the new row")

    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = SheetConfig(
            sheet_name=args.sheet,
            data_columns=parse_columns(args.columns),
            cache_dir=args.cache_dir,
            client_secret_path=args.client_secret,
        )
    except ValueError as e:
        parser.error(str(e))

    try:
        if args.command == "login":
            return cmd_login(config, args.no_browser)
        elif args.command == "status":
            return cmd_status(config)
        elif args.command == "logout":
            return cmd_logout(config)
        elif args.command == "get":
            return cmd_get(config, args.spreadsheet_id, args.range)
        elif args.command == "update":
            return cmd_update(config, args.spreadsheet_id, args.range, args.values)
        elif args.command == "append":
            return cmd_append(config, args.spreadsheet_id, args.values)
    except (GoogleAuthError, SheetsError) as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
