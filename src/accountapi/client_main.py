from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from accountapi.domain.entities import Account
from accountapi.domain.errors import AccountApiError
from accountapi.domain.shared import AccountClientProtocol
from accountapi.env import get_settings
from accountapi.infrastructure.accounts.account_client import AccountClient


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="accountapi", description="Manage accounts on the account API."
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    fetch = sub.add_parser("fetch", help="Fetch an account by ID")
    fetch.add_argument("account_id")

    create = sub.add_parser("create", help="Create an account from a JSON file")
    create.add_argument("path", type=Path)

    delete = sub.add_parser("delete", help="Delete a version of an account")
    delete.add_argument("account_id")
    delete.add_argument("version", type=int)
    return parser


def _print_account(account: Optional[Account]) -> None:
    if account is None:
        print("null")
        return
    print(account.model_dump_json(indent=2, exclude_none=True))


def run(client: AccountClientProtocol, args: argparse.Namespace) -> None:
    if args.command == "fetch":
        _print_account(client.fetch(args.account_id))
    elif args.command == "create":
        payload = json.loads(args.path.read_text(encoding="utf-8"))
        # Accept either a bare account or a {"data": ...} envelope.
        if "data" in payload:
            payload = payload["data"]
        _print_account(client.create(Account.model_validate(payload)))
    elif args.command == "delete":
        client.delete(args.account_id, args.version)
        print(f"Deleted account {args.account_id}")


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = get_settings()
        with AccountClient.from_settings(settings) as client:
            run(client, args)
    except (AccountApiError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
