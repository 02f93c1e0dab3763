"""Example usage: list accounts, export transactions and log out."""

import argparse
import logging
import sys
from datetime import date, timedelta
from pathlib import Path

import requests

from bankwestpy import (
    BankwestError,
    Session,
    SessionExpired,
    create_client_from_cookies,
    load_cookies,
    resource_uris,
)


def main():
    """Run the example against an already logged-in session."""
    parser = argparse.ArgumentParser(description="Bankwest Online Banking session client")
    parser.add_argument(
        "--cookies-file",
        type=str,
        default="cookies.json",
        help="Path to cookies exported from a logged-in browser (default: cookies.json)",
    )
    parser.add_argument(
        "--account",
        type=str,
        help="Export transactions for this account only (BBB-BBB AAAAAAA)",
    )
    parser.add_argument(
        "--from-date",
        type=str,
        default=(date.today() - timedelta(days=30)).strftime("%d/%m/%Y"),
        help="Earliest transaction date, DD/MM/YYYY (default: 30 days ago)",
    )
    parser.add_argument(
        "--to-date",
        type=str,
        help="Latest transaction date, DD/MM/YYYY (default: no upper bound)",
    )
    parser.add_argument(
        "--base-url",
        type=str,
        help="Use another base URL instead of the Bankwest server (e.g. a mock server)",
    )
    parser.add_argument(
        "--no-logout",
        action="store_true",
        help="Leave the session open when finished",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    cookies_file = Path(args.cookies_file)
    if not cookies_file.exists():
        print(f"Cookies file not found: {cookies_file}")
        print("Log in with a browser and export the session cookies first.")
        sys.exit(1)

    cookies = load_cookies(cookies_file)
    print(f"Loaded {len(cookies)} cookies from {cookies_file}")

    try:
        uris = resource_uris(args.base_url) if args.base_url else {}
        session = Session(create_client_from_cookies(cookies), **uris)

        accounts = session.list_accounts()
        print(f"\nFound {len(accounts)} accounts:")
        for acct in accounts:
            print(f"  {acct.number}  {acct.name}: available {acct.available_balance}")

        numbers = [args.account] if args.account else [acct.number for acct in accounts]
        for number in numbers:
            txns = session.export_transactions(
                account=number,
                from_date=args.from_date,
                to_date=args.to_date,
            )
            print(f"\n{number}: {len(txns)} transactions")
            for txn in txns:
                print(f"  {txn.date:%d/%m/%Y}  {txn.amount:>12}  {txn.narrative}")

        if not args.no_logout:
            session.logout()
            print("\nLogged out.")

    except SessionExpired:
        print("\n✗ Session expired - log in again and re-export the cookies.")
        sys.exit(2)
    except BankwestError as e:
        print(f"\n✗ {type(e).__name__}: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"\n✗ Invalid argument: {e}")
        sys.exit(1)
    except requests.RequestException as e:
        print(f"\n✗ Network error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
