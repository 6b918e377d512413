"""Extract UPI debits from an exported SMS inbox and push them to the API.

Usage:
    python -m tools.push_transactions --file inbox.json --api-key <key>
    python -m tools.push_transactions --file inbox.json --dry-run

The inbox file is a JSON array of {"body": ..., "date": <epoch ms>} items.
Only the raw extracted fields are sent; the server fills in ids,
currency, category, type and status.
"""

import argparse
import json
import os
import sys

import httpx
from dotenv import load_dotenv

from packages.sms_parser import (
    DecodeError,
    InboxFilter,
    JsonFileMessageSource,
    RetrievalError,
    aggregate,
    to_push_payload,
)

DEFAULT_SERVER = "http://localhost:3000"
REQUEST_TIMEOUT_SECONDS = 30


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Push SMS-extracted transactions")
    parser.add_argument("--file", required=True, help="Exported inbox (JSON array)")
    parser.add_argument(
        "--api-key",
        default=os.environ.get("SMS_READER_API_KEY"),
        help="API key (default: $SMS_READER_API_KEY)",
    )
    parser.add_argument(
        "--server",
        default=os.environ.get("SMS_READER_URL", DEFAULT_SERVER),
        help=f"API base URL (default: $SMS_READER_URL or {DEFAULT_SERVER})",
    )
    parser.add_argument("--days", type=int, default=30, help="Only read the last N days")
    parser.add_argument(
        "--dry-run", action="store_true", help="Print the extraction instead of pushing"
    )
    return parser


def push(server: str, api_key: str, payload: list[dict], client: httpx.Client) -> dict:
    response = client.post(
        f"{server.rstrip('/')}/store-transactions",
        json={"transactions": payload},
        headers={"X-API-Key": api_key},
    )
    body = response.json()
    if not isinstance(body, dict):
        raise RuntimeError(f"Unexpected response from server (HTTP {response.status_code})")
    if response.status_code != 200:
        raise RuntimeError(body.get("message") or body.get("error") or "Failed to send data")
    return body


def main(argv=None, client: httpx.Client = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    source = JsonFileMessageSource(args.file)
    try:
        messages = source.list_messages(InboxFilter.last_days(args.days))
    except RetrievalError as e:
        print(f"❌ Unable to read SMS ({e.reason}): {e.detail}")
        return 1
    except DecodeError as e:
        print(f"❌ {e}")
        return 1

    result = aggregate(messages)
    payload = to_push_payload(result.transactions)
    print(f"📩 {result.scanned} SMS read, {len(payload)} transactions extracted")
    if result.balance is not None:
        print(f"   Current balance: INR {result.balance}")

    if args.dry_run:
        print(json.dumps({"balance": result.balance, "transactions": payload}, indent=2))
        return 0

    if not payload:
        print("No transactions to send.")
        return 0

    if not args.api_key:
        print("❌ Please select an API key first (--api-key or SMS_READER_API_KEY).")
        return 2

    own_client = client is None
    client = client or httpx.Client(timeout=REQUEST_TIMEOUT_SECONDS)
    try:
        body = push(args.server, args.api_key, payload, client)
    except (httpx.HTTPError, RuntimeError, ValueError) as e:
        print(f"❌ Error sending data: {e}")
        return 1
    finally:
        if own_client:
            client.close()

    print(f"✅ Data sent successfully! {body['storedCount']} transactions stored.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
