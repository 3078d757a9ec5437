#!/usr/bin/env python3
"""
Webhook Test Sender

Signs a ping (or sample push) payload with an app's webhook secret and sends
it to a running deployhook receiver, the same way GitHub would.

Usage:
    python scripts/send_test_webhook.py <app> [--event push] [--url http://127.0.0.1:8000]

The secret is read from --secret, or from DEPLOYHOOK_TEST_SECRET in .env.
A push event really triggers a deployment on the receiving host.
"""

import argparse
import json
import os
import sys
from pathlib import Path

# Add parent directory to path so we can import from deployhook
sys.path.insert(0, str(Path(__file__).parent.parent))

import httpx
from dotenv import load_dotenv

from deployhook.signature import SIGNATURE_HEADER, sign_payload

# Load environment variables
load_dotenv()


def build_payload(event: str, app: str) -> dict:
    if event == "push":
        return {
            "ref": "refs/heads/main",
            "pusher": {"name": os.environ.get("USER", "deployhook")},
            "repository": {"full_name": f"local/{app}"},
        }
    return {"zen": "Keep it logically awesome.", "hook_id": 0}


def main() -> int:
    parser = argparse.ArgumentParser(description="Send a signed test webhook")
    parser.add_argument("app", help="App (tenant) name, as used in /webhook/<app>")
    parser.add_argument("--event", default="ping", help="X-GitHub-Event value (default: ping)")
    parser.add_argument("--url", default=os.environ.get("DEPLOYHOOK_URL", "http://127.0.0.1:8000"))
    parser.add_argument("--secret", default=os.environ.get("DEPLOYHOOK_TEST_SECRET", ""))
    args = parser.parse_args()

    if not args.secret:
        print("Error: no secret given (use --secret or set DEPLOYHOOK_TEST_SECRET)")
        return 1

    body = json.dumps(build_payload(args.event, args.app)).encode()
    headers = {
        "Content-Type": "application/json",
        "X-GitHub-Event": args.event,
        SIGNATURE_HEADER: sign_payload(body, args.secret.encode()),
    }
    url = f"{args.url.rstrip('/')}/webhook/{args.app}"

    print(f"POST {url} ({args.event}, {len(body)} bytes)")
    try:
        response = httpx.post(url, content=body, headers=headers, timeout=30.0)
    except httpx.HTTPError as e:
        print(f"Error: {e}")
        return 1

    print(f"HTTP {response.status_code}")
    try:
        print(json.dumps(response.json(), indent=2))
    except ValueError:
        print(response.text)
    return 0 if response.is_success else 1


if __name__ == "__main__":
    sys.exit(main())
