#!/usr/bin/env python3
"""
Live demo: a wallet signs in to HederaAgentsHub and calls a protected endpoint.

Showcases:
  1. Fetching a challenge (server timestamp + canonical message)
  2. Signing it with a freshly generated wallet key
  3. Exchanging the signature for a bearer session token
  4. Calling GET /auth/me with and without the token
  5. A stale challenge being rejected

Run:
  1. Start the API:  uvicorn agents_hub.main:app --port 8000
  2. Run this demo:  python scripts/demo_login.py [base_url]
"""

import sys

import httpx

from agents_hub.utils.crypto import generate_wallet, sign_auth_message

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"

BOLD = "\033[1m"
DIM = "\033[2m"
GREEN = "\033[92m"
RED = "\033[91m"
CYAN = "\033[96m"
RESET = "\033[0m"


def step(num: int, text: str) -> None:
    print(f"\n{BOLD}{CYAN}Step {num}{RESET} │ {text}")


def ok(msg: str) -> None:
    print(f"       {GREEN}✓{RESET} {msg}")


def fail(msg: str) -> None:
    print(f"       {RED}✗ {msg}{RESET}")
    sys.exit(1)


def main() -> None:
    try:
        r = httpx.get(f"{BASE_URL}/health", timeout=3)
    except httpx.ConnectError:
        fail(f"Cannot reach API at {BASE_URL}")
    if r.status_code != 200:
        fail(f"API returned {r.status_code}")

    private_key, address = generate_wallet()

    step(1, f"Request a challenge for {address}")
    r = httpx.get(f"{BASE_URL}/auth/challenge", params={"wallet_address": address})
    if r.status_code != 200:
        fail(f"Challenge failed: {r.text}")
    challenge = r.json()
    print(f"{DIM}{challenge['message']}{RESET}")

    step(2, "Sign the challenge with the wallet key")
    signature = sign_auth_message(private_key, challenge["message"])
    ok(f"signature {signature[:18]}…")

    step(3, "Log in")
    r = httpx.post(
        f"{BASE_URL}/auth/login",
        json={"wallet_address": address, "signature": signature, "timestamp": challenge["timestamp"]},
    )
    body = r.json()
    if not body.get("success"):
        fail(f"Login failed: {body.get('error')}")
    token = body["token"]
    ok(f"token issued, expires in {body['expires_in']}s")

    step(4, "Call a protected endpoint")
    r = httpx.get(f"{BASE_URL}/auth/me")
    ok(f"without token → {r.status_code}")
    r = httpx.get(f"{BASE_URL}/auth/me", headers={"Authorization": f"Bearer {token}"})
    if r.status_code != 200:
        fail(f"Protected call rejected: {r.text}")
    ok(f"with token → {r.status_code} as {r.json()['wallet_address']}")

    step(5, "Replay a six-minute-old challenge")
    stale = challenge["timestamp"] - 6 * 60 * 1000
    message = challenge["message"].rsplit("\n", 1)[0] + f"\nTimestamp: {stale}"
    r = httpx.post(
        f"{BASE_URL}/auth/login",
        json={
            "wallet_address": address,
            "signature": sign_auth_message(private_key, message),
            "timestamp": stale,
        },
    )
    ok(f"stale login → {r.status_code} {r.json().get('error')}")


if __name__ == "__main__":
    main()
