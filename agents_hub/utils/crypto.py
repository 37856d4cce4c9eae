"""Wallet signature utilities using eth-account (EIP-191 personal messages)."""

import time
from dataclasses import dataclass

from eth_account import Account
from eth_account.messages import encode_defunct


@dataclass(frozen=True)
class SignerRecovered:
    address: str


@dataclass(frozen=True)
class RecoveryFailed:
    reason: str


Recovery = SignerRecovered | RecoveryFailed


def generate_wallet() -> tuple[str, str]:
    """Generate a secp256k1 keypair. Returns (private_key_hex, checksum_address)."""
    account = Account.create()
    return "0x" + bytes(account.key).hex(), account.address


def build_auth_message(app_name: str, wallet_address: str, timestamp: int) -> str:
    """Build the message to sign: Sign in to <app>\\nWallet: <address>\\nTimestamp: <ms>."""
    return f"Sign in to {app_name}\nWallet: {wallet_address}\nTimestamp: {timestamp}"


def sign_auth_message(private_key_hex: str, message: str) -> str:
    """Sign a message the way a wallet's personal_sign does and return the hex signature."""
    signed = Account.sign_message(encode_defunct(text=message), private_key=private_key_hex)
    return "0x" + bytes(signed.signature).hex()


def recover_signer(message: str, signature: str) -> Recovery:
    """Recover the address that signed `message`. Never raises."""
    try:
        address = Account.recover_message(encode_defunct(text=message), signature=signature)
    except Exception as exc:
        # eth-account raises ValueError, TypeError or eth_keys BadSignature
        # depending on how the signature is malformed.
        return RecoveryFailed(reason=f"{type(exc).__name__}: {exc}")
    if not address:
        return RecoveryFailed(reason="empty address recovered")
    return SignerRecovered(address=address)


def now_ms() -> int:
    return int(time.time() * 1000)


def is_timestamp_fresh(timestamp: int, max_age_seconds: int, current_ms: int | None = None) -> bool:
    """Check if a millisecond timestamp is within the allowed window (either direction)."""
    if current_ms is None:
        current_ms = now_ms()
    return abs(current_ms - timestamp) <= max_age_seconds * 1000
