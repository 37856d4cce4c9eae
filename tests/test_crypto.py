"""Unit tests for agents_hub/utils/crypto.py."""

from agents_hub.utils.crypto import (
    RecoveryFailed,
    SignerRecovered,
    build_auth_message,
    generate_wallet,
    is_timestamp_fresh,
    recover_signer,
    sign_auth_message,
)


def test_generate_wallet_format() -> None:
    priv, address = generate_wallet()
    assert priv.startswith("0x") and len(priv) == 66  # 32 bytes hex
    bytes.fromhex(priv[2:])
    assert address.startswith("0x") and len(address) == 42


def test_generate_wallet_unique() -> None:
    wallets = [generate_wallet() for _ in range(5)]
    assert len({w[0] for w in wallets}) == 5
    assert len({w[1] for w in wallets}) == 5


def test_build_auth_message_template() -> None:
    msg = build_auth_message("HederaAgentsHub", "0xABCD", 1700000000000)
    assert msg == "Sign in to HederaAgentsHub\nWallet: 0xABCD\nTimestamp: 1700000000000"


def test_build_auth_message_deterministic() -> None:
    a = build_auth_message("HederaAgentsHub", "0.0.12345", 42)
    b = build_auth_message("HederaAgentsHub", "0.0.12345", 42)
    assert a.encode() == b.encode()


def test_sign_recover_round_trip() -> None:
    priv, address = generate_wallet()
    msg = build_auth_message("HederaAgentsHub", address, 1)
    result = recover_signer(msg, sign_auth_message(priv, msg))
    assert result == SignerRecovered(address=address)


def test_recover_accepts_signature_without_prefix() -> None:
    priv, address = generate_wallet()
    msg = "hello"
    sig = sign_auth_message(priv, msg)
    assert recover_signer(msg, sig[2:]) == SignerRecovered(address=address)


def test_recover_different_message_yields_different_signer() -> None:
    priv, address = generate_wallet()
    sig = sign_auth_message(priv, "message one")
    result = recover_signer("message two", sig)
    assert isinstance(result, SignerRecovered)
    assert result.address != address


def test_recover_garbage_signature_fails() -> None:
    assert isinstance(recover_signer("hello", "not-a-signature"), RecoveryFailed)
    assert isinstance(recover_signer("hello", ""), RecoveryFailed)


def test_recover_truncated_signature_fails() -> None:
    priv, _ = generate_wallet()
    sig = sign_auth_message(priv, "hello")
    assert isinstance(recover_signer("hello", sig[:-10]), RecoveryFailed)


def test_recover_invalid_v_fails() -> None:
    priv, _ = generate_wallet()
    sig = sign_auth_message(priv, "hello")
    tampered = sig[:-2] + "1d"  # v = 29
    result = recover_signer("hello", tampered)
    assert isinstance(result, RecoveryFailed)
    assert result.reason


def test_timestamp_fresh_in_window() -> None:
    assert is_timestamp_fresh(1_000_000, 300, current_ms=1_000_000)
    assert is_timestamp_fresh(1_000_000 - 299_999, 300, current_ms=1_000_000)


def test_timestamp_fresh_boundary_inclusive() -> None:
    assert is_timestamp_fresh(1_000_000 - 300_000, 300, current_ms=1_000_000)
    assert not is_timestamp_fresh(1_000_000 - 300_001, 300, current_ms=1_000_000)


def test_timestamp_future_skew_symmetric() -> None:
    assert is_timestamp_fresh(1_000_000 + 300_000, 300, current_ms=1_000_000)
    assert not is_timestamp_fresh(1_000_000 + 300_001, 300, current_ms=1_000_000)


def test_timestamp_fresh_uses_wall_clock_by_default() -> None:
    import time

    assert is_timestamp_fresh(int(time.time() * 1000), 300)
    assert not is_timestamp_fresh(0, 300)
