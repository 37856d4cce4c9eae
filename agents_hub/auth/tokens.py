"""Functions for minting and reading stateless session tokens."""

from dataclasses import dataclass

import jwt

from agents_hub.auth.errors import SecretNotConfiguredError, TokenError
from agents_hub.config import AuthConfig


@dataclass(frozen=True)
class SessionClaims:
    wallet_address: str
    issued_at: int
    expires_at: int


def _require_secret(config: AuthConfig) -> str:
    if not config.secret:
        raise SecretNotConfiguredError("Session signing secret is not configured")
    return config.secret


def encode(wallet_address: str, config: AuthConfig, now: float) -> str:
    """Encode a session for `wallet_address` as a signed JWT."""
    issued_at = int(now)
    payload = {
        "wallet_address": wallet_address,
        "iat": issued_at,
        "exp": issued_at + config.token_expiry_seconds,
    }
    return jwt.encode(payload, _require_secret(config), algorithm=config.algorithm)


def decode(token: str, config: AuthConfig, now: float) -> SessionClaims:
    """Decode a session token and check its expiry against `now`.

    Expiry is checked here rather than by PyJWT so callers can supply the clock.
    """
    secret = _require_secret(config)
    try:
        data: dict = jwt.decode(
            token,
            secret,
            algorithms=[config.algorithm],
            options={
                "verify_exp": False,
                "verify_iat": False,
                "verify_nbf": False,
                "require": ["exp", "iat"],
            },
        )
    except jwt.InvalidTokenError as e:
        raise TokenError(str(e) or "Not a valid token") from e

    wallet_address = data.get("wallet_address")
    if not isinstance(wallet_address, str) or not wallet_address:
        raise TokenError("Token is missing the wallet_address claim")
    try:
        claims = SessionClaims(
            wallet_address=wallet_address,
            issued_at=int(data["iat"]),
            expires_at=int(data["exp"]),
        )
    except (TypeError, ValueError) as e:
        raise TokenError("Token has malformed time claims") from e

    if now >= claims.expires_at:
        raise TokenError("Token has expired")
    return claims
