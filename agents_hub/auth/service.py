"""Wallet authentication service: challenge verification and session token issuance."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from agents_hub.auth import tokens
from agents_hub.auth.errors import AuthErrorCode, TokenError
from agents_hub.config import AuthConfig
from agents_hub.utils.crypto import (
    RecoveryFailed,
    build_auth_message,
    is_timestamp_fresh,
    recover_signer,
)

logger = logging.getLogger(__name__)

EXPIRED_CHALLENGE_MESSAGE = "Timestamp expired. Please try again."
INVALID_SIGNATURE_MESSAGE = "Invalid signature"
SIGNER_MISMATCH_MESSAGE = "Signature does not match wallet address"
INTERNAL_ERROR_MESSAGE = "Authentication failed due to an internal error"


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a login attempt. Build with `ok` or `fail`, never directly."""

    success: bool
    token: str | None = None
    expires_in: int | None = None
    wallet_address: str | None = None
    error: str | None = None
    error_code: AuthErrorCode | None = None

    @classmethod
    def ok(cls, token: str, expires_in: int, wallet_address: str) -> "AuthResult":
        return cls(success=True, token=token, expires_in=expires_in, wallet_address=wallet_address)

    @classmethod
    def fail(cls, error_code: AuthErrorCode, error: str) -> "AuthResult":
        return cls(success=False, error=error, error_code=error_code)


@dataclass(frozen=True)
class TokenVerification:
    valid: bool
    wallet_address: str | None = None
    error: str | None = None
    error_code: AuthErrorCode | None = None


class WalletAuthenticator:
    """Verifies signed wallet challenges and the session tokens minted for them.

    Holds no mutable state: every call depends only on its arguments, the
    immutable `AuthConfig` and the clock.
    """

    def __init__(self, config: AuthConfig, clock: Callable[[], float] = time.time) -> None:
        self.config = config
        self._clock = clock

    def current_timestamp(self) -> int:
        """Server time in milliseconds, the unit clients put in the challenge."""
        return int(self._clock() * 1000)

    def challenge_message(self, wallet_address: str, timestamp: int) -> str:
        return build_auth_message(self.config.app_name, wallet_address, timestamp)

    def authenticate(self, wallet_address: str, signature: str, timestamp: int) -> AuthResult:
        """Verify a signed login challenge and issue a session token."""
        try:
            return self._authenticate(wallet_address, signature, timestamp)
        except Exception:
            logger.exception("Unexpected error authenticating wallet %s", wallet_address)
            return AuthResult.fail(AuthErrorCode.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)

    def _authenticate(self, wallet_address: str, signature: str, timestamp: int) -> AuthResult:
        logger.info("Authenticating wallet %s (timestamp %s)", wallet_address, timestamp)
        now = self._clock()

        if not is_timestamp_fresh(
            timestamp, self.config.challenge_max_age_seconds, current_ms=int(now * 1000)
        ):
            logger.warning("Rejected stale challenge for %s (timestamp %s)", wallet_address, timestamp)
            return AuthResult.fail(AuthErrorCode.EXPIRED_CHALLENGE, EXPIRED_CHALLENGE_MESSAGE)

        message = self.challenge_message(wallet_address, timestamp)
        recovery = recover_signer(message, signature)
        if isinstance(recovery, RecoveryFailed):
            logger.warning("Invalid signature for %s: %s", wallet_address, recovery.reason)
            return AuthResult.fail(AuthErrorCode.INVALID_SIGNATURE, INVALID_SIGNATURE_MESSAGE)

        logger.info("Recovered signer %s for claimed wallet %s", recovery.address, wallet_address)
        if (
            self.config.require_signer_match
            and recovery.address.lower() != wallet_address.lower()
        ):
            logger.warning(
                "Signer %s does not match claimed wallet %s", recovery.address, wallet_address
            )
            return AuthResult.fail(AuthErrorCode.INVALID_SIGNATURE, SIGNER_MISMATCH_MESSAGE)

        token = tokens.encode(wallet_address, self.config, now)
        logger.info(
            "Session token issued for %s (expires in %ds)",
            wallet_address,
            self.config.token_expiry_seconds,
        )
        return AuthResult.ok(
            token=token,
            expires_in=self.config.token_expiry_seconds,
            wallet_address=wallet_address,
        )

    def verify_token(self, token: str) -> TokenVerification:
        """Check a session token's integrity and expiry. Never raises."""
        try:
            claims = tokens.decode(token, self.config, self._clock())
        except TokenError as e:
            logger.debug("Session token rejected: %s", e)
            return TokenVerification(
                valid=False, error=str(e), error_code=AuthErrorCode.INVALID_OR_EXPIRED_TOKEN
            )
        except Exception:
            logger.exception("Unexpected error verifying session token")
            return TokenVerification(
                valid=False, error=INTERNAL_ERROR_MESSAGE, error_code=AuthErrorCode.INTERNAL_ERROR
            )
        return TokenVerification(valid=True, wallet_address=claims.wallet_address)
