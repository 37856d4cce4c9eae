"""Bearer session token dependency for FastAPI."""

import logging
from dataclasses import dataclass
from functools import lru_cache

from fastapi import Depends, HTTPException, Request

from agents_hub.auth.errors import AuthErrorCode
from agents_hub.auth.service import WalletAuthenticator
from agents_hub.config import settings
from agents_hub.services.secrets import get_session_secret

logger = logging.getLogger(__name__)

AUTHENTICATION_REQUIRED_DETAIL = "Authentication required. Please provide a valid token."
INVALID_TOKEN_DETAIL = "Invalid or expired token"
AUTHENTICATION_ERROR_DETAIL = "Authentication error"


class VerifiedIdentity:
    """Container for the wallet identity attached to an authenticated request."""

    def __init__(self, wallet_address: str) -> None:
        self.wallet_address = wallet_address


@dataclass(frozen=True)
class GateDecision:
    admitted: bool
    wallet_address: str | None = None
    error_code: AuthErrorCode | None = None
    reason: str | None = None


@lru_cache(maxsize=1)
def get_authenticator() -> WalletAuthenticator:
    """Process-wide authenticator built once from settings and the secrets backend.

    If the secret cannot be loaded the authenticator is built without one, so
    logins fail as INTERNAL_ERROR and gated requests as "Authentication error"
    until the process is restarted with a working secret.
    """
    try:
        secret = get_session_secret()
    except Exception:
        logger.exception("Session secret unavailable; authentication is disabled")
        secret = ""
    return WalletAuthenticator(settings.auth_config(secret=secret))


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from `Authorization: Bearer <token>`, or None if absent/malformed."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


def gate_authorization(authorization: str | None, authenticator: WalletAuthenticator) -> GateDecision:
    """Decide whether a request carrying `authorization` may proceed. Never raises."""
    try:
        token = extract_bearer_token(authorization)
        if token is None:
            return GateDecision(admitted=False, error_code=AuthErrorCode.AUTHENTICATION_REQUIRED)

        result = authenticator.verify_token(token)
        if result.valid:
            return GateDecision(admitted=True, wallet_address=result.wallet_address)
        if result.error_code == AuthErrorCode.INTERNAL_ERROR:
            return GateDecision(admitted=False, error_code=AuthErrorCode.AUTHENTICATION_ERROR)
        return GateDecision(
            admitted=False,
            error_code=AuthErrorCode.INVALID_OR_EXPIRED_TOKEN,
            reason=result.error,
        )
    except Exception:
        logger.exception("Unexpected error while authenticating request")
        return GateDecision(admitted=False, error_code=AuthErrorCode.AUTHENTICATION_ERROR)


async def authenticate_request(
    request: Request,
    authenticator: WalletAuthenticator = Depends(get_authenticator),
) -> VerifiedIdentity:
    """Verify the bearer session token on an incoming request."""
    decision = gate_authorization(request.headers.get("Authorization"), authenticator)

    if decision.error_code == AuthErrorCode.AUTHENTICATION_REQUIRED:
        raise HTTPException(
            status_code=401,
            detail=AUTHENTICATION_REQUIRED_DETAIL,
            headers={"WWW-Authenticate": "Bearer"},
        )
    if decision.error_code == AuthErrorCode.INVALID_OR_EXPIRED_TOKEN:
        logger.info("Rejected session token on %s: %s", request.url.path, decision.reason)
        raise HTTPException(status_code=403, detail=f"{INVALID_TOKEN_DETAIL}: {decision.reason}")
    if not decision.admitted or decision.wallet_address is None:
        raise HTTPException(status_code=500, detail=AUTHENTICATION_ERROR_DETAIL)

    request.state.wallet_address = decision.wallet_address
    return VerifiedIdentity(wallet_address=decision.wallet_address)
