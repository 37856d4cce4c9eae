"""Auth endpoints: wallet challenge, login, token verification, current identity."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from agents_hub.auth.errors import AuthErrorCode
from agents_hub.auth.middleware import VerifiedIdentity, authenticate_request, get_authenticator
from agents_hub.auth.service import WalletAuthenticator
from agents_hub.schemas.auth import (
    AuthRequest,
    AuthResponse,
    ChallengeResponse,
    IdentityResponse,
    TokenVerifyRequest,
    TokenVerifyResponse,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/challenge", response_model=ChallengeResponse)
async def get_challenge(
    wallet_address: str = Query(..., min_length=1, max_length=128),
    authenticator: WalletAuthenticator = Depends(get_authenticator),
) -> ChallengeResponse:
    """Return the server timestamp and the exact message the wallet should sign."""
    timestamp = authenticator.current_timestamp()
    return ChallengeResponse(
        wallet_address=wallet_address,
        timestamp=timestamp,
        message=authenticator.challenge_message(wallet_address, timestamp),
        valid_for_seconds=authenticator.config.challenge_max_age_seconds,
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": AuthResponse}, 500: {"model": AuthResponse}},
)
async def login(
    data: AuthRequest,
    authenticator: WalletAuthenticator = Depends(get_authenticator),
) -> AuthResponse | JSONResponse:
    """Exchange a signed wallet challenge for a bearer session token."""
    result = authenticator.authenticate(data.wallet_address, data.signature, data.timestamp)
    if result.success:
        return AuthResponse(
            success=True,
            token=result.token,
            expires_in=result.expires_in,
            wallet_address=result.wallet_address,
        )

    body = AuthResponse(
        success=False,
        error=result.error,
        error_code=result.error_code.value if result.error_code else None,
    )
    status_code = 500 if result.error_code == AuthErrorCode.INTERNAL_ERROR else 401
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.post("/verify", response_model=TokenVerifyResponse)
async def verify_token(
    data: TokenVerifyRequest,
    authenticator: WalletAuthenticator = Depends(get_authenticator),
) -> TokenVerifyResponse:
    """Report whether a session token is currently valid."""
    result = authenticator.verify_token(data.token)
    return TokenVerifyResponse(
        valid=result.valid,
        wallet_address=result.wallet_address,
        error=result.error,
    )


@router.get("/me", response_model=IdentityResponse)
async def me(identity: VerifiedIdentity = Depends(authenticate_request)) -> IdentityResponse:
    """Return the wallet address bound to the caller's session token."""
    return IdentityResponse(wallet_address=identity.wallet_address)
