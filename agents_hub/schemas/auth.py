"""Pydantic schemas for wallet login and session tokens."""

from pydantic import BaseModel, Field, field_validator


class AuthRequest(BaseModel):
    wallet_address: str = Field(..., min_length=1, max_length=128)
    signature: str = Field(..., min_length=1, max_length=1024)
    timestamp: int = Field(..., ge=0, description="Milliseconds since the Unix epoch")

    @field_validator("wallet_address")
    @classmethod
    def reject_padded_address(cls, v: str) -> str:
        # Embedded verbatim in the signed message, so it is never rewritten.
        if v != v.strip():
            raise ValueError("Must not have leading or trailing whitespace")
        return v

    @field_validator("signature")
    @classmethod
    def strip_signature(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Must not be blank")
        return v


class AuthResponse(BaseModel):
    success: bool
    token: str | None = None
    expires_in: int | None = Field(None, description="Seconds until the token expires")
    wallet_address: str | None = None
    error: str | None = None
    error_code: str | None = None


class ChallengeResponse(BaseModel):
    wallet_address: str
    timestamp: int
    message: str = Field(..., description="Exact text the wallet must sign")
    valid_for_seconds: int


class TokenVerifyRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=4096)


class TokenVerifyResponse(BaseModel):
    valid: bool
    wallet_address: str | None = None
    error: str | None = None


class IdentityResponse(BaseModel):
    wallet_address: str
