"""Authentication error taxonomy."""

from enum import Enum


class AuthErrorCode(str, Enum):
    EXPIRED_CHALLENGE = "expired_challenge"
    INVALID_SIGNATURE = "invalid_signature"
    INVALID_OR_EXPIRED_TOKEN = "invalid_or_expired_token"
    AUTHENTICATION_REQUIRED = "authentication_required"
    INTERNAL_ERROR = "internal_error"
    AUTHENTICATION_ERROR = "authentication_error"


class TokenError(Exception):
    """A session token failed to decode or has expired."""


class SecretNotConfiguredError(RuntimeError):
    """The session signing secret is missing."""
