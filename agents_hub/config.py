from dataclasses import dataclass

from pydantic_settings import BaseSettings


@dataclass(frozen=True)
class AuthConfig:
    """Immutable settings consumed by the authenticator and the request gate."""

    secret: str
    app_name: str = "HederaAgentsHub"
    algorithm: str = "HS256"
    token_expiry_seconds: int = 86400  # 24 hours
    challenge_max_age_seconds: int = 300  # 5 minutes
    require_signer_match: bool = False


class Settings(BaseSettings):
    env: str = "development"
    app_name: str = "HederaAgentsHub"
    log_level: str = "INFO"

    # Session tokens
    session_secret: str = "dev-session-secret-not-for-production-use"  # ⚠️ ROTATE BEFORE PRODUCTION
    session_algorithm: str = "HS256"
    session_token_expiry_seconds: int = 86400

    # Wallet challenge
    challenge_max_age_seconds: int = 300
    # Reject logins whose recovered signer differs from the claimed wallet.
    # Off by default: Hedera account ids (0.0.X) never equal the recovered EVM address.
    require_signer_match: bool = False

    # Secrets backend for the session secret: "env", "aws_secrets" or "gcp_secrets"
    secrets_backend: str = "env"
    secrets_prefix: str = ""
    aws_region: str = "us-east-1"
    gcp_project_id: str = ""

    # CORS
    cors_allowed_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    max_request_bytes: int = 1_048_576

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def auth_config(self, secret: str | None = None) -> AuthConfig:
        """Snapshot the auth-related settings. `secret` overrides session_secret."""
        return AuthConfig(
            secret=self.session_secret if secret is None else secret,
            app_name=self.app_name,
            algorithm=self.session_algorithm,
            token_expiry_seconds=self.session_token_expiry_seconds,
            challenge_max_age_seconds=self.challenge_max_age_seconds,
            require_signer_match=self.require_signer_match,
        )


settings = Settings()
