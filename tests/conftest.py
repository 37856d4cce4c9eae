"""Test configuration and fixtures.

No external services are needed: the authenticator is pure, so each test gets
its own instance with a fixed secret and a controllable clock, injected into
the app through dependency overrides.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from agents_hub.auth.middleware import get_authenticator
from agents_hub.auth.service import WalletAuthenticator
from agents_hub.config import AuthConfig, settings
from agents_hub.main import app
from agents_hub.services.secrets import get_session_secret
from agents_hub.utils.crypto import build_auth_message, generate_wallet, sign_auth_message

TEST_SECRET = "test-session-secret-0123456789abcdef"
TEST_APP_NAME = "HederaAgentsHub"
START_TIME = 1_760_000_000.0


class FakeClock:
    """Callable clock returning seconds since the epoch; advance it by hand."""

    def __init__(self, now: float = START_TIME) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    @property
    def ms(self) -> int:
        return int(self.now * 1000)


@pytest.fixture(autouse=True)
def _isolate_settings() -> None:
    """Snapshot settings before each test and restore after to prevent mutation bleed."""
    original = settings.model_dump()
    get_session_secret.cache_clear()
    get_authenticator.cache_clear()
    yield  # type: ignore[misc]
    for key, value in original.items():
        object.__setattr__(settings, key, value)
    get_session_secret.cache_clear()
    get_authenticator.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def auth_config() -> AuthConfig:
    return AuthConfig(secret=TEST_SECRET, app_name=TEST_APP_NAME)


@pytest.fixture
def authenticator(auth_config: AuthConfig, clock: FakeClock) -> WalletAuthenticator:
    return WalletAuthenticator(auth_config, clock=clock)


@pytest.fixture
def wallet() -> tuple[str, str]:
    """(private_key_hex, address) for a fresh wallet."""
    return generate_wallet()


@pytest_asyncio.fixture
async def client(authenticator: WalletAuthenticator) -> AsyncGenerator[AsyncClient, None]:
    """HTTP test client wired to the per-test authenticator."""
    app.dependency_overrides[get_authenticator] = lambda: authenticator

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def unconfigured_client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP test client using the real authenticator dependency with an empty session secret."""
    object.__setattr__(settings, "secrets_backend", "env")
    object.__setattr__(settings, "session_secret", "")
    app.dependency_overrides.clear()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_login_payload(
    private_key_hex: str,
    wallet_address: str,
    timestamp: int,
    app_name: str = TEST_APP_NAME,
) -> dict:
    """Factory for a signed POST /auth/login body."""
    message = build_auth_message(app_name, wallet_address, timestamp)
    return {
        "wallet_address": wallet_address,
        "signature": sign_auth_message(private_key_hex, message),
        "timestamp": timestamp,
    }


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
