"""Shared test fixtures for laoidc."""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from laoidc.core.app import create_app
from laoidc.core.settings import ProviderSettings
from laoidc.crypto.keys import KeyManager
from laoidc.oidc.types import AuthenticatedSubject

ISSUER = "http://localhost:8000"


class FakeCapability:
    """Confirms every login_hint it is handed, recording each call."""

    name = "fake"

    def __init__(self, confirm: bool = True) -> None:
        self.confirm = confirm
        self.calls: list[str] = []

    def supports(self, login_hint: str) -> bool:
        return True

    async def authenticate(
        self, login_hint: str, client_id: str
    ) -> AuthenticatedSubject | None:
        self.calls.append(login_hint)
        if not self.confirm:
            return None
        return AuthenticatedSubject(email=login_hint)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the host environment out of settings under test."""
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("LAOIDC_ISSUER_URL", raising=False)


@pytest.fixture(scope="session")
def key_manager() -> KeyManager:
    """One RSA-2048 key shared across tests; generation is slow."""
    return KeyManager.generate()


@pytest.fixture
def settings() -> ProviderSettings:
    return ProviderSettings(issuer_url=ISSUER, auth_timeout=2.0)


@pytest.fixture
def capability() -> FakeCapability:
    return FakeCapability()


@pytest.fixture
async def client(
    settings: ProviderSettings,
    capability: FakeCapability,
    key_manager: KeyManager,
) -> AsyncIterator[AsyncClient]:
    """Create an httpx test client around a freshly built app."""
    app = create_app(settings, capabilities=[capability], key_manager=key_manager)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
