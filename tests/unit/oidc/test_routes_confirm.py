"""Tests for the email link confirmation endpoint."""

import asyncio
from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from laoidc.core.app import create_app
from laoidc.core.settings import ProviderSettings
from laoidc.crypto.keys import KeyManager
from laoidc.oidc.capabilities import EmailLinkCapability
from laoidc.oidc.types import AuthenticatedSubject

CLIENT_ID = "http://rp.example.com"


class QueueSender:
    def __init__(self) -> None:
        self.links: asyncio.Queue[str] = asyncio.Queue()

    async def send(self, address: str, link: str) -> None:
        await self.links.put(link)


@pytest.fixture
def sender() -> QueueSender:
    return QueueSender()


@pytest.fixture
def email_link(sender: QueueSender) -> EmailLinkCapability:
    return EmailLinkCapability(sender, "http://localhost:8000/confirm")


@pytest.fixture
async def link_client(
    settings: ProviderSettings,
    key_manager: KeyManager,
    email_link: EmailLinkCapability,
) -> AsyncIterator[AsyncClient]:
    app = create_app(settings, capabilities=[email_link], key_manager=key_manager)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac


async def _start_sign_in(
    email_link: EmailLinkCapability, sender: QueueSender
) -> tuple[asyncio.Task[AuthenticatedSubject | None], str]:
    waiting = asyncio.create_task(email_link.authenticate("a@example.com", CLIENT_ID))
    link = await sender.links.get()
    return waiting, link.removeprefix("http://localhost:8000")


class TestShowLoginLink:
    """Tests for GET /confirm/{token}."""

    async def test_unknown_token(self, link_client: AsyncClient) -> None:
        resp = await link_client.get("/confirm/not-a-real-token")
        assert resp.status_code == 404

    async def test_no_email_link_capability(self, client: AsyncClient) -> None:
        resp = await client.get("/confirm/anything")
        assert resp.status_code == 404

    async def test_get_leaves_sign_in_pending(
        self,
        link_client: AsyncClient,
        email_link: EmailLinkCapability,
        sender: QueueSender,
    ) -> None:
        waiting, path = await _start_sign_in(email_link, sender)

        for _ in range(2):
            resp = await link_client.get(path)
            assert resp.status_code == 200
            assert resp.headers["content-type"].startswith("text/html")
            assert resp.headers["cache-control"] == "no-store"
            assert CLIENT_ID in resp.text
            assert f'<form method="post" action="{path}">' in resp.text

        assert email_link.pending_count == 1
        assert not waiting.done()
        waiting.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiting


class TestConfirmLoginLink:
    """Tests for POST /confirm/{token}."""

    async def test_unknown_token(self, link_client: AsyncClient) -> None:
        resp = await link_client.post("/confirm/not-a-real-token")
        assert resp.status_code == 404
        assert resp.text == "This login link is invalid or has expired."

    async def test_no_email_link_capability(self, client: AsyncClient) -> None:
        resp = await client.post("/confirm/anything")
        assert resp.status_code == 404

    async def test_post_completes_pending_sign_in(
        self,
        link_client: AsyncClient,
        email_link: EmailLinkCapability,
        sender: QueueSender,
    ) -> None:
        waiting, path = await _start_sign_in(email_link, sender)

        resp = await link_client.post(path)
        assert resp.status_code == 200
        subject = await waiting
        assert subject is not None
        assert subject.email == "a@example.com"

        again = await link_client.post(path)
        assert again.status_code == 404
        shown = await link_client.get(path)
        assert shown.status_code == 404
