"""Authentication capabilities that confirm a login_hint belongs to the user."""

import asyncio
import logging
import secrets
from collections.abc import Iterable, Sequence
from typing import NamedTuple, Protocol

from laoidc.oidc.types import AuthenticatedSubject

logger = logging.getLogger(__name__)

LINK_TOKEN_BYTES = 32


class AuthCapability(Protocol):
    """A way of proving that the user controls a login_hint."""

    name: str

    def supports(self, login_hint: str) -> bool: ...

    async def authenticate(
        self, login_hint: str, client_id: str
    ) -> AuthenticatedSubject | None: ...


class LinkSender(Protocol):
    """Delivers a one-time login link to an email address."""

    async def send(self, address: str, link: str) -> None: ...


class LoggingLinkSender:
    """Development sender that writes login links to the log.

    A login link is a bearer credential for the pending sign-in, so this
    sender is only suitable for local development.
    """

    async def send(self, address: str, link: str) -> None:
        logger.info("Login link for %s: %s", address, link)


class CapabilityRegistry:
    """Ordered set of capabilities; the first one that supports a hint wins."""

    def __init__(self, capabilities: Iterable[AuthCapability]) -> None:
        self._capabilities: tuple[AuthCapability, ...] = tuple(capabilities)

    def __len__(self) -> int:
        return len(self._capabilities)

    def select(self, login_hint: str) -> AuthCapability | None:
        """Return the first capability able to handle login_hint."""
        for capability in self._capabilities:
            if capability.supports(login_hint):
                return capability
        return None


class _PendingLink(NamedTuple):
    address: str
    client_id: str
    future: asyncio.Future[AuthenticatedSubject]


def _domain_of(address: str) -> str:
    return address.rpartition("@")[2].lower()


class EmailLinkCapability:
    """Confirms an address by sending it a one-time link and waiting for approval.

    Opening the link only shows which client is asking; the sign-in completes
    when the user submits the confirmation form. Pending links live in memory
    only and are dropped as soon as the waiting request finishes, times out,
    or is cancelled.
    """

    name = "email_link"

    def __init__(
        self,
        sender: LinkSender,
        confirm_url: str,
        domains: Sequence[str] = (),
    ) -> None:
        self._sender = sender
        self._confirm_url = confirm_url.rstrip("/")
        self._domains = frozenset(d.lower() for d in domains)
        self._pending: dict[str, _PendingLink] = {}

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def supports(self, login_hint: str) -> bool:
        if "@" not in login_hint:
            return False
        return not self._domains or _domain_of(login_hint) in self._domains

    async def authenticate(
        self, login_hint: str, client_id: str
    ) -> AuthenticatedSubject | None:
        token = secrets.token_urlsafe(LINK_TOKEN_BYTES)
        future: asyncio.Future[AuthenticatedSubject] = (
            asyncio.get_running_loop().create_future()
        )
        self._pending[token] = _PendingLink(login_hint, client_id, future)
        try:
            await self._sender.send(login_hint, f"{self._confirm_url}/{token}")
            logger.info("Sent login link for sign-in to %s", client_id)
            return await future
        finally:
            self._pending.pop(token, None)

    def pending_client(self, token: str) -> str | None:
        """Return the client_id a pending token signs in to, without using it."""
        entry = self._pending.get(token)
        if entry is None or entry.future.done():
            return None
        return entry.client_id

    def confirm(self, token: str) -> bool:
        """Resolve the request waiting on token. Each token works once."""
        entry = self._pending.pop(token, None)
        if entry is None or entry.future.done():
            return False
        entry.future.set_result(
            AuthenticatedSubject(email=entry.address, email_verified=True)
        )
        return True
