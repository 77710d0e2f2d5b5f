"""FastAPI dependencies exposing components built at startup."""

from fastapi import Request

from laoidc.crypto.keys import KeyManager
from laoidc.oidc.capabilities import EmailLinkCapability
from laoidc.oidc.discovery import DiscoveryDocument
from laoidc.oidc.issuer import TokenIssuer


def get_key_manager(request: Request) -> KeyManager:
    return request.app.state.key_manager


def get_discovery_document(request: Request) -> DiscoveryDocument:
    return request.app.state.discovery


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_email_link(request: Request) -> EmailLinkCapability | None:
    """The email link capability, when one is registered."""
    return request.app.state.email_link
