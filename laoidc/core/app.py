"""FastAPI application factory for the laoidc OpenID Connect provider."""

from collections.abc import Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from laoidc.core.errors import ProviderError, StartupFatalError, provider_error_handler
from laoidc.core.settings import ProviderSettings
from laoidc.crypto.jwt_manager import JWTManager
from laoidc.crypto.keys import KeyManager
from laoidc.oidc.capabilities import (
    AuthCapability,
    CapabilityRegistry,
    EmailLinkCapability,
    LoggingLinkSender,
)
from laoidc.oidc.discovery import build_discovery
from laoidc.oidc.issuer import TokenIssuer
from laoidc.oidc.routes_authorize import AUTHORIZE_PATH
from laoidc.oidc.routes_authorize import router as authorize_router
from laoidc.oidc.routes_confirm import CONFIRM_PATH
from laoidc.oidc.routes_confirm import router as confirm_router
from laoidc.oidc.routes_discovery import JWKS_PATH
from laoidc.oidc.routes_discovery import router as discovery_router
from laoidc.oidc.uri import is_origin_only

VERSION = "0.1.0"


def _default_capabilities(settings: ProviderSettings) -> list[AuthCapability]:
    return [
        EmailLinkCapability(
            sender=LoggingLinkSender(),
            confirm_url=f"{settings.issuer}{CONFIRM_PATH}",
            domains=settings.get_email_link_domain_list(),
        )
    ]


def create_app(
    settings: ProviderSettings | None = None,
    *,
    capabilities: Sequence[AuthCapability] | None = None,
    key_manager: KeyManager | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application.

    The signing key, JWKS, and discovery document are created here, before
    the application can accept requests, and are read-only afterwards.
    Raises StartupFatalError if the provider cannot be set up.
    """
    settings = settings or ProviderSettings()
    if not is_origin_only(settings.issuer):
        raise StartupFatalError(
            f"issuer_url must be an http(s) origin, got: {settings.issuer_url}"
        )
    if capabilities is None:
        capabilities = _default_capabilities(settings)
    key_manager = key_manager or KeyManager.generate()

    app = FastAPI(
        title="laoidc OpenID Connect Provider",
        version=VERSION,
    )
    app.state.settings = settings
    app.state.key_manager = key_manager
    app.state.discovery = build_discovery(settings.issuer, JWKS_PATH, AUTHORIZE_PATH)
    app.state.token_issuer = TokenIssuer(
        JWTManager(key_manager.signing_key, settings.issuer),
        CapabilityRegistry(capabilities),
        auth_timeout=settings.auth_timeout,
        id_token_ttl=settings.id_token_ttl,
    )
    app.state.email_link = next(
        (c for c in capabilities if isinstance(c, EmailLinkCapability)), None
    )

    origins = settings.get_cors_origin_list()
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["GET"],
        )

    app.add_exception_handler(ProviderError, provider_error_handler)
    app.include_router(discovery_router)
    app.include_router(authorize_router)
    app.include_router(confirm_router)

    return app
