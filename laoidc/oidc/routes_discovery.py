"""OIDC discovery and JWKS endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from laoidc.core.deps import get_discovery_document, get_key_manager
from laoidc.crypto.keys import KeyManager
from laoidc.crypto.types import JWKSResponse
from laoidc.oidc.discovery import DiscoveryDocument

router = APIRouter()

DISCOVERY_PATH = "/.well-known/openid-configuration"
JWKS_PATH = "/jwks.json"
JWKS_CACHE_CONTROL = "public, max-age=3600"


@router.get(DISCOVERY_PATH)
async def openid_configuration(
    document: Annotated[DiscoveryDocument, Depends(get_discovery_document)],
) -> DiscoveryDocument:
    """OpenID Connect Discovery 1.0."""
    return document


@router.get(JWKS_PATH)
async def jwks(
    response: Response,
    key_manager: Annotated[KeyManager, Depends(get_key_manager)],
) -> JWKSResponse:
    """JSON Web Key Set endpoint."""
    response.headers["Cache-Control"] = JWKS_CACHE_CONTROL
    return key_manager.publishable_key_set()
