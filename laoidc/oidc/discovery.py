"""OpenID Connect Discovery document builder.

The ``form_post`` response mode comes from the OAuth 2.0 Form Post Response
Mode extension.
"""

from pydantic import BaseModel, ConfigDict


class DiscoveryDocument(BaseModel):
    """OIDC .well-known/openid-configuration response."""

    model_config = ConfigDict(frozen=True)

    issuer: str
    authorization_endpoint: str
    jwks_uri: str
    scopes_supported: list[str]
    claims_supported: list[str]
    response_types_supported: list[str]
    response_modes_supported: list[str]
    grant_types_supported: list[str]
    subject_types_supported: list[str]
    id_token_signing_alg_values_supported: list[str]


def build_discovery(origin: str, jwks_path: str, auth_path: str) -> DiscoveryDocument:
    """Build the OIDC discovery document for an issuer origin."""
    issuer = origin.rstrip("/")
    return DiscoveryDocument(
        issuer=issuer,
        authorization_endpoint=f"{issuer}{auth_path}",
        jwks_uri=f"{issuer}{jwks_path}",
        scopes_supported=["openid", "email"],
        claims_supported=["aud", "email", "email_verified", "exp", "iat", "iss", "sub"],
        response_types_supported=["id_token"],
        response_modes_supported=["form_post"],
        grant_types_supported=["implicit"],
        subject_types_supported=["public"],
        id_token_signing_alg_values_supported=["RS256"],
    )
