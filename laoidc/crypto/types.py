"""Type definitions for signing keys, JWKS, and ID token claims."""

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey
from pydantic import BaseModel, ConfigDict, Field

ID_TOKEN_DEFAULT_TTL = 3600


class SigningKey(BaseModel):
    """The provider's RSA signing key. The private half is never serialized."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    kid: str
    algorithm: str = "RS256"
    private_key: RSAPrivateKey = Field(exclude=True, repr=False)


class JWKEntry(BaseModel):
    """Single JWK entry in a JWKS response."""

    kty: str = "RSA"
    use: str = "sig"
    alg: str = "RS256"
    kid: str
    n: str
    e: str


class JWKSResponse(BaseModel):
    """JSON Web Key Set response."""

    keys: list[JWKEntry]


class IDTokenClaims(BaseModel):
    """Claims bundle for ID token creation."""

    sub: str
    aud: str
    email: str
    email_verified: bool = True
    nonce: str | None = None
    ttl_seconds: int = Field(default=ID_TOKEN_DEFAULT_TTL, gt=0)


class DecodedToken(BaseModel):
    """Decoded and verified ID token claims."""

    model_config = ConfigDict(extra="allow")

    sub: str = ""
    iss: str = ""
    aud: str = ""
    iat: int = 0
    exp: int = 0
    email: str = ""
    email_verified: bool = False
    nonce: str | None = None
