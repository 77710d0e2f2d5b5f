"""ID token creation and verification using RS256."""

from datetime import UTC, datetime, timedelta

import jwt
from jwt.types import Options

from laoidc.crypto.types import DecodedToken, IDTokenClaims, SigningKey


class JWTManager:
    """Creates and verifies RS256-signed ID tokens."""

    def __init__(self, signing_key: SigningKey, issuer: str) -> None:
        self._signing_key = signing_key
        self._issuer = issuer

    @property
    def issuer(self) -> str:
        return self._issuer

    def create_id_token(self, claims: IDTokenClaims) -> str:
        """Create a signed RS256 id_token per OIDC Core 1.0."""
        now = datetime.now(UTC)
        payload = {
            "iss": self._issuer,
            "sub": claims.sub,
            "aud": claims.aud,
            "exp": now + timedelta(seconds=claims.ttl_seconds),
            "iat": now,
            "email": claims.email,
            "email_verified": claims.email_verified,
        }
        if claims.nonce is not None:
            payload["nonce"] = claims.nonce
        return jwt.encode(
            payload,
            self._signing_key.private_key,
            algorithm=self._signing_key.algorithm,
            headers={"kid": self._signing_key.kid},
        )

    def verify_token(self, token: str, audience: str | None = None) -> DecodedToken:
        """Verify and decode an RS256 ID token."""
        opts: Options = {}
        if audience is None:
            opts["verify_aud"] = False
        raw = jwt.decode(
            token,
            self._signing_key.private_key.public_key(),
            algorithms=[self._signing_key.algorithm],
            issuer=self._issuer,
            audience=audience,
            options=opts,
        )
        return DecodedToken.model_validate(raw)
