"""RSA signing key generation, key IDs, and JWK publication."""

import base64
import hashlib
import logging

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from laoidc.core.errors import StartupFatalError
from laoidc.crypto.types import JWKEntry, JWKSResponse, SigningKey

logger = logging.getLogger(__name__)

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537
SIGNING_ALGORITHM = "RS256"


def _int_to_bytes(value: int) -> bytes:
    byte_length = (value.bit_length() + 7) // 8
    return value.to_bytes(byte_length, byteorder="big")


def _int_to_base64url(value: int) -> str:
    """Encode an integer as base64url without padding."""
    return base64.urlsafe_b64encode(_int_to_bytes(value)).rstrip(b"=").decode()


def key_id(public_key: RSAPublicKey) -> str:
    """Derive a stable key ID from the SHA-1 digest of the RSA modulus."""
    modulus = public_key.public_numbers().n
    return hashlib.sha1(_int_to_bytes(modulus), usedforsecurity=False).hexdigest()


def generate_signing_key(key_size: int = RSA_KEY_SIZE) -> SigningKey:
    """Generate a fresh RSA keypair for ID token signing.

    Raises StartupFatalError when the key is weaker than RSA-2048 or the
    backend cannot produce one.
    """
    if key_size < RSA_KEY_SIZE:
        raise StartupFatalError(f"Signing keys must be at least {RSA_KEY_SIZE} bits")
    try:
        private_key = rsa.generate_private_key(
            public_exponent=RSA_PUBLIC_EXPONENT,
            key_size=key_size,
        )
    except (ValueError, UnsupportedAlgorithm) as exc:
        raise StartupFatalError("Could not generate a signing key") from exc
    return SigningKey(
        kid=key_id(private_key.public_key()),
        algorithm=SIGNING_ALGORITHM,
        private_key=private_key,
    )


def public_jwk_entry(public_key: RSAPublicKey, kid: str) -> JWKEntry:
    """Convert an RSA public key to JWK format."""
    numbers = public_key.public_numbers()
    return JWKEntry(
        kid=kid,
        alg=SIGNING_ALGORITHM,
        n=_int_to_base64url(numbers.n),
        e=_int_to_base64url(numbers.e),
    )


class KeyManager:
    """Owns the single signing key for the lifetime of the process."""

    def __init__(self, signing_key: SigningKey) -> None:
        self._signing_key = signing_key
        public_key = signing_key.private_key.public_key()
        self._key_set = JWKSResponse(keys=[public_jwk_entry(public_key, signing_key.kid)])

    @classmethod
    def generate(cls, key_size: int = RSA_KEY_SIZE) -> "KeyManager":
        """Build a manager around a freshly generated key."""
        manager = cls(generate_signing_key(key_size))
        logger.info("Generated RSA-%d signing key %s", key_size, manager.kid)
        return manager

    @property
    def signing_key(self) -> SigningKey:
        return self._signing_key

    @property
    def kid(self) -> str:
        return self._signing_key.kid

    def publishable_key_set(self) -> JWKSResponse:
        """Return the JWK Set holding only the current public key."""
        return self._key_set
