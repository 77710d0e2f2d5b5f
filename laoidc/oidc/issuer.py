"""ID token issuance for validated authorization requests."""

import asyncio
import logging
from typing import NoReturn

from laoidc.core.errors import AuthenticationFailedError, SigningFailureError
from laoidc.crypto.jwt_manager import JWTManager
from laoidc.crypto.types import IDTokenClaims
from laoidc.oidc.capabilities import AuthCapability, CapabilityRegistry
from laoidc.oidc.types import (
    AuthenticatedSubject,
    AuthorizationAttempt,
    AuthorizationRequest,
    IssuanceState,
)

logger = logging.getLogger(__name__)


class TokenIssuer:
    """Drives a validated request through authentication to a signed ID token."""

    def __init__(
        self,
        jwt_mgr: JWTManager,
        capabilities: CapabilityRegistry,
        *,
        auth_timeout: float,
        id_token_ttl: int,
    ) -> None:
        self._jwt_mgr = jwt_mgr
        self._capabilities = capabilities
        self._auth_timeout = auth_timeout
        self._id_token_ttl = id_token_ttl

    async def authorize(self, request: AuthorizationRequest) -> AuthorizationAttempt:
        """Authenticate the login_hint and issue an ID token for client_id.

        Raises AuthenticationFailedError when no capability confirms the
        subject, and SigningFailureError when the token cannot be signed.
        """
        attempt = AuthorizationAttempt(request=request)
        capability = self._capabilities.select(request.login_hint)
        if capability is None:
            self._fail(attempt, "No authentication method is available for login_hint")

        attempt.capability = capability.name
        attempt.state = IssuanceState.AUTHENTICATION_IN_PROGRESS
        subject = await self._authenticate(attempt, capability)

        attempt.subject = subject
        attempt.id_token = self._sign(attempt, subject)
        attempt.state = IssuanceState.ISSUED
        logger.info("Issued id_token to %s via %s", request.client_id, capability.name)
        return attempt

    async def _authenticate(
        self, attempt: AuthorizationAttempt, capability: AuthCapability
    ) -> AuthenticatedSubject:
        login_hint = attempt.request.login_hint
        try:
            subject = await asyncio.wait_for(
                capability.authenticate(login_hint, attempt.request.client_id),
                timeout=self._auth_timeout,
            )
        except TimeoutError:
            self._fail(attempt, "Authentication timed out")
        if subject is None:
            self._fail(attempt, "Authentication did not confirm login_hint")
        if subject.email.lower() != login_hint.lower():
            self._fail(attempt, "Authenticated identity does not match login_hint")
        return subject

    def _sign(self, attempt: AuthorizationAttempt, subject: AuthenticatedSubject) -> str:
        claims = IDTokenClaims(
            sub=subject.email,
            aud=attempt.request.client_id,
            email=subject.email,
            email_verified=subject.email_verified,
            nonce=attempt.request.nonce,
            ttl_seconds=self._id_token_ttl,
        )
        try:
            return self._jwt_mgr.create_id_token(claims)
        except Exception as exc:
            logger.exception("Signing id_token for %s failed", attempt.request.client_id)
            raise SigningFailureError from exc

    def _fail(self, attempt: AuthorizationAttempt, message: str) -> NoReturn:
        attempt.state = IssuanceState.AUTHENTICATION_FAILED
        logger.warning(
            "Authentication failed for %s via %s: %s",
            attempt.request.client_id,
            attempt.capability or "no capability",
            message,
        )
        raise AuthenticationFailedError(message)
