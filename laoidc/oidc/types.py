"""Type definitions for OIDC authorization and issuance."""

from enum import StrEnum

from pydantic import BaseModel


class AuthorizationRequest(BaseModel):
    """A relying party's implicit-flow authorization request."""

    scope: str
    response_type: str
    client_id: str
    redirect_uri: str
    login_hint: str
    response_mode: str | None = None
    state: str | None = None
    nonce: str | None = None


class AuthenticatedSubject(BaseModel):
    """Identity confirmed by an authentication capability."""

    email: str
    email_verified: bool = True


class IssuanceState(StrEnum):
    """Lifecycle of an attempt once its request has passed validation.

    A request that fails validation never becomes an attempt; the validator
    raises an AuthorizationRequestError instead.
    """

    VALIDATED = "validated"
    AUTHENTICATION_IN_PROGRESS = "authentication_in_progress"
    AUTHENTICATION_FAILED = "authentication_failed"
    ISSUED = "issued"


class AuthorizationAttempt(BaseModel):
    """Per-request record of an authorization moving through issuance."""

    request: AuthorizationRequest
    state: IssuanceState = IssuanceState.VALIDATED
    capability: str | None = None
    subject: AuthenticatedSubject | None = None
    id_token: str | None = None
