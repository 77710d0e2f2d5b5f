"""Error taxonomy for the provider and its HTTP rendering."""

import logging
from typing import ClassVar

from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

HTTP_BAD_REQUEST = 400
HTTP_SERVER_ERROR = 500


class ProviderError(Exception):
    """Base class for errors surfaced to a relying party."""

    kind: ClassVar[str] = "server_error"
    status_code: ClassVar[int] = HTTP_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StartupFatalError(ProviderError):
    """The provider cannot start serving traffic."""

    kind = "startup_fatal"


class AuthorizationRequestError(ProviderError):
    """An authorization request was rejected."""

    status_code = HTTP_BAD_REQUEST


class MissingFieldError(AuthorizationRequestError):
    """A required request field was absent or blank."""

    kind = "missing_field"

    def __init__(self, field: str) -> None:
        super().__init__(f"No value for: {field}")
        self.field = field


class InvalidValueError(AuthorizationRequestError):
    """A request field was present but failed its value rule."""

    kind = "invalid_value"


class TransportError(AuthorizationRequestError):
    """The request body could not be read as a form."""

    kind = "transport_error"


class AuthenticationFailedError(AuthorizationRequestError):
    """The identity check did not confirm the subject."""

    kind = "authentication_failed"


class SigningFailureError(ProviderError):
    """ID token signing failed. The message never carries signing details."""

    def __init__(self) -> None:
        super().__init__("The identity token could not be issued")


async def provider_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a ProviderError as {"error": kind, "message": text}."""
    assert isinstance(exc, ProviderError)
    if exc.status_code < HTTP_SERVER_ERROR:
        logger.info("Rejected %s %s: %s", request.url.path, exc.kind, exc.message)
    return JSONResponse(
        {"error": exc.kind, "message": exc.message},
        status_code=exc.status_code,
    )
