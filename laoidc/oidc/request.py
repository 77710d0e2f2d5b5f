"""Authorization request parsing and validation."""

import re
from collections.abc import Mapping

from laoidc.core.errors import InvalidValueError, MissingFieldError
from laoidc.oidc.types import AuthorizationRequest
from laoidc.oidc.uri import is_contained_by, is_origin_only, is_valid_uri

SUPPORTED_SCOPE = "openid email"
SUPPORTED_RESPONSE_TYPE = "id_token"
SUPPORTED_RESPONSE_MODE = "form_post"

URL_NOTE = "Note: urls must be absolute, use http or https, and must omit default ports"

# (form field, required) in the order missing fields are reported.
REQUEST_FIELDS: tuple[tuple[str, bool], ...] = (
    ("scope", True),
    ("response_type", True),
    ("client_id", True),
    ("redirect_uri", True),
    ("login_hint", True),
    ("response_mode", False),
    ("state", False),
    ("nonce", False),
)

# Syntactic sanity check only; some deliverable addresses will not match.
_EMAIL_RE = re.compile(r"[a-zA-Z0-9][-+_.a-zA-Z0-9]*@[-.a-zA-Z0-9]+")


def is_valid_email(address: str) -> bool:
    """Return True if address looks like an email address."""
    return _EMAIL_RE.fullmatch(address) is not None


def _collect_fields(params: Mapping[str, str]) -> dict[str, str | None]:
    """Check required fields are present and non-blank."""
    values: dict[str, str | None] = {}
    for name, required in REQUEST_FIELDS:
        value = params.get(name) or None
        if required and (value is None or not value.strip()):
            raise MissingFieldError(name)
        values[name] = value
    return values


def _check_values(req: AuthorizationRequest) -> None:
    """Raise InvalidValueError for the first field that breaks its rule."""
    if req.scope != SUPPORTED_SCOPE:
        raise InvalidValueError(f"scope must be exactly '{SUPPORTED_SCOPE}'")
    if req.response_type != SUPPORTED_RESPONSE_TYPE:
        raise InvalidValueError(
            f"response_type must be exactly '{SUPPORTED_RESPONSE_TYPE}'"
        )
    if not is_valid_uri(req.client_id):
        raise InvalidValueError(f"client_id must be a valid url. {URL_NOTE}")
    if not is_origin_only(req.client_id):
        raise InvalidValueError(
            "client_id must not include paths, query values, or fragments"
        )
    if not is_valid_uri(req.redirect_uri):
        raise InvalidValueError(f"redirect_uri must be a valid url. {URL_NOTE}")
    if not is_contained_by(req.redirect_uri, req.client_id):
        raise InvalidValueError(
            "redirect_uri must be an absolute url that falls within client_id's origin"
        )
    if req.response_mode is not None and req.response_mode != SUPPORTED_RESPONSE_MODE:
        raise InvalidValueError(
            f"The only supported response_mode is '{SUPPORTED_RESPONSE_MODE}'"
        )
    if not is_valid_email(req.login_hint):
        raise InvalidValueError("login_hint does not look like an email address")


def validate_authorization_request(params: Mapping[str, str]) -> AuthorizationRequest:
    """Build an AuthorizationRequest from form parameters.

    Presence of every required field is checked before any value rule, so a
    missing field is always reported ahead of a malformed one.
    """
    req = AuthorizationRequest.model_validate(_collect_fields(params))
    _check_values(req)
    return req
