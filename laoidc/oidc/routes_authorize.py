"""OIDC authorization endpoint (implicit flow, form_post delivery)."""

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from laoidc.core.deps import get_token_issuer
from laoidc.core.errors import AuthenticationFailedError, TransportError
from laoidc.oidc.form_post import render_form_post
from laoidc.oidc.issuer import TokenIssuer
from laoidc.oidc.request import validate_authorization_request
from laoidc.oidc.types import AuthorizationAttempt, AuthorizationRequest

logger = logging.getLogger(__name__)

router = APIRouter()

AUTHORIZE_PATH = "/authorize"
FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")
DISCONNECT_POLL_SECONDS = 1.0


async def _read_form(request: Request) -> tuple[dict[str, str], str | None]:
    """Read form fields, returning them with any bind error found on the way."""
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type not in FORM_CONTENT_TYPES:
        return {}, f"Expected a form body, got: {content_type or 'no content type'}"
    try:
        form = await request.form()
    except StarletteHTTPException as exc:
        return {}, str(exc.detail)

    params: dict[str, str] = {}
    bind_error = None
    for name, value in form.multi_items():
        if not isinstance(value, str):
            bind_error = f"Unexpected file upload for: {name}"
            continue
        params.setdefault(name, value)
    return params, bind_error


async def _wait_for_disconnect(request: Request) -> None:
    while not await request.is_disconnected():
        await asyncio.sleep(DISCONNECT_POLL_SECONDS)


async def _authorize_while_connected(
    request: Request, issuer: TokenIssuer, auth_request: AuthorizationRequest
) -> AuthorizationAttempt:
    """Run the issuer, cancelling it if the user agent goes away."""
    issuing = asyncio.ensure_future(issuer.authorize(auth_request))
    watcher = asyncio.ensure_future(_wait_for_disconnect(request))
    try:
        done, _ = await asyncio.wait(
            {issuing, watcher}, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        watcher.cancel()
        if not issuing.done():
            issuing.cancel()
    if issuing not in done:
        await asyncio.gather(issuing, return_exceptions=True)
        logger.info(
            "Client disconnected during authentication for %s", auth_request.client_id
        )
        raise AuthenticationFailedError(
            "Client disconnected before authentication finished"
        )
    return issuing.result()


@router.post(AUTHORIZE_PATH, response_model=None)
async def authorize(
    request: Request,
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> HTMLResponse:
    """POST /authorize -- validate, authenticate, and deliver an id_token."""
    params, bind_error = await _read_form(request)
    auth_request = validate_authorization_request(params)
    # Bind errors surface only once every field has passed validation.
    if bind_error is not None:
        raise TransportError(bind_error)

    attempt = await _authorize_while_connected(request, issuer, auth_request)

    fields = {"id_token": attempt.id_token or ""}
    if auth_request.state is not None:
        fields["state"] = auth_request.state
    return render_form_post(request, auth_request.redirect_uri, fields)
