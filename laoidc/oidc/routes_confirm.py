"""Landing endpoints for one-time email login links."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from laoidc.core.deps import get_email_link
from laoidc.oidc.capabilities import EmailLinkCapability
from laoidc.oidc.form_post import NO_STORE_HEADERS
from laoidc.oidc.templating import templates

router = APIRouter()

CONFIRM_PATH = "/confirm"
HTTP_NOT_FOUND = 404
LINK_EXPIRED_TEXT = "This login link is invalid or has expired."


def _link_expired() -> PlainTextResponse:
    return PlainTextResponse(LINK_EXPIRED_TEXT, status_code=HTTP_NOT_FOUND)


@router.get(CONFIRM_PATH + "/{token}", response_model=None)
async def show_login_link(
    request: Request,
    token: str,
    email_link: Annotated[EmailLinkCapability | None, Depends(get_email_link)],
) -> HTMLResponse | PlainTextResponse:
    """GET /confirm/{token} -- ask the user to approve the pending sign-in.

    Fetching the link leaves the sign-in pending, so link scanners and
    prefetchers cannot complete it.
    """
    client_id = email_link.pending_client(token) if email_link is not None else None
    if client_id is None:
        return _link_expired()
    return templates.TemplateResponse(
        request,
        "confirm_login.html",
        {"client_id": client_id, "confirm_path": f"{CONFIRM_PATH}/{token}"},
        headers=NO_STORE_HEADERS,
    )


@router.post(CONFIRM_PATH + "/{token}")
async def confirm_login_link(
    token: str,
    email_link: Annotated[EmailLinkCapability | None, Depends(get_email_link)],
) -> PlainTextResponse:
    """POST /confirm/{token} -- complete a pending email link sign-in."""
    if email_link is None or not email_link.confirm(token):
        return _link_expired()
    return PlainTextResponse("You are signed in. You may close this tab.")
