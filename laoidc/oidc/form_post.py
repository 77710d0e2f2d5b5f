"""Response delivery through an auto-submitting HTML form (form_post)."""

from collections.abc import Mapping

from fastapi import Request
from fastapi.responses import HTMLResponse

from laoidc.oidc.templating import templates

NO_STORE_HEADERS = {"Cache-Control": "no-store", "Pragma": "no-cache"}


def render_form_post(
    request: Request, redirect_uri: str, fields: Mapping[str, str]
) -> HTMLResponse:
    """Render a page that POSTs fields to redirect_uri from the user agent."""
    return templates.TemplateResponse(
        request,
        "form_post.html",
        {"redirect_uri": redirect_uri, "fields": dict(fields)},
        headers=NO_STORE_HEADERS,
    )
