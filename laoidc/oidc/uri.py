"""URI and origin checks guarding where tokens may be delivered.

Accepted URIs are absolute ``http``/``https`` URLs with a plain hostname or
IPv4 address, an optional non-default port, and no userinfo. IPv6 literals
are not supported.
"""

import re
from urllib.parse import SplitResult, urlsplit

_DEFAULT_PORTS = {"http": "80", "https": "443"}
_AUTHORITY_RE = re.compile(r"[-.a-zA-Z0-9]+(?::(?P<port>[0-9]+))?")
_UNSAFE_CHARS_RE = re.compile(r"[\x00-\x20\x7f]")


def _split(uri: str) -> SplitResult | None:
    """Parse a URI, or return None when it cannot be parsed."""
    if _UNSAFE_CHARS_RE.search(uri):
        return None
    try:
        return urlsplit(uri)
    except ValueError:
        return None


def _is_valid_split(uri: str, parts: SplitResult) -> bool:
    if parts.scheme not in _DEFAULT_PORTS:
        return False
    # Hierarchical only: "http:example.com" carries opaque data, not a host.
    if not uri[len(parts.scheme) + 1 :].startswith("//"):
        return False
    if "@" in parts.netloc:
        return False
    match = _AUTHORITY_RE.fullmatch(parts.netloc)
    if match is None:
        return False
    return match.group("port") != _DEFAULT_PORTS[parts.scheme]


def is_valid_uri(uri: str) -> bool:
    """Return True if uri is an acceptable absolute HTTP(S) URL."""
    parts = _split(uri)
    return parts is not None and _is_valid_split(uri, parts)


def is_origin_only(uri: str) -> bool:
    """Return True if uri is exactly scheme://host[:port]."""
    parts = _split(uri)
    if parts is None or not _is_valid_split(uri, parts):
        return False
    # Anything past the authority is a path, query, or fragment, even if empty.
    return len(uri) == len(parts.scheme) + len("://") + len(parts.netloc)


def is_contained_by(uri: str, origin: str) -> bool:
    """Return True if uri lies within origin.

    Compares the parsed scheme and authority, so hosts such as
    ``example.com.evil.com`` or ``example.com@evil.com`` never match
    ``http://example.com``.
    """
    if not is_valid_uri(uri) or not is_origin_only(origin):
        return False
    target = urlsplit(uri)
    allowed = urlsplit(origin)
    return target.scheme == allowed.scheme and target.netloc == allowed.netloc
