"""Resolve link targets scraped from a page against the page's own URL."""

from __future__ import annotations

import logging
import re
from urllib.parse import urlsplit

# RFC 3986 scheme: ALPHA *( ALPHA / DIGIT / "+" / "-" / "." ) ":"
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")

logger = logging.getLogger(__name__)


def has_scheme(href: str) -> bool:
    return bool(_SCHEME_RE.match(href))


def resolve_href(href: str, base_url: str) -> str:
    """Return ``href`` in absolute form where the base URL allows it.

    Absolute URLs pass through. Origin-relative (``/path``) and
    protocol-relative (``//host/path``) references are rebuilt from the
    scheme and host of ``base_url``. Path-relative references (``page.html``,
    ``./x``, ``../x``), fragments and query-only references are returned
    unchanged; callers relying on that behaviour should not expect them to
    be joined.
    """
    href = href.strip()
    if not href or has_scheme(href):
        return href
    if not href.startswith("/"):
        return href

    try:
        base = urlsplit(base_url)
    except ValueError:
        logger.debug("Could not parse base URL %r; leaving %r as-is", base_url, href)
        return href
    if not base.scheme or not base.netloc:
        return href

    if href.startswith("//"):
        return f"{base.scheme}:{href}"
    return f"{base.scheme}://{base.netloc}{href}"


__all__ = ["resolve_href", "has_scheme"]
