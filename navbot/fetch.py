"""Browser-less page retrieval over plain HTTP.

`fetch_page` never touches the browser agent, so it can run while no
Chromium instance is up and concurrently with browser operations.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from ._version import __version__
from .browser.content import document_text, first_words, page_title, parse_document
from .browser.errors import ErrorKind
from .browser.result import ToolResult

USER_AGENT = f"navbot/{__version__}"
FETCH_TIMEOUT_S = 30.0
MAX_WORDS = 2000

logger = logging.getLogger(__name__)


async def fetch_page(
    url: str,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ToolResult:
    """GET ``url`` and return its title plus the first words of its body text."""
    logger.info("fetch_page call: %s", {"url": url})
    if not url or not url.strip():
        return ToolResult.fail(ErrorKind.VALIDATION, "url must be a non-empty string.")
    target = url.strip()
    try:
        async with httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=FETCH_TIMEOUT_S,
            follow_redirects=True,
            transport=transport,
        ) as client:
            response = await client.get(target)
    except httpx.InvalidURL as exc:
        logger.info("fetch_page rejected %r: %s", target, exc)
        return ToolResult.fail(ErrorKind.VALIDATION, f"Invalid URL: {exc}")
    except httpx.HTTPError as exc:
        logger.warning("Request to %s failed: %s", target, exc)
        return ToolResult.fail(ErrorKind.HTTP, f"Request failed: {exc}")

    if not response.is_success:
        message = f"HTTP error: {response.status_code} {response.reason_phrase}".rstrip()
        logger.info("fetch_page failed: %s", message)
        return ToolResult.fail(ErrorKind.HTTP, message)

    document = parse_document(response.text)
    text = first_words(document_text(document), MAX_WORDS)
    result = {"url": target, "title": page_title(document), "text": text}
    logger.info(
        "fetch_page result: %s",
        {"url": target, "title": result["title"], "text": f"<{len(text)} chars>"},
    )
    return ToolResult.ok(result)


__all__ = ["fetch_page", "USER_AGENT"]
