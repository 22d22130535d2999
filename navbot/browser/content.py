"""HTML parsing helpers used by the text and link extraction primitives.

Markup is always read fresh from the live page and parsed here with
BeautifulSoup; nothing is cached between calls.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from .errors import InvalidLocator
from .urls import resolve_href

TRUNCATION_MARKER = "... [truncated]"
HTML_PARSER = "html.parser"


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", HTML_PARSER)


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run to a single space and trim the ends."""
    return " ".join(text.split())


def element_text(element: Tag) -> str:
    return element.get_text()


def select_all(root: Tag, selector: str) -> List[Tag]:
    """Run a CSS query, raising :class:`InvalidLocator` on bad syntax."""
    try:
        return list(root.select(selector))
    except (SelectorSyntaxError, ValueError, NotImplementedError) as exc:
        raise InvalidLocator(f"Invalid selector: {selector}") from exc


def select_first(root: Tag, selector: str) -> Optional[Tag]:
    matches = select_all(root, selector)
    return matches[0] if matches else None


def document_text(document: BeautifulSoup, selector: Optional[str] = None) -> str:
    """Return the collapsed text of ``selector`` matches, or of ``<body>``.

    Text of multiple matches is joined with single spaces before collapsing.
    """
    if selector:
        elements = select_all(document, selector)
    else:
        elements = [document.body or document]
    raw = " ".join(element_text(el) for el in elements)
    return collapse_whitespace(raw)


def truncate_text(text: str, max_length: int) -> str:
    if len(text) > max_length:
        return text[:max_length] + TRUNCATION_MARKER
    return text


def link_container(document: BeautifulSoup, selector: Optional[str] = None) -> Optional[Tag]:
    """Return the element links are collected from.

    An unknown or unparsable ``selector`` yields ``None`` so the caller
    reports zero links instead of failing.
    """
    if not selector:
        return document.body or document
    try:
        return select_first(document, selector)
    except InvalidLocator:
        return None


def collect_links(
    container: Optional[Tag],
    *,
    base_url: str,
    max_links: int,
) -> List[Dict[str, str]]:
    """Return up to ``max_links`` anchors in document order."""
    if container is None or max_links <= 0:
        return []
    links: List[Dict[str, str]] = []
    for anchor in container.select("a[href]", limit=max_links):
        href = anchor.get("href")
        if href is None:
            continue
        links.append(
            {
                "text": element_text(anchor).strip(),
                "href": resolve_href(str(href), base_url),
            }
        )
    return links


def page_title(document: BeautifulSoup) -> str:
    title = document.find("title")
    return title.get_text() if title is not None else ""


def first_words(text: str, limit: int) -> str:
    """Keep the first ``limit`` whitespace-delimited tokens of ``text``."""
    return " ".join(text.split()[:limit])


__all__ = [
    "TRUNCATION_MARKER",
    "parse_document",
    "collapse_whitespace",
    "select_all",
    "select_first",
    "document_text",
    "truncate_text",
    "link_container",
    "collect_links",
    "page_title",
    "first_words",
]
