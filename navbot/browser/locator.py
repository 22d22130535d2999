"""Resolve a caller's selector or text hint to a live page element."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from playwright.sync_api import ElementHandle, Error, Page, TimeoutError

from .errors import ElementNotFound, InvalidLocator, ValidationError

Strategy = Literal["selector", "text"]


@dataclass(frozen=True)
class Target:
    """A resolved addressing strategy plus the query handed to Playwright."""

    strategy: Strategy
    value: str
    query: str

    def describe(self) -> str:
        if self.strategy == "text":
            return f"text {self.value!r}"
        return self.value


def xpath_literal(text: str) -> str:
    """Quote ``text`` as an XPath 1.0 string literal.

    XPath has no escape sequences, so text containing both quote styles is
    split into a ``concat()`` of single-quoted and double-quoted parts.
    """
    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    parts = []
    for index, chunk in enumerate(text.split("'")):
        if index:
            parts.append('"\'"')
        if chunk:
            parts.append(f"'{chunk}'")
    return "concat(" + ", ".join(parts) + ")"


def text_query(text: str) -> str:
    return f"xpath=//*[contains(text(), {xpath_literal(text)})]"


def resolve_target(selector: Optional[str] = None, text: Optional[str] = None) -> Target:
    """Pick the addressing strategy; ``selector`` wins when both are given."""
    if selector:
        return Target(strategy="selector", value=selector, query=selector)
    if text:
        return Target(strategy="text", value=text, query=text_query(text))
    raise ValidationError("Must provide selector or text")


def find_element(page: Page, target: Target, *, timeout_ms: Optional[float] = None) -> ElementHandle:
    """Wait for ``target`` to be attached and return its first match."""
    kwargs = {"state": "attached"}
    if timeout_ms is not None:
        kwargs["timeout"] = timeout_ms
    try:
        element = page.wait_for_selector(target.query, **kwargs)
    except TimeoutError as exc:
        raise ElementNotFound(str(exc)) from exc
    except Error as exc:
        raise InvalidLocator(f"Invalid selector {target.describe()}: {exc}") from exc
    if element is None:
        raise ElementNotFound(f"no element matches {target.describe()}")
    return element


__all__ = [
    "Target",
    "xpath_literal",
    "text_query",
    "resolve_target",
    "find_element",
]
