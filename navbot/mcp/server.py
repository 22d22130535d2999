"""FastMCP server that exposes the navbot agent operations as tools."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Sequence

from fastmcp import FastMCP

from navbot.browser.core import (
    DEFAULT_MAX_LENGTH,
    DEFAULT_MAX_LINKS,
    DEFAULT_WAIT_TIMEOUT_MS,
)
from navbot.browser.errors import ErrorKind
from navbot.browser.manager import AgentManager
from navbot.browser.result import ToolResult
from navbot.config import AgentSettings, configure_logging, load_settings
from navbot.fetch import fetch_page as _fetch_page

mcp = FastMCP(name="navbot-browser")

_manager = AgentManager(load_settings())

logger = logging.getLogger(__name__)


def configure_browser_agent(
    settings: Optional[AgentSettings] = None,
    *,
    headless: Optional[bool] = None,
) -> None:
    """Set the agent launch settings and stop any running browser."""
    new_settings = settings or _manager.settings
    if headless is not None:
        new_settings = new_settings.with_overrides(headless=headless)
    _manager.configure(new_settings)


def get_manager() -> AgentManager:
    return _manager


def _call_with_errors(
    method: str,
    args: Sequence[Any],
    kwargs: Dict[str, Any],
) -> Dict[str, Any]:
    try:
        if method == "start":
            result = _manager.start(*args, **kwargs)
        elif method == "stop":
            result = _manager.stop()
        else:
            result = _manager.call(method, *args, **kwargs)
    except Exception as exc:
        logger.exception("%s failed at the dispatch layer", method)
        result = ToolResult.fail(ErrorKind.UNEXPECTED, f"{method}: {exc}")
    return result.to_dict()


async def _run_agent(method: str, *args: Any, **kwargs: Any) -> Dict[str, Any]:
    return await asyncio.to_thread(_call_with_errors, method, args, kwargs)


@mcp.tool
async def start(headless: Optional[bool] = None) -> Dict[str, Any]:
    """Launch Chromium with a single page; a no-op when already running."""
    return await _run_agent("start", headless=headless)


@mcp.tool
async def stop() -> Dict[str, Any]:
    """Close the browser; always succeeds."""
    return await _run_agent("stop")


@mcp.tool
async def navigate(url: str) -> Dict[str, Any]:
    """Navigate the active page to ``url`` and wait for it to load."""
    return await _run_agent("navigate", url)


@mcp.tool
async def extract_text(
    selector: Optional[str] = None,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> Dict[str, Any]:
    """Extract whitespace-collapsed text for ``selector`` or the page body."""
    return await _run_agent("extract_text", selector=selector, max_length=max_length)


@mcp.tool
async def extract_links(
    selector: Optional[str] = None,
    max_links: int = DEFAULT_MAX_LINKS,
) -> Dict[str, Any]:
    """List anchors inside ``selector`` (or the body) with absolute hrefs."""
    return await _run_agent("extract_links", selector=selector, max_links=max_links)


@mcp.tool
async def click(
    selector: Optional[str] = None,
    text: Optional[str] = None,
) -> Dict[str, Any]:
    """Click an element found by CSS ``selector`` or by contained ``text``."""
    return await _run_agent("click", selector=selector, text=text)


@mcp.tool
async def fill_form(
    selector: str,
    value: str,
    submit: bool = False,
) -> Dict[str, Any]:
    """Type ``value`` into the input at ``selector``, pressing Enter if ``submit``."""
    return await _run_agent("fill_form", selector, value, submit=submit)


@mcp.tool
async def screenshot(full_page: bool = False) -> Dict[str, Any]:
    """Capture the page as a base64 PNG data URI."""
    return await _run_agent("screenshot", full_page=full_page)


@mcp.tool
async def scroll(direction: str, amount: Optional[int] = None) -> Dict[str, Any]:
    """Scroll ``up``/``down`` by ``amount`` pixels or to the ``top``/``bottom``."""
    return await _run_agent("scroll", direction, amount=amount)


@mcp.tool
async def wait_for_element(
    selector: str,
    timeout_ms: int = DEFAULT_WAIT_TIMEOUT_MS,
) -> Dict[str, Any]:
    """Wait until ``selector`` appears, failing after ``timeout_ms``."""
    return await _run_agent("wait_for_element", selector, timeout_ms=timeout_ms)


@mcp.tool
async def sleep(timeout_ms: int = DEFAULT_WAIT_TIMEOUT_MS) -> Dict[str, Any]:
    """Pause for ``timeout_ms`` milliseconds."""
    return await _run_agent("sleep", timeout_ms=timeout_ms)


@mcp.tool
async def get_page_info() -> Dict[str, Any]:
    """Return the current URL, title and meta description."""
    return await _run_agent("get_page_info")


@mcp.tool
async def evaluate_js(script: str) -> Dict[str, Any]:
    """Evaluate arbitrary JavaScript in the page and return the result."""
    return await _run_agent("evaluate_js", script)


@mcp.tool
async def fetch_page(url: str) -> Dict[str, Any]:
    """Fetch ``url`` over plain HTTP without the browser and summarize it."""
    try:
        result = await _fetch_page(url)
    except Exception as exc:
        logger.exception("fetch_page failed at the dispatch layer")
        result = ToolResult.fail(ErrorKind.UNEXPECTED, f"fetch_page: {exc}")
    return result.to_dict()


def main() -> None:
    """Run the Navbot MCP server using settings from the environment."""
    configure_logging(_manager.settings.log_level)
    try:
        mcp.run()
    finally:
        _manager.shutdown()


__all__ = [
    "mcp",
    "configure_browser_agent",
    "get_manager",
    "start",
    "stop",
    "navigate",
    "extract_text",
    "extract_links",
    "click",
    "fill_form",
    "screenshot",
    "scroll",
    "wait_for_element",
    "sleep",
    "get_page_info",
    "evaluate_js",
    "fetch_page",
    "main",
]
