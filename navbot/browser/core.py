"""Browser automation primitives for a single live Chromium page.

A `BrowserAgent` wraps one Playwright browser, context and page.  Every
public method performs one automation primitive and returns a
:class:`~navbot.browser.result.ToolResult`; driver exceptions are caught
here and never escape to the caller.  Lifecycle and locking live in
:mod:`navbot.browser.manager`.
"""

from __future__ import annotations

import base64
import logging
import time
from typing import Any, Callable, Dict, Mapping, Optional

from playwright.sync_api import (
    Browser,
    BrowserContext,
    Error,
    Page,
    Playwright,
    TimeoutError,
    sync_playwright,
)

from ..config import AgentSettings
from .content import (
    collect_links,
    document_text,
    link_container,
    parse_document,
    truncate_text,
)
from .errors import AgentSetupError, ErrorKind, LocatorError, NavbotError, ValidationError
from .locator import find_element, resolve_target
from .result import ToolResult

DEFAULT_MAX_LENGTH = 8000
DEFAULT_MAX_LINKS = 50
DEFAULT_WAIT_TIMEOUT_MS = 5000
DEFAULT_SCROLL_AMOUNT = 500

CLICK_SETTLE_MS = 500
SUBMIT_SETTLE_MS = 1000
SCROLL_SETTLE_MS = 300

SCROLL_DIRECTIONS = ("up", "down", "top", "bottom")
SCREENSHOT_PREFIX = "data:image/png;base64,"

DESCRIPTION_SCRIPT = """
() => {
    const meta = document.querySelector('meta[name="description"]');
    return meta ? (meta.getAttribute('content') || '') : '';
}
"""

logger = logging.getLogger(__name__)


def _settle(delay_ms: int) -> None:
    time.sleep(delay_ms / 1000)


def _close_quietly(label: str, closer: Callable[[], Any]) -> None:
    try:
        closer()
    except Exception:
        logger.warning("Ignoring error while closing %s", label, exc_info=True)


class BrowserAgent:
    """Automation primitives bound to one Playwright page.

    Use :meth:`launch` to start Chromium.  Tests and embedders that already
    own a page may construct the agent directly; in that case only the
    handles that were passed in are closed by :meth:`close`.
    """

    def __init__(
        self,
        page: Page,
        *,
        context: Optional[BrowserContext] = None,
        browser: Optional[Browser] = None,
        playwright: Optional[Playwright] = None,
    ) -> None:
        self._page = page
        self._context = context
        self._browser = browser
        self._playwright = playwright

    # ------------------------------------------------------------------ #
    # Lifecycle helpers
    # ------------------------------------------------------------------ #

    @classmethod
    def launch(
        cls,
        settings: Optional[AgentSettings] = None,
        *,
        headless: Optional[bool] = None,
    ) -> "BrowserAgent":
        """Start Playwright, launch Chromium and open a single page."""
        settings = settings or AgentSettings()
        use_headless = settings.headless if headless is None else headless
        try:
            playwright = sync_playwright().start()
        except Exception as exc:
            raise AgentSetupError(f"Failed to start Playwright: {exc}") from exc

        try:
            browser = playwright.chromium.launch(
                headless=use_headless,
                args=list(settings.launch_args),
            )
        except Exception as exc:
            _close_quietly("playwright", playwright.stop)
            raise AgentSetupError(f"Failed to launch browser: {exc}") from exc

        try:
            context = browser.new_context(**settings.context_options())
            context.set_default_timeout(settings.default_timeout_ms)
            page = context.new_page()
        except Exception as exc:
            _close_quietly("browser", browser.close)
            _close_quietly("playwright", playwright.stop)
            raise AgentSetupError(f"Failed to create tab: {exc}") from exc

        logger.info("Launched Chromium (headless=%s)", use_headless)
        return cls(page, context=context, browser=browser, playwright=playwright)

    @property
    def page(self) -> Page:
        return self._page

    def close(self) -> None:
        """Tear down page, context, browser and Playwright; never raises."""
        _close_quietly("page", self._page.close)
        if self._context is not None:
            _close_quietly("context", self._context.close)
            self._context = None
        if self._browser is not None:
            _close_quietly("browser", self._browser.close)
            self._browser = None
        if self._playwright is not None:
            _close_quietly("playwright", self._playwright.stop)
            self._playwright = None

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def navigate(self, url: str) -> ToolResult:
        """Load ``url`` and block until the page reports ``load``."""
        self._log_call("navigate", url=url)
        target = (url or "").strip()
        if not target:
            return self._failure("navigate", ErrorKind.VALIDATION, "url must be a non-empty string.")
        try:
            self._page.goto(target)
        except Error as exc:
            return self._failure("navigate", ErrorKind.ACTION, f"Navigation failed: {exc}")
        return self._success("navigate", {"navigated_to": target, "final_url": self._page.url})

    def extract_text(
        self,
        selector: Optional[str] = None,
        max_length: int = DEFAULT_MAX_LENGTH,
    ) -> ToolResult:
        """Return collapsed text for ``selector`` (or the body), clamped to ``max_length``."""
        self._log_call("extract_text", selector=selector, max_length=max_length)
        if max_length < 0:
            return self._failure("extract_text", ErrorKind.VALIDATION, "max_length must be non-negative.")
        html = self._read_content("extract_text")
        if isinstance(html, ToolResult):
            return html
        try:
            text = document_text(parse_document(html), selector)
        except NavbotError as exc:
            return self._failure("extract_text", exc.kind, exc.message)
        clamped = truncate_text(text, max_length)
        return self._success("extract_text", {"text": clamped, "length": len(clamped)})

    def extract_links(
        self,
        selector: Optional[str] = None,
        max_links: int = DEFAULT_MAX_LINKS,
    ) -> ToolResult:
        """Return up to ``max_links`` anchors inside ``selector`` (or the body)."""
        self._log_call("extract_links", selector=selector, max_links=max_links)
        if max_links < 0:
            return self._failure("extract_links", ErrorKind.VALIDATION, "max_links must be non-negative.")
        html = self._read_content("extract_links")
        if isinstance(html, ToolResult):
            return html
        document = parse_document(html)
        container = link_container(document, selector)
        links = collect_links(container, base_url=self._page.url, max_links=max_links)
        return self._success("extract_links", {"links": links, "count": len(links)})

    def click(self, selector: Optional[str] = None, text: Optional[str] = None) -> ToolResult:
        """Click the element addressed by ``selector`` or by its ``text``."""
        self._log_call("click", selector=selector, text=text)
        try:
            target = resolve_target(selector, text)
        except ValidationError as exc:
            return self._failure("click", exc.kind, exc.message)
        try:
            element = find_element(self._page, target)
        except LocatorError as exc:
            if target.strategy == "text":
                message = f"Element with text '{target.value}' not found: {exc.message}"
            else:
                message = f"Element not found: {exc.message}"
            return self._failure("click", exc.kind, message)
        try:
            element.click()
        except Error as exc:
            return self._failure("click", ErrorKind.ACTION, f"Click failed: {exc}")
        _settle(CLICK_SETTLE_MS)
        key = "clicked_text" if target.strategy == "text" else "clicked"
        return self._success("click", {key: target.value})

    def fill_form(self, selector: str, value: str, submit: bool = False) -> ToolResult:
        """Focus the input at ``selector``, type ``value`` and optionally press Enter."""
        self._log_call("fill_form", selector=selector, submit=submit, value_length=len(value or ""))
        if not selector:
            return self._failure("fill_form", ErrorKind.VALIDATION, "selector must be a non-empty string.")
        try:
            element = find_element(self._page, resolve_target(selector=selector))
        except LocatorError as exc:
            return self._failure("fill_form", exc.kind, f"Input not found: {exc.message}")
        try:
            element.click()
        except Error as exc:
            return self._failure("fill_form", ErrorKind.ACTION, f"Failed to focus input: {exc}")
        try:
            element.type(value or "")
        except Error as exc:
            return self._failure("fill_form", ErrorKind.ACTION, f"Failed to type: {exc}")
        if submit:
            try:
                self._page.keyboard.press("Enter")
            except Error as exc:
                return self._failure("fill_form", ErrorKind.ACTION, f"Failed to submit: {exc}")
            _settle(SUBMIT_SETTLE_MS)
        return self._success(
            "fill_form",
            {"filled": selector, "value": value or "", "submitted": bool(submit)},
        )

    def screenshot(self, full_page: bool = False) -> ToolResult:
        """Capture the viewport (or the whole page) as a PNG data URI."""
        self._log_call("screenshot", full_page=full_page)
        try:
            data = self._page.screenshot(full_page=full_page, type="png")
        except Error as exc:
            return self._failure("screenshot", ErrorKind.ACTION, f"Screenshot failed: {exc}")
        encoded = base64.b64encode(data).decode("ascii")
        return self._success(
            "screenshot",
            {"screenshot": f"{SCREENSHOT_PREFIX}{encoded}", "size": len(data)},
        )

    def scroll(self, direction: str, amount: Optional[int] = None) -> ToolResult:
        """Scroll ``up``/``down`` by ``amount`` pixels or jump to ``top``/``bottom``."""
        self._log_call("scroll", direction=direction, amount=amount)
        if direction not in SCROLL_DIRECTIONS:
            allowed = ", ".join(SCROLL_DIRECTIONS)
            return self._failure(
                "scroll",
                ErrorKind.VALIDATION,
                f"Invalid direction: {direction} (expected one of {allowed})",
            )
        step = DEFAULT_SCROLL_AMOUNT if amount is None else amount
        if direction in ("up", "down") and step < 0:
            return self._failure("scroll", ErrorKind.VALIDATION, "amount must be non-negative.")
        if direction == "up":
            script = f"window.scrollBy(0, -{step})"
        elif direction == "down":
            script = f"window.scrollBy(0, {step})"
        elif direction == "top":
            script = "window.scrollTo(0, 0)"
        else:
            script = "window.scrollTo(0, document.body.scrollHeight)"
        try:
            self._page.evaluate(script)
        except Error as exc:
            return self._failure("scroll", ErrorKind.ACTION, f"Scroll failed: {exc}")
        _settle(SCROLL_SETTLE_MS)
        result: Dict[str, Any] = {"scrolled": direction}
        if direction in ("up", "down"):
            result["amount"] = step
        return self._success("scroll", result)

    def wait_for_element(self, selector: str, timeout_ms: int = DEFAULT_WAIT_TIMEOUT_MS) -> ToolResult:
        """Poll until ``selector`` is attached, failing after ``timeout_ms``."""
        self._log_call("wait_for_element", selector=selector, timeout_ms=timeout_ms)
        if not selector:
            return self._failure("wait_for_element", ErrorKind.VALIDATION, "selector must be a non-empty string.")
        if timeout_ms < 0:
            return self._failure("wait_for_element", ErrorKind.VALIDATION, "timeout_ms must be non-negative.")
        try:
            self._page.wait_for_selector(selector, state="attached", timeout=timeout_ms)
        except TimeoutError:
            return self._failure("wait_for_element", ErrorKind.TIMEOUT, f"Timeout waiting for: {selector}")
        except Error as exc:
            return self._failure("wait_for_element", ErrorKind.LOCATOR, f"Invalid selector {selector}: {exc}")
        return self._success("wait_for_element", {"found": selector})

    def sleep(self, timeout_ms: int = DEFAULT_WAIT_TIMEOUT_MS) -> ToolResult:
        """Pause for ``timeout_ms`` milliseconds regardless of page state."""
        self._log_call("sleep", timeout_ms=timeout_ms)
        if timeout_ms < 0:
            return self._failure("sleep", ErrorKind.VALIDATION, "timeout_ms must be non-negative.")
        _settle(timeout_ms)
        return self._success("sleep", {"waited_ms": timeout_ms})

    def wait(self, selector: Optional[str] = None, timeout_ms: int = DEFAULT_WAIT_TIMEOUT_MS) -> ToolResult:
        """Dispatch to :meth:`wait_for_element` or :meth:`sleep`.

        Kept for callers of the combined operation; remote clients use the
        two explicit tools instead.
        """
        if selector:
            return self.wait_for_element(selector, timeout_ms)
        return self.sleep(timeout_ms)

    def get_page_info(self) -> ToolResult:
        """Return the URL, title and meta description, degrading field by field."""
        self._log_call("get_page_info")
        info: Dict[str, Any] = {"url": self._page.url}
        try:
            title = self._page.evaluate("document.title")
            info["title"] = title if isinstance(title, str) else str(title)
        except Error:
            logger.debug("Could not read document.title", exc_info=True)
            info["title"] = "Unknown"
        try:
            description = self._page.evaluate(DESCRIPTION_SCRIPT)
        except Error:
            logger.debug("Could not read meta description", exc_info=True)
            description = None
        if isinstance(description, str) and description.strip():
            info["description"] = description
        return self._success("get_page_info", info)

    def evaluate_js(self, script: str) -> ToolResult:
        """Evaluate ``script`` in the page and return its value verbatim."""
        self._log_call("evaluate_js", script_length=len(script or ""))
        if not script or not isinstance(script, str):
            return self._failure("evaluate_js", ErrorKind.VALIDATION, "script must be a non-empty string.")
        try:
            outcome = self._page.evaluate(script)
        except Error as exc:
            return self._failure("evaluate_js", ErrorKind.ACTION, f"JS evaluation failed: {exc}")
        return self._success("evaluate_js", {"result": outcome})

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _read_content(self, action: str) -> str | ToolResult:
        try:
            return self._page.content()
        except Error as exc:
            return self._failure(action, ErrorKind.ACTION, f"Failed to get page content: {exc}")

    def _success(self, action: str, data: Mapping[str, Any]) -> ToolResult:
        self._log_result(action, data)
        return ToolResult.ok(dict(data))

    def _failure(self, action: str, kind: ErrorKind, message: str) -> ToolResult:
        logger.info("%s failed (%s): %s", action, kind.value, message)
        return ToolResult.fail(kind, message)

    def _log_call(self, action: str, **kwargs: Any) -> None:
        logger.info("%s call: %s", action, {k: v for k, v in kwargs.items() if v is not None})

    def _log_result(self, action: str, result: Mapping[str, Any]) -> None:
        summary: Dict[str, Any] = {}
        for key, value in result.items():
            if key == "screenshot" and isinstance(value, str):
                summary[key] = f"<{len(value)} chars>"
            elif key == "links" and isinstance(value, list):
                summary[key] = f"<{len(value)} links>"
            elif key == "text" and isinstance(value, str) and len(value) > 200:
                summary[key] = f"<{len(value)} chars>"
            else:
                summary[key] = value
        logger.info("%s result: %s", action, summary)


__all__ = [
    "BrowserAgent",
    "DEFAULT_MAX_LENGTH",
    "DEFAULT_MAX_LINKS",
    "DEFAULT_WAIT_TIMEOUT_MS",
    "SCROLL_DIRECTIONS",
]
