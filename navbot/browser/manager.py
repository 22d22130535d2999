"""Lifecycle owner for the single live :class:`BrowserAgent`.

The manager holds zero or one agent behind a lock.  ``start``/``stop`` and
every primitive dispatched through :meth:`AgentManager.call` run one at a
time, end to end.  Playwright's sync API must stay on the thread that
started it, so all driver work runs on one dedicated worker thread.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import AbstractContextManager
from threading import Lock
from typing import Any, Callable, Optional, TypeVar

from playwright.sync_api import Error

from ..config import AgentSettings
from .core import BrowserAgent
from .errors import ErrorKind, NavbotError
from .result import ToolResult

OPERATIONS = frozenset(
    {
        "navigate",
        "extract_text",
        "extract_links",
        "click",
        "fill_form",
        "screenshot",
        "scroll",
        "wait",
        "wait_for_element",
        "sleep",
        "get_page_info",
        "evaluate_js",
    }
)

Launcher = Callable[..., BrowserAgent]
T = TypeVar("T")

logger = logging.getLogger(__name__)


class AgentManager(AbstractContextManager["AgentManager"]):
    """Own, start, stop and serialize access to one browser agent."""

    def __init__(
        self,
        settings: Optional[AgentSettings] = None,
        *,
        launcher: Optional[Launcher] = None,
    ) -> None:
        self._settings = settings or AgentSettings()
        self._launcher: Launcher = launcher or BrowserAgent.launch
        self._agent: Optional[BrowserAgent] = None
        self._lock = Lock()
        self._executor: Optional[ThreadPoolExecutor] = None

    # ------------------------------------------------------------------ #
    # Lifecycle helpers
    # ------------------------------------------------------------------ #

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.shutdown()

    @property
    def settings(self) -> AgentSettings:
        return self._settings

    @property
    def is_running(self) -> bool:
        return self._agent is not None

    def start(self, headless: Optional[bool] = None) -> ToolResult:
        """Launch the browser unless one is already running."""
        use_headless = self._settings.headless if headless is None else headless
        with self._lock:
            if self._agent is not None:
                logger.info("start ignored: agent already running")
                return ToolResult.ok({"message": "Agent already running"})
            try:
                agent = self._run_on_driver(self._launcher, self._settings, headless=use_headless)
            except NavbotError as exc:
                logger.error("Agent start failed: %s", exc.message)
                return ToolResult.fail(ErrorKind.SETUP, exc.message)
            except Exception as exc:
                logger.exception("Agent start failed")
                return ToolResult.fail(ErrorKind.SETUP, f"Failed to launch browser: {exc}")
            self._agent = agent
        logger.info("Agent started (headless=%s)", use_headless)
        return ToolResult.ok({"message": "Agent started", "headless": use_headless})

    def stop(self) -> ToolResult:
        """Tear the agent down; always reports success."""
        with self._lock:
            agent, self._agent = self._agent, None
            if agent is not None:
                try:
                    self._run_on_driver(agent.close)
                except Exception:
                    logger.warning("Ignoring error during agent teardown", exc_info=True)
                logger.info("Agent stopped")
        return ToolResult.ok({"message": "Agent stopped"})

    def configure(self, settings: AgentSettings) -> None:
        """Replace the launch settings, stopping any running agent first."""
        self.stop()
        with self._lock:
            self._settings = settings

    def shutdown(self) -> None:
        """Stop the agent and release the driver thread."""
        self.stop()
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #

    def call(self, method: str, *args: Any, **kwargs: Any) -> ToolResult:
        """Run the named primitive against the live agent."""
        if method not in OPERATIONS:
            return ToolResult.fail(ErrorKind.VALIDATION, f"Unknown operation: {method}")
        with self._lock:
            if self._agent is None:
                return ToolResult.not_started()
            operation = getattr(self._agent, method)
            try:
                return self._run_on_driver(operation, *args, **kwargs)
            except NavbotError as exc:
                return ToolResult.from_error(exc)
            except Error as exc:
                logger.exception("%s raised a driver error", method)
                return ToolResult.fail(ErrorKind.ACTION, str(exc))
            except Exception as exc:
                logger.exception("%s raised unexpectedly", method)
                return ToolResult.fail(ErrorKind.UNEXPECTED, f"{type(exc).__name__}: {exc}")

    def _run_on_driver(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="navbot-driver")
        return self._executor.submit(func, *args, **kwargs).result()


__all__ = ["AgentManager", "OPERATIONS"]
