"""Error taxonomy shared by the browser helpers.

Helpers raise these exceptions; :class:`~navbot.browser.core.BrowserAgent`
turns them into :class:`~navbot.browser.result.ToolResult` envelopes before
anything is returned to a caller.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure categories reported in an envelope."""

    SETUP = "setup"
    NOT_STARTED = "not_started"
    LOCATOR = "locator"
    ACTION = "action"
    VALIDATION = "validation"
    TIMEOUT = "timeout"
    HTTP = "http"
    UNEXPECTED = "unexpected"


class NavbotError(Exception):
    """Base class for errors that map onto an :class:`ErrorKind`."""

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AgentSetupError(NavbotError):
    kind = ErrorKind.SETUP


class ValidationError(NavbotError):
    kind = ErrorKind.VALIDATION


class LocatorError(NavbotError):
    kind = ErrorKind.LOCATOR


class ElementNotFound(LocatorError):
    """No element matched before the locator timeout expired."""


class InvalidLocator(LocatorError):
    """The driver rejected the query (syntax error, unsupported engine)."""


__all__ = [
    "ErrorKind",
    "NavbotError",
    "AgentSetupError",
    "ValidationError",
    "LocatorError",
    "ElementNotFound",
    "InvalidLocator",
]
