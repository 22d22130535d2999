"""Runtime settings for the browser agent.

Values come from keyword arguments or from ``NAVBOT_*`` environment
variables, optionally loaded from a ``.env`` file with python-dotenv.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

# Args that minimise automation fingerprints when launching Chromium.
DEFAULT_LAUNCH_ARGS: tuple[str, ...] = (
    "--disable-blink-features=AutomationControlled",
    "--disable-dev-shm-usage",
    "--disable-extensions",
    "--disable-gpu",
    "--disable-background-networking",
    "--disable-renderer-backgrounding",
)

DEFAULT_VIEWPORT: Mapping[str, int] = {"width": 1280, "height": 900}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class AgentSettings:
    """Describe how the browser agent launches Chromium."""

    headless: bool = True
    launch_args: tuple[str, ...] = DEFAULT_LAUNCH_ARGS
    default_timeout_ms: int = 30_000
    viewport: Mapping[str, int] = field(default_factory=lambda: dict(DEFAULT_VIEWPORT))
    user_agent: Optional[str] = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.default_timeout_ms <= 0:
            raise ValueError("default_timeout_ms must be positive.")

    def with_overrides(self, **overrides: Any) -> "AgentSettings":
        return replace(self, **overrides)

    def context_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"viewport": dict(self.viewport)}
        if self.user_agent:
            options["user_agent"] = self.user_agent
        return options


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}.")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from exc


def load_settings(env_file: Optional[Path | str] = None) -> AgentSettings:
    """Build :class:`AgentSettings` from the environment.

    ``env_file`` is loaded first when given (existing variables win);
    otherwise python-dotenv searches for a ``.env`` near the working
    directory.
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv()

    overrides: Dict[str, Any] = {}
    headless = os.getenv("NAVBOT_HEADLESS")
    if headless:
        overrides["headless"] = _parse_bool("NAVBOT_HEADLESS", headless)
    timeout = os.getenv("NAVBOT_DEFAULT_TIMEOUT_MS")
    if timeout:
        overrides["default_timeout_ms"] = _parse_int("NAVBOT_DEFAULT_TIMEOUT_MS", timeout)
    launch_args = os.getenv("NAVBOT_LAUNCH_ARGS")
    if launch_args is not None:
        overrides["launch_args"] = tuple(
            arg.strip() for arg in launch_args.split(",") if arg.strip()
        )
    user_agent = os.getenv("NAVBOT_USER_AGENT")
    if user_agent:
        overrides["user_agent"] = user_agent
    log_level = os.getenv("NAVBOT_LOG_LEVEL")
    if log_level:
        overrides["log_level"] = log_level.strip().upper()
    return AgentSettings(**overrides)


def configure_logging(level: str = "INFO") -> None:
    """Install a basic stderr handler for the server and helper scripts."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = [
    "AgentSettings",
    "DEFAULT_LAUNCH_ARGS",
    "load_settings",
    "configure_logging",
]
