"""Navbot: a single-page browser automation agent served over MCP."""

from ._version import __version__
from .app import app
from .browser import AgentManager, BrowserAgent, ToolResult
from .fetch import fetch_page
from .mcp import configure_browser_agent, mcp

__all__ = [
    "AgentManager",
    "BrowserAgent",
    "ToolResult",
    "fetch_page",
    "mcp",
    "configure_browser_agent",
    "app",
    "__version__",
]
