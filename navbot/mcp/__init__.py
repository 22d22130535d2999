"""FastMCP server exposing the navbot agent as remote tools."""

from .server import configure_browser_agent, mcp

__all__ = ["mcp", "configure_browser_agent"]
