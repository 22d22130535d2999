"""ASGI application serving the navbot tools over streamable HTTP."""

from __future__ import annotations

from fastmcp import FastMCP
from starlette.applications import Starlette

from navbot.mcp import mcp

DEFAULT_HTTP_PATH = "/mcp"


def create_app(path: str = DEFAULT_HTTP_PATH) -> Starlette:
    """Build the ASGI app for uvicorn or a hosted MCP runtime."""
    return mcp.http_app(path=path)


def get_app() -> FastMCP:
    return mcp


app = create_app()
