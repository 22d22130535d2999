"""Module path for MCP hosts that load ``mcp_server:mcp``.

Running this file directly starts the stdio server, same as ``navbot-mcp``.
"""

from navbot.mcp.server import configure_browser_agent, main, mcp

__all__ = ["mcp", "configure_browser_agent"]

if __name__ == "__main__":
    main()
