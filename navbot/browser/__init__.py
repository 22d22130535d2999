"""Browser agent, lifecycle manager and the helpers they share."""

from .core import BrowserAgent
from .errors import ErrorKind
from .manager import AgentManager
from .result import ToolResult

__all__ = ["AgentManager", "BrowserAgent", "ErrorKind", "ToolResult"]
