"""Uniform result envelope returned by every agent operation."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, model_validator

from .errors import ErrorKind, NavbotError

NOT_STARTED_MESSAGE = "Agent not started. Call start first."


class ToolResult(BaseModel):
    """``{success, data, error}`` envelope plus a machine-readable ``kind``."""

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = Field(default=None, description="Human-readable failure message.")
    kind: Optional[ErrorKind] = None

    @model_validator(mode="after")
    def _check_shape(self) -> "ToolResult":
        if self.success:
            if self.error is not None or self.kind is not None:
                raise ValueError("successful results cannot carry an error.")
        else:
            if self.data is not None:
                raise ValueError("failed results cannot carry data.")
            if not self.error:
                raise ValueError("failed results need an error message.")
        return self

    @classmethod
    def ok(cls, data: Any = None) -> "ToolResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str) -> "ToolResult":
        return cls(success=False, error=message, kind=kind)

    @classmethod
    def from_error(cls, exc: NavbotError) -> "ToolResult":
        return cls.fail(exc.kind, exc.message)

    @classmethod
    def not_started(cls) -> "ToolResult":
        return cls.fail(ErrorKind.NOT_STARTED, NOT_STARTED_MESSAGE)

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire form with absent fields dropped."""
        return self.model_dump(mode="json", exclude_none=True)


__all__ = ["ToolResult", "NOT_STARTED_MESSAGE"]
