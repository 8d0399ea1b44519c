"""Uniform tool request/result types."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ToolRequest:
    tool: str
    arguments: Any = None


@dataclass(frozen=True)
class ToolResult:
    success: bool
    result: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, result: Any) -> "ToolResult":
        return cls(success=True, result=result)

    @classmethod
    def failure(cls, error: str) -> "ToolResult":
        return cls(success=False, result=None, error=error)

    def to_dict(self) -> Dict[str, Any]:
        data = {"success": self.success, "result": self.result}
        if self.error is not None:
            data["error"] = self.error
        return data
