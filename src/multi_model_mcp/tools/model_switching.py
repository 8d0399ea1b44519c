"""switch_model and list_models tools."""

from typing import Any

from ..registry import ProviderRegistry
from .arguments import ensure_object, optional_str, require_str
from .result import ToolResult


def switch_model(arguments: Any, registry: ProviderRegistry) -> ToolResult:
    args = ensure_object(arguments, "switch_model")
    provider = require_str(args, "provider")
    model = optional_str(args, "model")
    return ToolResult.ok(registry.switch_current(provider, model))


def list_models(registry: ProviderRegistry) -> ToolResult:
    return ToolResult.ok({"models": registry.list_models()})
