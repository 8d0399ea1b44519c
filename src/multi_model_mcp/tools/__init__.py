"""Tool dispatch.

ToolExecutor maps a tool name to its handler. Handlers raise on bad
arguments or backend failures; an unknown tool name is the only case
reported as an unsuccessful ToolResult.
"""

import logging
from typing import Any, Callable, Dict, Optional

from ..config import AppConfig, get_config
from ..context import ConversationContext
from ..registry import ProviderRegistry
from . import code_generation, code_review, context as context_tools, local_map, model_switching
from .catalog import TOOL_CATALOG, tool_names
from .result import ToolRequest, ToolResult

__all__ = ["ToolExecutor", "ToolRequest", "ToolResult", "TOOL_CATALOG", "tool_names"]

logger = logging.getLogger(__name__)


class ToolExecutor:
    """Routes tool requests to the registry, the context store or the filesystem."""

    def __init__(
        self,
        registry: ProviderRegistry,
        context: ConversationContext,
        config: Optional[AppConfig] = None,
    ):
        self.registry = registry
        self.context = context
        self.config = config if config is not None else get_config()
        self._handlers: Dict[str, Callable[[Any], ToolResult]] = {
            "generate_code": lambda args: code_generation.execute(args, registry, self.config),
            "review_code": lambda args: code_review.execute(args, registry, self.config),
            "switch_model": lambda args: model_switching.switch_model(args, registry),
            "list_models": lambda args: model_switching.list_models(registry),
            "add_context": lambda args: context_tools.add_context(args, context),
            "get_context": lambda args: context_tools.get_context(context),
            "clear_context": lambda args: context_tools.clear_context(context),
            "local_map": local_map.execute,
        }

    def execute(self, request: ToolRequest) -> ToolResult:
        handler = self._handlers.get(request.tool)
        if handler is None:
            logger.warning("Unknown tool requested: %r", request.tool)
            return ToolResult.failure(f"Unknown tool: {request.tool}")

        logger.debug("Executing tool %s", request.tool)
        return handler(request.arguments)
