"""generate_code tool: ask the current provider to write code."""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from ..config import AppConfig
from ..providers.base import CompletionRequest, Message
from ..registry import ProviderRegistry
from .arguments import ensure_object, optional_str, optional_str_list, require_str, resolve_model
from .result import ToolResult

logger = logging.getLogger(__name__)

TEMPERATURE = 0.7
MAX_TOKENS = 4096


@dataclass
class GenerateCodeArgs:
    prompt: str
    language: Optional[str] = None
    context: List[str] = field(default_factory=list)
    model: Optional[str] = None

    @classmethod
    def from_arguments(cls, arguments: Any) -> "GenerateCodeArgs":
        args = ensure_object(arguments, "generate_code")
        return cls(
            prompt=require_str(args, "prompt"),
            language=optional_str(args, "language"),
            context=optional_str_list(args, "context"),
            model=optional_str(args, "model"),
        )


def build_messages(args: GenerateCodeArgs) -> List[Message]:
    language = args.language or "generic"
    system_message = (
        f"You are an expert {language} developer. "
        "Generate clean, efficient, and well-documented code."
    )

    if args.context:
        system_message += "\n\nContext:\n"
        for item in args.context:
            system_message += f"- {item}\n"

    return [
        Message(role="system", content=system_message),
        Message(role="user", content=args.prompt),
    ]


def execute(arguments: Any, registry: ProviderRegistry, config: AppConfig) -> ToolResult:
    args = GenerateCodeArgs.from_arguments(arguments)

    # Read the cell once so the model default and the call use the same provider
    provider = registry.current
    request = CompletionRequest(
        messages=build_messages(args),
        model=resolve_model(args.model, provider.name, config),
        max_tokens=MAX_TOKENS,
        temperature=TEMPERATURE,
    )

    logger.info("generate_code via %s (model=%s)", provider.name, request.model)
    response = provider.complete(request)

    return ToolResult.ok(
        {
            "code": response.content,
            "model": response.model,
            "usage": response.usage_dict(),
        }
    )
