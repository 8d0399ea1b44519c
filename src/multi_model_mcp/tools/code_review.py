"""review_code tool: ask the current provider to review a snippet."""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from ..config import AppConfig
from ..providers.base import CompletionRequest, Message
from ..registry import ProviderRegistry
from .arguments import ensure_object, optional_str, optional_str_list, require_str, resolve_model
from .result import ToolResult

logger = logging.getLogger(__name__)

# Lower than generate_code for more focused reviews
TEMPERATURE = 0.3
MAX_TOKENS = 4096

REVIEW_FORMAT = (
    "\n\nProvide your review in the following format:\n"
    "1. **Summary**: Brief overview of code quality\n"
    "2. **Issues**: List any bugs, security concerns, or anti-patterns\n"
    "3. **Improvements**: Suggestions for optimization and better practices\n"
    "4. **Positive**: What the code does well"
)


@dataclass
class ReviewCodeArgs:
    code: str
    language: Optional[str] = None
    focus: List[str] = field(default_factory=list)  # e.g. ["security", "performance"]
    model: Optional[str] = None

    @classmethod
    def from_arguments(cls, arguments: Any) -> "ReviewCodeArgs":
        args = ensure_object(arguments, "review_code")
        return cls(
            code=require_str(args, "code"),
            language=optional_str(args, "language"),
            focus=optional_str_list(args, "focus"),
            model=optional_str(args, "model"),
        )


def build_messages(args: ReviewCodeArgs) -> List[Message]:
    language = args.language or "unknown"
    system_message = (
        f"You are an expert code reviewer specializing in {language}. "
        "Analyze the code for issues, improvements, and best practices."
    )

    if args.focus:
        system_message += "\n\nFocus on these areas:\n"
        for area in args.focus:
            system_message += f"- {area}\n"

    system_message += REVIEW_FORMAT

    user_message = f"Please review this code:\n\n```{language}\n{args.code}\n```"

    return [
        Message(role="system", content=system_message),
        Message(role="user", content=user_message),
    ]


def execute(arguments: Any, registry: ProviderRegistry, config: AppConfig) -> ToolResult:
    args = ReviewCodeArgs.from_arguments(arguments)

    provider = registry.current
    request = CompletionRequest(
        messages=build_messages(args),
        model=resolve_model(args.model, provider.name, config),
        max_tokens=MAX_TOKENS,
        temperature=TEMPERATURE,
    )

    logger.info("review_code via %s (model=%s)", provider.name, request.model)
    response = provider.complete(request)

    return ToolResult.ok(
        {
            "review": response.content,
            "model": response.model,
            "usage": response.usage_dict(),
        }
    )
