"""Anthropic provider implementation"""

import logging
from typing import List

import anthropic

from ..errors import ProviderError
from .base import (
    CompletionRequest,
    CompletionResponse,
    LLMProvider,
    UsageInfo,
    build_http_timeout,
    split_system_prompt,
    to_wire_messages,
)

logger = logging.getLogger(__name__)

# The Messages API requires max_tokens on every request
DEFAULT_MAX_TOKENS = 4096

KNOWN_MODELS = [
    "claude-3-5-sonnet-20241022",
    "claude-3-5-haiku-20241022",
    "claude-3-opus-20240229",
    "claude-3-sonnet-20240229",
    "claude-3-haiku-20240307",
]


class AnthropicProvider(LLMProvider):
    """Anthropic Messages API provider"""

    def __init__(self, api_key: str, timeout: float = 30.0, connect_timeout: float = 10.0):
        self.name = "anthropic"
        self._client = anthropic.Anthropic(
            api_key=api_key,
            timeout=build_http_timeout(timeout, connect_timeout),
            max_retries=0,
        )

    def complete(self, request: CompletionRequest) -> CompletionResponse:
        system_prompt, turns = split_system_prompt(request.messages)

        api_params = {
            "model": request.model,
            "messages": to_wire_messages(turns),
            "max_tokens": request.max_tokens or DEFAULT_MAX_TOKENS,
        }
        if system_prompt:
            api_params["system"] = system_prompt
        if request.temperature is not None:
            api_params["temperature"] = request.temperature

        logger.debug("Anthropic completion request: model=%s", request.model)
        try:
            response = self._client.messages.create(**api_params)
        except anthropic.APIError as e:
            raise ProviderError(self.name, f"API error: {e}") from e

        # Tool-use and thinking blocks carry no text
        content = "\n".join(
            block.text for block in response.content if getattr(block, "text", None)
        )

        return CompletionResponse(
            content=content,
            model=response.model,
            usage=UsageInfo(
                input_tokens=response.usage.input_tokens,
                output_tokens=response.usage.output_tokens,
            ),
        )

    def list_models(self) -> List[str]:
        return list(KNOWN_MODELS)
