"""OpenAI provider implementation"""

import logging
from typing import List

import openai

from ..errors import ProviderError
from .base import (
    CompletionRequest,
    CompletionResponse,
    LLMProvider,
    UsageInfo,
    build_http_timeout,
    to_wire_messages,
)

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """OpenAI chat-completions provider (thread-safe)

    The OpenAI client is thread-safe, so concurrent requests can share the
    same client instance. SDK retries are disabled; failures surface at once.
    """

    def __init__(self, api_key: str, timeout: float = 30.0, connect_timeout: float = 10.0):
        self.name = "openai"
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=build_http_timeout(timeout, connect_timeout),
            max_retries=0,
        )

    def complete(self, request: CompletionRequest) -> CompletionResponse:
        api_params = {"model": request.model, "messages": to_wire_messages(request.messages)}
        if request.max_tokens is not None:
            api_params["max_tokens"] = request.max_tokens
        if request.temperature is not None:
            api_params["temperature"] = request.temperature

        logger.debug("OpenAI completion request: model=%s", request.model)
        try:
            response = self._client.chat.completions.create(**api_params)
        except openai.APIError as e:
            raise ProviderError(self.name, f"API error: {e}") from e

        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""

        usage = None
        if response.usage is not None:
            usage = UsageInfo(
                input_tokens=response.usage.prompt_tokens,
                output_tokens=response.usage.completion_tokens,
            )

        return CompletionResponse(content=content, model=response.model, usage=usage)

    def list_models(self) -> List[str]:
        try:
            models = self._client.models.list()
        except openai.APIError as e:
            raise ProviderError(self.name, f"Failed to list models: {e}") from e

        # Only chat models are useful for the code tools
        return [model.id for model in models if model.id.startswith("gpt-")]
