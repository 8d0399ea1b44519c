"""Google Gemini provider implementation (google.genai SDK)"""

import logging
from typing import List

import google.genai as genai
import httpx
from google.genai import errors as genai_errors
from google.genai import types

from ..errors import ProviderError
from .base import (
    CompletionRequest,
    CompletionResponse,
    LLMProvider,
    UsageInfo,
    split_system_prompt,
)

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    """Google Gemini provider

    The google.genai client only exposes a single request timeout
    (milliseconds), so the connect timeout is folded into it.
    """

    def __init__(self, api_key: str, timeout: float = 30.0, connect_timeout: float = 10.0):
        self.name = "gemini"
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout * 1000)),
        )

    @staticmethod
    def _to_contents(messages) -> List[types.Content]:
        """Gemini uses 'model' for assistant turns."""
        return [
            types.Content(
                role="model" if m.role == "assistant" else "user",
                parts=[types.Part(text=m.content)],
            )
            for m in messages
        ]

    def complete(self, request: CompletionRequest) -> CompletionResponse:
        system_prompt, turns = split_system_prompt(request.messages)

        config = types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=request.temperature,
            max_output_tokens=request.max_tokens,
        )

        logger.debug("Gemini completion request: model=%s", request.model)
        try:
            response = self._client.models.generate_content(
                model=request.model, contents=self._to_contents(turns), config=config
            )
        except (genai_errors.APIError, httpx.HTTPError) as e:
            raise ProviderError(self.name, f"API error: {e}") from e

        usage = None
        metadata = response.usage_metadata
        if metadata is not None:
            usage = UsageInfo(
                input_tokens=metadata.prompt_token_count or 0,
                output_tokens=metadata.candidates_token_count or 0,
            )

        return CompletionResponse(
            content=response.text or "",
            model=response.model_version or request.model,
            usage=usage,
        )

    def list_models(self) -> List[str]:
        try:
            models = list(self._client.models.list())
        except (genai_errors.APIError, httpx.HTTPError) as e:
            raise ProviderError(self.name, f"Failed to list models: {e}") from e

        names = []
        for model in models:
            actions = model.supported_actions or []
            if "generateContent" not in actions:
                continue
            # API returns "models/<id>"; callers pass the bare id back in
            names.append(model.name.removeprefix("models/"))
        return names
