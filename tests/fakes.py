"""In-process provider doubles shared by the test modules."""

from typing import List, Optional

from multi_model_mcp.errors import ProviderError
from multi_model_mcp.providers.base import (
    CompletionRequest,
    CompletionResponse,
    LLMProvider,
    UsageInfo,
)


class FakeProvider(LLMProvider):
    """Records requests and answers with canned content."""

    def __init__(
        self,
        name: str,
        models: Optional[List[str]] = None,
        content: str = "fake output",
        fail_with: Optional[str] = None,
    ):
        self.name = name
        self._models = models if models is not None else [f"{name}-model-1"]
        self._content = content
        self._fail_with = fail_with
        self.requests: List[CompletionRequest] = []

    def complete(self, request: CompletionRequest) -> CompletionResponse:
        self.requests.append(request)
        if self._fail_with:
            raise ProviderError(self.name, self._fail_with)
        return CompletionResponse(
            content=self._content,
            model=request.model,
            usage=UsageInfo(input_tokens=10, output_tokens=20),
        )

    def list_models(self) -> List[str]:
        if self._fail_with:
            raise ProviderError(self.name, self._fail_with)
        return list(self._models)
