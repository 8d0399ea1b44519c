"""Base classes for LLM providers

This module defines the provider-neutral request/response types and the
abstract interface that every remote backend adapter implements.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import httpx


@dataclass(frozen=True)
class Message:
    role: str
    content: str


@dataclass(frozen=True)
class UsageInfo:
    input_tokens: int
    output_tokens: int


@dataclass(frozen=True)
class CompletionRequest:
    messages: List[Message]
    model: str
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None


@dataclass(frozen=True)
class CompletionResponse:
    content: str
    model: str
    usage: Optional[UsageInfo] = field(default=None)

    def usage_dict(self) -> Optional[Dict[str, int]]:
        return asdict(self.usage) if self.usage is not None else None


def split_system_prompt(messages: List[Message]) -> Tuple[Optional[str], List[Message]]:
    """Separate system messages from the conversation turns.

    Anthropic and Gemini take the system prompt as a dedicated parameter
    rather than as a message.

    Returns:
        (system_text or None, remaining messages in order)
    """
    system_parts = [m.content for m in messages if m.role == "system"]
    turns = [m for m in messages if m.role != "system"]
    system_text = "\n\n".join(system_parts) if system_parts else None
    return system_text, turns


def build_http_timeout(timeout: float, connect_timeout: float) -> httpx.Timeout:
    """Overall/connect timeout pair shared by the httpx-based SDK clients."""
    return httpx.Timeout(timeout, connect=connect_timeout)


class LLMProvider(ABC):
    """Abstract base class for LLM providers

    Providers are immutable once constructed. ``name`` is the identity used
    for switching and for tagging listed models.
    """

    name: str = ""

    @abstractmethod
    def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Send a single non-streaming completion request.

        Raises:
            ProviderError: If the backend call fails or returns an unusable body.
        """
        pass

    @abstractmethod
    def list_models(self) -> List[str]:
        """Return model identifiers offered by this provider.

        Raises:
            ProviderError: If the model catalog cannot be fetched.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def to_wire_messages(messages: List[Message]) -> List[Dict[str, Any]]:
    """Convert messages to the ``{"role", "content"}`` dicts most SDKs accept."""
    return [{"role": m.role, "content": m.content} for m in messages]
