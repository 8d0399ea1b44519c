"""LLM Provider implementations

This package contains the remote backend adapters. They share a common
interface so the registry and tools can treat them uniformly.
"""

from .anthropic import AnthropicProvider
from .base import CompletionRequest, CompletionResponse, LLMProvider, Message, UsageInfo
from .gemini import GeminiProvider
from .openai import OpenAIProvider

__all__ = [
    "LLMProvider",
    "AnthropicProvider",
    "OpenAIProvider",
    "GeminiProvider",
    "Message",
    "CompletionRequest",
    "CompletionResponse",
    "UsageInfo",
    "PROVIDER_CLASSES",
]

# Registry order: the first successfully configured provider becomes current
PROVIDER_CLASSES = {
    "anthropic": AnthropicProvider,
    "openai": OpenAIProvider,
    "gemini": GeminiProvider,
}
