"""Provider registry and runtime switching.

The set of available providers is fixed after startup. The only mutable
provider-related state is the "current provider" cell, which is guarded by a
reader/writer lock so a read never observes a half-applied switch.
"""

import logging
from typing import Dict, List, Optional, Sequence

from .errors import ToolArgumentError
from .locks import ReadWriteLock
from .providers.base import LLMProvider

logger = logging.getLogger(__name__)


class ProviderNotFoundError(ToolArgumentError):
    """Requested provider is not among the configured ones."""


class ProviderRegistry:
    """Holds the configured providers and the current selection."""

    def __init__(self, providers: Sequence[LLMProvider]):
        if not providers:
            raise ValueError("ProviderRegistry requires at least one provider")
        self._available: tuple = tuple(providers)
        self._current: LLMProvider = self._available[0]
        self._lock = ReadWriteLock()

    @property
    def available(self) -> List[LLMProvider]:
        return list(self._available)

    def names(self) -> List[str]:
        return [p.name for p in self._available]

    def get(self, name: str) -> Optional[LLMProvider]:
        """Case-insensitive lookup among the configured providers."""
        wanted = name.lower()
        for provider in self._available:
            if provider.name.lower() == wanted:
                return provider
        return None

    @property
    def current(self) -> LLMProvider:
        with self._lock.read_locked():
            return self._current

    def switch_current(self, provider_name: str, model: Optional[str] = None) -> Dict[str, str]:
        """Make ``provider_name`` the current provider.

        ``model`` is informational only: it is echoed back in the message but
        neither validated nor remembered. Tools that need a specific model
        must pass it on each call.

        Raises:
            ProviderNotFoundError: If no configured provider has that name.
                The current provider is left unchanged.
        """
        provider = self.get(provider_name)
        if provider is None:
            raise ProviderNotFoundError(
                f"Provider '{provider_name}' not found or not configured"
            )

        with self._lock.write_locked():
            previous = self._current
            self._current = provider

        logger.info("Switched provider: %s -> %s", previous.name, provider.name)

        if model:
            message = f"Switched to provider '{provider_name}' with model '{model}'"
        else:
            message = f"Switched to provider '{provider_name}' (using default model)"
        return {"message": message, "provider": provider_name}

    def list_models(self) -> List[Dict[str, str]]:
        """List models of every provider, tagged with the provider name.

        A failure from any provider propagates; partial results are discarded.
        """
        all_models = []
        for provider in self._available:
            for model in provider.list_models():
                all_models.append({"provider": provider.name, "model": model})
        return all_models
