"""Provider credential resolution.

Credentials are resolved per provider by an ordered chain of strategies:
explicit override (environment / .env via AppConfig) first, then the platform
secret store through ``keyring``. The first strategy that finds a secret wins;
when none does, the provider is simply not configured.
"""

import getpass
import json
import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import keyring
from keyring.errors import KeyringError

from .config import AppConfig

logger = logging.getLogger(__name__)

# Provider names in the order the registry should offer them
PROVIDER_NAMES = ("anthropic", "openai", "gemini")

# (service, username) keyring entries tried in order per provider.
# A username of None means "the current OS user".
KEYRING_ENTRIES: Dict[str, List[Tuple[str, Optional[str]]]] = {
    "anthropic": [("Claude Code-credentials", None)],
    "openai": [("OpenAI-OAuth", "oauth-token"), ("devsecops-orchestrator", "OPENAI_API_KEY")],
    "gemini": [("multi-model-mcp", "GOOGLE_API_KEY")],
}


def _current_username() -> str:
    try:
        return getpass.getuser()
    except (OSError, KeyError):
        logger.warning("Could not determine username, using 'default'")
        return "default"


def _extract_oauth_access_token(raw: str) -> Optional[str]:
    """Pull the access token out of a Claude OAuth JSON blob.

    Plain (non-JSON) secrets are returned unchanged.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return raw
    if not isinstance(data, dict):
        return None
    oauth = data.get("claudeAiOauth")
    if isinstance(oauth, dict) and isinstance(oauth.get("accessToken"), str):
        return oauth["accessToken"]
    logger.debug("Keyring entry is JSON but has no claudeAiOauth.accessToken")
    return None


class CredentialStrategy(ABC):
    """One step of the resolution chain."""

    name = "strategy"

    @abstractmethod
    def lookup(self, provider: str) -> Optional[str]:
        """Return the secret for ``provider`` or None when not found."""


class EnvironmentStrategy(CredentialStrategy):
    """Explicit overrides from the environment (ANTHROPIC_API_KEY etc.)."""

    name = "environment"

    def __init__(self, config: AppConfig):
        self._keys = {
            "anthropic": config.anthropic_api_key,
            "openai": config.openai_api_key,
            "gemini": config.google_api_key,
        }

    def lookup(self, provider: str) -> Optional[str]:
        return self._keys.get(provider) or None


class KeyringStrategy(CredentialStrategy):
    """Secrets stored in the platform keychain / secret service."""

    name = "keyring"

    def __init__(self, entries: Optional[Dict[str, List[Tuple[str, Optional[str]]]]] = None):
        self._entries = entries if entries is not None else KEYRING_ENTRIES

    def lookup(self, provider: str) -> Optional[str]:
        for service, username in self._entries.get(provider, []):
            user = username or _current_username()
            try:
                secret = keyring.get_password(service, user)
            except KeyringError as e:
                # No usable backend (headless Linux, locked keychain, ...)
                logger.debug("Could not access keyring for %s/%s: %s", service, user, e)
                continue
            if not secret:
                logger.debug("No keyring entry for %s/%s", service, user)
                continue
            if provider == "anthropic":
                secret = _extract_oauth_access_token(secret)
                if not secret:
                    continue
            return secret
        return None


class CredentialResolver:
    """Runs the strategy chain for every known provider."""

    def __init__(self, strategies: Sequence[CredentialStrategy]):
        self._strategies = list(strategies)

    @classmethod
    def from_config(cls, config: AppConfig) -> "CredentialResolver":
        strategies: List[CredentialStrategy] = [EnvironmentStrategy(config)]
        if config.keyring_enabled:
            strategies.append(KeyringStrategy())
        return cls(strategies)

    def resolve(self, provider: str) -> Optional[str]:
        for strategy in self._strategies:
            secret = strategy.lookup(provider)
            if secret:
                logger.debug("Loaded %s credentials from %s", provider, strategy.name)
                return secret
        return None

    def resolve_all(self, providers: Sequence[str] = PROVIDER_NAMES) -> Iterator[Tuple[str, str]]:
        """Yield ``(provider, secret)`` for each provider that has credentials."""
        for provider in providers:
            secret = self.resolve(provider)
            if secret is None:
                logger.info("No %s credentials found", provider)
                continue
            yield provider, secret
