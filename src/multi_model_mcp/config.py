"""Application configuration repository.

Centralizes access to configuration values loaded from environment variables.
Provider API keys set here are treated as explicit overrides and are consulted
before the platform secret store.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_ANTHROPIC_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_OPENAI_MODEL = "gpt-4-turbo-preview"
DEFAULT_GEMINI_MODEL = "gemini-1.5-pro"


@dataclass
class AppConfig:
    """Application configuration container.

    Values are typically loaded from environment variables during
    initialization (see load_config_from_env()).
    """

    # API key overrides
    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    google_api_key: Optional[str] = None

    # Default model per provider, used when a tool call names no model
    anthropic_model: str = DEFAULT_ANTHROPIC_MODEL
    openai_model: str = DEFAULT_OPENAI_MODEL
    gemini_model: str = DEFAULT_GEMINI_MODEL

    # Outbound HTTP settings
    provider_timeout_seconds: float = 30.0
    provider_connect_timeout_seconds: float = 10.0

    # stdin liveness check; an idle read only logs, it never disconnects
    stdin_idle_timeout_seconds: float = 60.0

    # Look up credentials in the system keyring when no override is set
    keyring_enabled: bool = True

    def default_model_for(self, provider_name: str) -> Optional[str]:
        """Return the configured default model for a provider name, if any."""
        return {
            "anthropic": self.anthropic_model,
            "openai": self.openai_model,
            "gemini": self.gemini_model,
        }.get(provider_name)

    def validate(self) -> list[str]:
        """Validate configuration and return list of warnings."""
        issues = []

        if self.provider_timeout_seconds <= 0:
            issues.append(f"Invalid PROVIDER_TIMEOUT_SECONDS: {self.provider_timeout_seconds}")

        if self.provider_connect_timeout_seconds <= 0:
            issues.append(
                "Invalid PROVIDER_CONNECT_TIMEOUT_SECONDS: "
                f"{self.provider_connect_timeout_seconds}"
            )

        if self.stdin_idle_timeout_seconds <= 0:
            issues.append(
                f"Invalid STDIN_IDLE_TIMEOUT_SECONDS: {self.stdin_idle_timeout_seconds}"
            )

        return issues


# Global configuration instance (set once at startup)
_config: Optional[AppConfig] = None


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables.

    Returns:
        AppConfig: Configuration instance populated from environment variables.
    """

    def _get_env_float(key: str, default: float) -> float:
        """Safely parse float from environment variable with fallback."""
        val_str = os.getenv(key)
        if val_str is None:
            return default
        try:
            return float(val_str)
        except (ValueError, TypeError):
            logger.warning(f"Invalid value for {key}: '{val_str}'. Using default value: {default}.")
            return default

    keyring_enabled_str = os.getenv("MCP_KEYRING_ENABLED", "true").lower()
    keyring_enabled = keyring_enabled_str in ("true", "1", "yes")

    config = AppConfig(
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        google_api_key=os.getenv("GOOGLE_API_KEY") or None,
        anthropic_model=os.getenv("ANTHROPIC_MODEL", DEFAULT_ANTHROPIC_MODEL),
        openai_model=os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL),
        gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        provider_timeout_seconds=_get_env_float("PROVIDER_TIMEOUT_SECONDS", 30.0),
        provider_connect_timeout_seconds=_get_env_float("PROVIDER_CONNECT_TIMEOUT_SECONDS", 10.0),
        stdin_idle_timeout_seconds=_get_env_float("STDIN_IDLE_TIMEOUT_SECONDS", 60.0),
        keyring_enabled=keyring_enabled,
    )

    for issue in config.validate():
        logger.warning(issue)

    return config


def set_config(config: AppConfig) -> None:
    """Set the global configuration instance.

    Raises:
        RuntimeError: If configuration has already been set.
    """
    global _config
    if _config is not None:
        raise RuntimeError("Configuration already set. Call reset_config() first.")
    _config = config
    logger.debug("Configuration initialized")


def get_config() -> AppConfig:
    """Get the global configuration instance.

    Raises:
        RuntimeError: If configuration has not been initialized.
                     Call init_runtime() first.
    """
    if _config is None:
        raise RuntimeError(
            "Configuration not initialized. Call init_runtime() at application startup."
        )
    return _config


def reset_config() -> None:
    """Reset configuration state (for testing purposes only)."""
    global _config
    _config = None


def is_config_initialized() -> bool:
    return _config is not None
