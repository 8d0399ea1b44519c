"""Command line entry point: ``multi-model-mcp [--debug]``."""

import argparse
import logging
import sys
from typing import List, Optional

from .config import AppConfig, get_config
from .context import ConversationContext
from .credentials import CredentialResolver
from .errors import StartupError
from .providers import PROVIDER_CLASSES, LLMProvider
from .registry import ProviderRegistry
from .runtime import init_runtime
from .server import RequestDispatcher
from .tools import ToolExecutor

logger = logging.getLogger(__name__)


def build_providers(config: AppConfig, resolver: CredentialResolver) -> List[LLMProvider]:
    """Instantiate every provider that has credentials.

    Raises:
        StartupError: If no provider could be configured.
    """
    providers: List[LLMProvider] = []
    for name, secret in resolver.resolve_all(tuple(PROVIDER_CLASSES)):
        provider_class = PROVIDER_CLASSES[name]
        try:
            provider = provider_class(
                api_key=secret,
                timeout=config.provider_timeout_seconds,
                connect_timeout=config.provider_connect_timeout_seconds,
            )
        except Exception as e:  # noqa: BLE001 - SDK constructors raise assorted types
            logger.error("Failed to initialize %s provider: %s", name, e)
            continue
        logger.info("%s provider initialized", name)
        providers.append(provider)

    if not providers:
        raise StartupError(
            "No providers configured. Set ANTHROPIC_API_KEY, OPENAI_API_KEY or "
            "GOOGLE_API_KEY, or store credentials in the system keyring."
        )
    return providers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="multi-model-mcp",
        description="Multi-Model MCP Server for Anthropic, OpenAI and Gemini",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    init_runtime(log_level="DEBUG" if args.debug else "INFO")
    config = get_config()

    logger.info("Starting Multi-Model MCP Server")

    try:
        providers = build_providers(config, CredentialResolver.from_config(config))
    except StartupError as e:
        logger.error("%s", e)
        return e.exit_code

    registry = ProviderRegistry(providers)
    executor = ToolExecutor(registry, ConversationContext(), config)
    dispatcher = RequestDispatcher(executor, idle_timeout=config.stdin_idle_timeout_seconds)

    logger.info("MCP Server ready. Listening on stdin...")
    return dispatcher.serve_forever()


def run() -> None:
    """Console script wrapper around main()."""
    sys.exit(main())


if __name__ == "__main__":
    run()
