"""Runtime initialization for the multi-model MCP server.

Call init_runtime() once at process startup, before building providers.
stdout carries the JSON-RPC stream, so logging is pinned to stderr.
"""

import logging
import sys
import threading
from typing import Optional

from dotenv import load_dotenv

from .config import load_config_from_env, set_config

logger = logging.getLogger(__name__)
_initialized = False
_init_lock = threading.Lock()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def init_runtime(log_level: Optional[str] = None) -> None:
    """Initialize runtime environment.

    This function:
    1. Loads environment variables from .env file
    2. Initializes the global configuration repository
    3. Optionally configures logging (always to stderr)

    Thread-safe and idempotent: once initialized, subsequent calls are
    silently ignored, including log_level settings.

    Args:
        log_level: Optional log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                   If None, logging configuration is not modified.

    Raises:
        ValueError: If an invalid log_level is provided.
    """
    global _initialized

    if _initialized:
        logger.debug("Runtime already initialized, skipping")
        return

    with _init_lock:
        if _initialized:
            logger.debug("Runtime already initialized (detected in lock), skipping")
            return

        try:
            # Logging first so config warnings reach stderr with the right level
            if log_level:
                numeric_level = getattr(logging, log_level.upper(), None)
                if not isinstance(numeric_level, int):
                    raise ValueError(f"Invalid log level: {log_level}")
                logging.basicConfig(level=numeric_level, stream=sys.stderr, format=LOG_FORMAT)

            load_dotenv()

            config = load_config_from_env()
            set_config(config)

            _initialized = True
            logger.debug("Runtime initialized successfully")
        except Exception:
            from .config import reset_config

            reset_config()
            raise


def is_initialized() -> bool:
    return _initialized


def reset_runtime() -> None:
    """Reset initialization state (for testing purposes only)."""
    global _initialized
    _initialized = False
