import pytest

from multi_model_mcp.config import AppConfig
from multi_model_mcp.context import ConversationContext
from multi_model_mcp.registry import ProviderRegistry
from multi_model_mcp.tools import ToolExecutor
from tests.fakes import FakeProvider


def pytest_configure(config):
    """Initialize runtime before test collection (pytest plugin hook)."""
    from multi_model_mcp.runtime import init_runtime, is_initialized

    if not is_initialized():
        init_runtime()


@pytest.fixture(autouse=True)
def ensure_config_initialized():
    """Ensure configuration is initialized before each test."""
    from multi_model_mcp.config import (
        is_config_initialized,
        load_config_from_env,
        set_config,
    )

    # If config was reset by a previous test, reinitialize it
    if not is_config_initialized():
        config = load_config_from_env()
        set_config(config)

    yield


# ========================================
# Shared test fixtures
# ========================================


@pytest.fixture
def app_config():
    """Default configuration, independent of the caller's environment."""
    return AppConfig()


@pytest.fixture
def anthropic_fake():
    return FakeProvider("anthropic", models=["claude-a", "claude-b"], content="from anthropic")


@pytest.fixture
def openai_fake():
    return FakeProvider("openai", models=["gpt-x"], content="from openai")


@pytest.fixture
def registry(anthropic_fake, openai_fake):
    return ProviderRegistry([anthropic_fake, openai_fake])


@pytest.fixture
def conversation_context():
    return ConversationContext()


@pytest.fixture
def executor(registry, conversation_context, app_config):
    return ToolExecutor(registry, conversation_context, app_config)
