"""Multi-model MCP server: JSON-RPC tools backed by interchangeable LLM providers."""

__version__ = "0.1.0"
