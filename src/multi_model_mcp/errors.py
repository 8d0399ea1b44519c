"""Exception hierarchy for the multi-model MCP server.

Tool handlers raise these; the request dispatcher turns them into JSON-RPC
error objects. Nothing here is retried.
"""

# Reserved JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603


class MultiModelMCPError(Exception):
    """Base class for all errors raised by this package."""


class JsonRpcError(MultiModelMCPError):
    """Protocol-level failure that maps directly onto a JSON-RPC error object."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class ToolArgumentError(MultiModelMCPError):
    """Tool arguments are missing, mistyped or out of range."""


class ProviderError(MultiModelMCPError):
    """A remote provider call failed or returned an unusable body."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class FilesystemError(MultiModelMCPError):
    """A filesystem scan could not start."""


class AccessDeniedError(FilesystemError):
    """A relative path resolved outside the workspace root."""


class PathNotFoundError(FilesystemError):
    """The requested scan root does not exist."""


class StartupError(MultiModelMCPError):
    """The server cannot start serving (e.g. no provider is configured)."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code
