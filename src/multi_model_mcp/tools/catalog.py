"""Static tool catalog returned by ``tools/list``.

The schemas are descriptive only; each tool validates its own arguments.
"""

from typing import Any, Dict, List

from .local_map import DEFAULT_DEPTH, DEFAULT_PATH, MAX_DEPTH, MIN_DEPTH

_EMPTY_SCHEMA: Dict[str, Any] = {"type": "object", "properties": {}}

TOOL_CATALOG: List[Dict[str, Any]] = [
    {
        "name": "generate_code",
        "description": "Generate code based on a prompt",
        "inputSchema": {
            "type": "object",
            "properties": {
                "prompt": {"type": "string", "description": "Code generation prompt"},
                "language": {"type": "string", "description": "Programming language"},
                "context": {"type": "array", "items": {"type": "string"}},
                "model": {"type": "string", "description": "Specific model to use"},
            },
            "required": ["prompt"],
        },
    },
    {
        "name": "review_code",
        "description": "Review code for issues and improvements",
        "inputSchema": {
            "type": "object",
            "properties": {
                "code": {"type": "string", "description": "Code to review"},
                "language": {"type": "string", "description": "Programming language"},
                "focus": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Areas to focus on (security, performance, style)",
                },
                "model": {"type": "string", "description": "Specific model to use"},
            },
            "required": ["code"],
        },
    },
    {
        "name": "switch_model",
        "description": "Switch between AI providers (anthropic/openai/gemini)",
        "inputSchema": {
            "type": "object",
            "properties": {
                "provider": {
                    "type": "string",
                    "description": "Provider name: anthropic, openai or gemini",
                },
                "model": {"type": "string", "description": "Specific model (optional)"},
            },
            "required": ["provider"],
        },
    },
    {
        "name": "list_models",
        "description": "List all available models from all providers",
        "inputSchema": _EMPTY_SCHEMA,
    },
    {
        "name": "add_context",
        "description": "Add context (files, notes, metadata) to the conversation",
        "inputSchema": {
            "type": "object",
            "properties": {
                "type": {"type": "string", "enum": ["file", "note", "metadata"]},
                "path": {"type": "string"},
                "content": {"type": "string"},
                "note": {"type": "string"},
                "key": {"type": "string"},
                "value": {"type": "string"},
            },
            "required": ["type"],
        },
    },
    {
        "name": "get_context",
        "description": "Get all context for the current conversation",
        "inputSchema": _EMPTY_SCHEMA,
    },
    {
        "name": "clear_context",
        "description": "Clear all conversation context",
        "inputSchema": _EMPTY_SCHEMA,
    },
    {
        "name": "local_map",
        "description": (
            "List files and directories under a path (breadth-first, skips hidden "
            "entries, node_modules and .git; limited to 8000 entries and 2 seconds)"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "path": {
                    "type": "string",
                    "description": "Directory to scan; relative paths stay inside the workspace",
                    "default": DEFAULT_PATH,
                },
                "depth": {
                    "type": "integer",
                    "minimum": MIN_DEPTH,
                    "maximum": MAX_DEPTH,
                    "default": DEFAULT_DEPTH,
                },
                "follow_symlinks": {"type": "boolean", "default": False},
            },
        },
    },
]


def tool_names() -> List[str]:
    return [tool["name"] for tool in TOOL_CATALOG]
