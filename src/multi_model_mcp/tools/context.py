"""add_context / get_context / clear_context tools."""

from typing import Any

from ..context import ConversationContext
from ..errors import ToolArgumentError
from .arguments import ensure_object, require_str
from .result import ToolResult

CONTEXT_TYPES = ("file", "note", "metadata")


def add_context(arguments: Any, context: ConversationContext) -> ToolResult:
    """Add one item to the session context.

    The ``type`` discriminator selects the required fields:
    ``file`` -> path, content; ``note`` -> note; ``metadata`` -> key, value.
    All fields are validated before the store is touched.
    """
    args = ensure_object(arguments, "add_context")
    context_type = require_str(args, "type")

    if context_type == "file":
        path = require_str(args, "path")
        content = require_str(args, "content")
        context.add_file(path, content)
        return ToolResult.ok({"message": f"Added file: {path}"})

    if context_type == "note":
        note = require_str(args, "note")
        context.add_note(note)
        return ToolResult.ok({"message": "Added note to context"})

    if context_type == "metadata":
        key = require_str(args, "key")
        value = require_str(args, "value")
        context.set_metadata(key, value)
        return ToolResult.ok({"message": f"Set metadata: {key} = {value}"})

    raise ToolArgumentError(
        f"unknown context type `{context_type}`, expected one of: {', '.join(CONTEXT_TYPES)}"
    )


def get_context(context: ConversationContext) -> ToolResult:
    return ToolResult.ok(context.snapshot())


def clear_context(context: ConversationContext) -> ToolResult:
    context.clear()
    return ToolResult.ok({"message": "Context cleared"})
