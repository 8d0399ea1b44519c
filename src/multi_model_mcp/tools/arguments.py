"""Helpers for parsing ``tools/call`` arguments.

Arguments arrive as decoded JSON. A JSON ``null`` for an optional field is
treated the same as an absent field. Shape problems raise ToolArgumentError.
"""

from typing import Any, Dict, List, Optional

from ..config import AppConfig
from ..errors import ToolArgumentError

FALLBACK_MODEL = "default"


def ensure_object(arguments: Any, tool: str) -> Dict[str, Any]:
    """Return ``arguments`` as a dict; ``None`` becomes an empty dict."""
    if arguments is None:
        return {}
    if not isinstance(arguments, dict):
        raise ToolArgumentError(
            f"Invalid arguments for {tool}: expected an object, got {type(arguments).__name__}"
        )
    return arguments


def require_str(args: Dict[str, Any], key: str) -> str:
    value = args.get(key)
    if value is None:
        raise ToolArgumentError(f"missing field `{key}`")
    if not isinstance(value, str):
        raise ToolArgumentError(f"invalid type for `{key}`: expected a string")
    return value


def optional_str(args: Dict[str, Any], key: str) -> Optional[str]:
    value = args.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ToolArgumentError(f"invalid type for `{key}`: expected a string")
    return value


def optional_str_list(args: Dict[str, Any], key: str) -> List[str]:
    value = args.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ToolArgumentError(f"invalid type for `{key}`: expected a list of strings")
    return list(value)


def optional_int(args: Dict[str, Any], key: str, default: int) -> int:
    value = args.get(key)
    if value is None:
        return default
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ToolArgumentError(f"invalid type for `{key}`: expected an integer")
    return value


def optional_bool(args: Dict[str, Any], key: str, default: bool) -> bool:
    value = args.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ToolArgumentError(f"invalid type for `{key}`: expected a boolean")
    return value


def resolve_model(explicit: Optional[str], provider_name: str, config: AppConfig) -> str:
    """Explicit model, else the provider's configured default, else a literal fallback."""
    if explicit:
        return explicit
    return config.default_model_for(provider_name) or FALLBACK_MODEL
