"""
HarTap Common Utilities

Small helpers shared by the redaction engine, the converter and the loader.
"""

import json
from typing import Any, Iterable, Optional


def safe_json_parse(json_string: Optional[str], default: Any = None) -> Any:
    """
    Safely parse JSON string with error handling.

    Args:
        json_string: JSON string to parse
        default: Default value to return if parsing fails

    Returns:
        Parsed JSON object, or default if parsing fails

    Example:
        body = safe_json_parse(entry.response.content.text, default={})
    """
    if not json_string:
        return default

    try:
        return json.loads(json_string)
    except (json.JSONDecodeError, TypeError, ValueError):
        return default


def looks_like_json(mime_type: Optional[str]) -> bool:
    """Return True if a declared media type names a JSON payload."""
    return bool(mime_type) and 'json' in mime_type.lower()


def header_value(headers: Iterable[Any], name: str) -> Optional[str]:
    """
    Find the first header value with the given name (case-insensitive).

    Args:
        headers: Sequence of objects with ``name`` and ``value`` attributes
        name: Header name to look up

    Returns:
        The header value, or None if the header is absent
    """
    wanted = name.lower()
    for header in headers:
        if header.name.lower() == wanted:
            return header.value
    return None
