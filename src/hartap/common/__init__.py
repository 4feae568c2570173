"""
HarTap Common Utilities

Shared helpers used across HarTap modules.
"""

from .utils import safe_json_parse, looks_like_json, header_value
from .url_utils import URLMatcher

__all__ = [
    'safe_json_parse',
    'looks_like_json',
    'header_value',
    'URLMatcher'
]
