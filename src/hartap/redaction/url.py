"""
URL and query-string redaction.

Identifiers in known resource paths are swapped for named parameters, e.g.
``/api/frames/3fa85f64-.../chores`` becomes ``/api/frames/{frameId}/chores``.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, List, Tuple

from ..common import URLMatcher
from ..har.models import NameValue
from .patterns import PATH_ID_PATTERNS, PII_PATTERNS, REDACTION_PLACEHOLDERS, UUID_EXACT


@dataclass(frozen=True)
class PathParam:
    """An identifier lifted out of a URL path."""

    name: str
    original_value: str


@dataclass(frozen=True)
class RedactedUrl:
    redacted_url: str
    path_params: List[PathParam] = field(default_factory=list)


def redact_url(url: str) -> RedactedUrl:
    """
    Redact a URL by replacing ID values with path parameters.

    Each pattern of PATH_ID_PATTERNS is tried once, in table order, against
    the URL as rewritten by the patterns before it; a match contributes one
    path parameter and its first occurrence is templated. Query values are
    then redacted: UUIDs become the ID placeholder, other values go through
    redact_query_value. URLs that cannot be parsed keep their query as-is.

    Args:
        url: Absolute or relative request URL

    Returns:
        RedactedUrl with the rewritten URL and the extracted parameters
    """
    redacted = url
    path_params: List[PathParam] = []

    for path_id in PATH_ID_PATTERNS:
        match = path_id.pattern.search(redacted)
        if match:
            path_params.append(PathParam(name=path_id.param_name, original_value=match.group(1)))
            redacted = path_id.pattern.sub(path_id.replacement, redacted, count=1)

    redacted = URLMatcher.rewrite_query(redacted, _redact_url_query_value)

    return RedactedUrl(redacted_url=redacted, path_params=path_params)


def _redact_url_query_value(name: str, value: str) -> str:
    if UUID_EXACT.match(value):
        return REDACTION_PLACEHOLDERS['id']
    return redact_query_value(value)


def extract_path_params(url: str) -> List[PathParam]:
    """Extract path parameters from a URL without rewriting it."""
    path_params = []

    for path_id in PATH_ID_PATTERNS:
        match = path_id.pattern.search(url)
        if match:
            path_params.append(PathParam(name=path_id.param_name, original_value=match.group(1)))

    return path_params


def normalize_path_for_openapi(path: str) -> str:
    """Template the first ID of each known resource in a path, without redacting anything else."""
    normalized = path

    for path_id in PATH_ID_PATTERNS:
        normalized = path_id.pattern.sub(path_id.replacement, normalized, count=1)

    return normalized


def redact_query_value(value: str) -> str:
    """
    Redact one query-string value.

    UUID, email and JWT checks run in that order; the first hit decides the
    placeholder and non-matching values are returned unchanged.
    """
    if PII_PATTERNS.uuid.search(value):
        return REDACTION_PLACEHOLDERS['id']

    if PII_PATTERNS.email.search(value):
        return REDACTION_PLACEHOLDERS['email']

    if PII_PATTERNS.jwt.search(value):
        return REDACTION_PLACEHOLDERS['token']

    return value


def redact_query_string(query_string: Iterable[NameValue]) -> Tuple[NameValue, ...]:
    """Redact the values of a HAR query-string list. Names are never changed."""
    result = []
    for param in query_string:
        redacted = redact_query_value(param.value)
        result.append(param if redacted == param.value else replace(param, value=redacted))
    return tuple(result)
