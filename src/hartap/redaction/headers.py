"""Header redaction."""

from dataclasses import replace
from typing import Iterable, Tuple

from ..har.models import NameValue
from .patterns import SENSITIVE_HEADERS, REDACTION_PLACEHOLDERS


def is_sensitive_header(header_name: str) -> bool:
    """Check if a header is sensitive (case-insensitive)."""
    return header_name.lower() in SENSITIVE_HEADERS


def redact_headers(headers: Iterable[NameValue]) -> Tuple[NameValue, ...]:
    """Replace the values of sensitive headers with the token placeholder."""
    return tuple(
        replace(header, value=REDACTION_PLACEHOLDERS['token'])
        if is_sensitive_header(header.name) else header
        for header in headers
    )
