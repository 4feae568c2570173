"""
HarTap Redaction Module

Structure-preserving removal of credentials and personal data from captures.
"""

from .patterns import (
    SENSITIVE_HEADERS,
    SENSITIVE_BODY_FIELDS,
    ID_BODY_FIELDS,
    PII_PATTERNS,
    PATH_ID_PATTERNS,
    REDACTION_PLACEHOLDERS,
)
from .headers import redact_headers, is_sensitive_header
from .body import redact_body, redact_json_content, redact_string_value
from .url import (
    PathParam,
    RedactedUrl,
    redact_url,
    extract_path_params,
    normalize_path_for_openapi,
    redact_query_string,
    redact_query_value,
)
from .engine import redact_entry, redact_har_document, redact_post_data, redact_content

__all__ = [
    # Patterns
    'SENSITIVE_HEADERS',
    'SENSITIVE_BODY_FIELDS',
    'ID_BODY_FIELDS',
    'PII_PATTERNS',
    'PATH_ID_PATTERNS',
    'REDACTION_PLACEHOLDERS',

    # Headers
    'redact_headers',
    'is_sensitive_header',

    # Body
    'redact_body',
    'redact_json_content',
    'redact_string_value',

    # URL
    'PathParam',
    'RedactedUrl',
    'redact_url',
    'extract_path_params',
    'normalize_path_for_openapi',
    'redact_query_string',
    'redact_query_value',

    # Entries
    'redact_entry',
    'redact_har_document',
    'redact_post_data',
    'redact_content',
]
