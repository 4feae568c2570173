"""
Body redaction.

Walks decoded JSON and replaces sensitive leaf values. The walk never adds or
removes keys or array elements, so the redacted body has exactly the shape of
the original and schema inference gives the same result on either.
"""

import json
from typing import Any, Dict

from .patterns import (
    SENSITIVE_BODY_FIELDS,
    ID_BODY_FIELDS,
    PII_PATTERNS,
    REDACTION_PLACEHOLDERS,
)


def redact_body(data: Any) -> Any:
    """
    Recursively redact sensitive data from a decoded JSON value.

    Args:
        data: Decoded JSON (dict, list, str, number, bool or None)

    Returns:
        A new value with the same structure and redacted leaves
    """
    if isinstance(data, str):
        return redact_string_value(data)

    if isinstance(data, list):
        return [redact_body(item) for item in data]

    if isinstance(data, dict):
        return _redact_object(data)

    return data


def redact_string_value(value: str) -> str:
    """Replace embedded emails, phone numbers and JWTs inside a string."""
    result = PII_PATTERNS.email.sub(REDACTION_PLACEHOLDERS['email'], value)
    result = PII_PATTERNS.phone.sub(REDACTION_PLACEHOLDERS['phone'], result)
    result = PII_PATTERNS.jwt.sub(REDACTION_PLACEHOLDERS['token'], result)
    return result


def _redact_object(obj: Dict[str, Any]) -> Dict[str, Any]:
    result = {}

    for key, value in obj.items():
        lower_key = key.lower()

        if lower_key in SENSITIVE_BODY_FIELDS:
            result[key] = _redacted_field_value(lower_key, value)
        elif lower_key in ID_BODY_FIELDS:
            result[key] = _redact_id_value(value)
        else:
            result[key] = redact_body(value)

    return result


def _redacted_field_value(field_name: str, original: Any) -> Any:
    """
    Placeholder for a sensitive field, chosen from the field name.

    Only string values are replaced. Containers are still walked; numbers,
    booleans and null are kept as they are.
    """
    if not isinstance(original, str):
        return redact_body(original)

    if 'email' in field_name:
        return REDACTION_PLACEHOLDERS['email']
    if 'phone' in field_name:
        return REDACTION_PLACEHOLDERS['phone']
    if 'url' in field_name:
        return REDACTION_PLACEHOLDERS['url']
    if 'token' in field_name or 'key' in field_name or 'secret' in field_name:
        return REDACTION_PLACEHOLDERS['token']

    return REDACTION_PLACEHOLDERS['string']


def _redact_id_value(value: Any) -> Any:
    # Numeric IDs are kept; they are rarely identifying on their own
    if isinstance(value, str) and PII_PATTERNS.uuid.search(value):
        return REDACTION_PLACEHOLDERS['id']
    return value


def redact_json_content(text: str) -> str:
    """
    Parse, redact and re-serialize JSON text.

    Text that is not valid JSON is returned unchanged.
    """
    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, TypeError, ValueError):
        return text

    return json.dumps(redact_body(parsed), ensure_ascii=False, separators=(',', ':'))
