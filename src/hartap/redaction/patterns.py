"""
Patterns for identifying and redacting sensitive data.

Read-only tables shared by the redaction engine and the path normalizer.
"""

import re
from types import MappingProxyType
from typing import NamedTuple, Pattern, Tuple

# Headers whose values are always replaced
SENSITIVE_HEADERS = frozenset({
    'authorization',
    'cookie',
    'set-cookie',
    'x-api-key',
    'x-auth-token',
    'x-access-token',
    'x-refresh-token',
})

# Body fields whose values are replaced with a placeholder
SENSITIVE_BODY_FIELDS = frozenset({
    'email',
    'phone',
    'phone_number',
    'token',
    'access_token',
    'refresh_token',
    'api_key',
    'password',
    'secret',
    'profile_pic_url',
    'avatar_url',
    'first_name',
    'last_name',
    'full_name',
    'address',
    'street',
    'city',
    'zip',
    'postal_code',
})

# Body fields holding identifiers; only UUID-shaped values are replaced
ID_BODY_FIELDS = frozenset({
    'id',
    'user_id',
    'frame_id',
    'list_id',
    'chore_id',
    'category_id',
    'device_id',
})


class PIIPatterns(NamedTuple):
    email: Pattern
    phone: Pattern
    uuid: Pattern
    jwt: Pattern


# Unanchored: used both to test values and to replace embedded substrings
PII_PATTERNS = PIIPatterns(
    email=re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b', re.ASCII),
    phone=re.compile(r'\b\d{3}[-.\s]?\d{3}[-.\s]?\d{4}\b', re.ASCII),
    uuid=re.compile(r'\b[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}\b', re.ASCII | re.IGNORECASE),
    jwt=re.compile(r'\beyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\b', re.ASCII),
)

UUID_EXACT = re.compile(r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$', re.IGNORECASE)


class PathIdPattern(NamedTuple):
    """A resource collection whose next path segment is an identifier."""

    resource: str
    param_name: str
    pattern: Pattern

    @property
    def replacement(self) -> str:
        return f'/{self.resource}/{{{self.param_name}}}'


def _path_id(resource: str, param_name: str) -> PathIdPattern:
    pattern = re.compile(rf'/{re.escape(resource)}/([a-f0-9-]+)', re.IGNORECASE)
    return PathIdPattern(resource, param_name, pattern)


# Order matters: frames come first so nested resources see an already
# templated frame segment.
PATH_ID_PATTERNS: Tuple[PathIdPattern, ...] = (
    _path_id('frames', 'frameId'),
    _path_id('lists', 'listId'),
    _path_id('chores', 'choreId'),
    _path_id('categories', 'categoryId'),
    _path_id('devices', 'deviceId'),
    _path_id('rewards', 'rewardId'),
    _path_id('reward_points', 'rewardPointId'),
    _path_id('items', 'itemId'),
    _path_id('source_calendars', 'sourceCalendarId'),
    _path_id('calendar_events', 'calendarEventId'),
)

# Fallbacks for IDs no resource rule claimed. Like the resource rules they
# match a prefix of the segment, not necessarily all of it.
GENERIC_UUID_SEGMENT = re.compile(
    r'/([a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12})',
    re.IGNORECASE
)
GENERIC_NUMERIC_SEGMENT = re.compile(r'/(\d{5,})', re.ASCII)


REDACTION_PLACEHOLDERS = MappingProxyType({
    'string': 'REDACTED',
    'email': 'user@example.com',
    'phone': '555-555-5555',
    'id': 'REDACTED_ID',
    'url': 'https://example.com/redacted',
    'token': 'REDACTED_TOKEN',
})

# Replacement for form-encoded post parameters
REDACTED_PARAM_VALUE = 'REDACTED'
