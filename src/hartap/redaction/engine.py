"""
Entry-level redaction.

Combines header, cookie, query, URL and body redaction into a single pure
transform over HAR entries.
"""

import logging
from dataclasses import replace
from typing import Optional

from ..common import looks_like_json
from ..har.models import Content, HarDocument, HarEntry, PostData
from .body import redact_json_content
from .headers import redact_headers
from .patterns import REDACTED_PARAM_VALUE
from .url import redact_query_string, redact_url

logger = logging.getLogger("hartap.redaction")


def redact_har_document(document: HarDocument) -> HarDocument:
    """Redact every entry of a HAR document."""
    entries = tuple(redact_entry(entry) for entry in document.entries)
    logger.debug(f"Redacted {len(entries)} entries")
    return replace(document, entries=entries)


def redact_entry(entry: HarEntry) -> HarEntry:
    """
    Redact a single HAR entry.

    Returns a new entry; the input is left untouched. Cookies are always
    dropped on both sides of the exchange.
    """
    request = entry.request
    response = entry.response

    redacted_request = replace(
        request,
        url=redact_url(request.url).redacted_url,
        headers=redact_headers(request.headers),
        cookies=(),
        query_string=redact_query_string(request.query_string),
        post_data=redact_post_data(request.post_data),
    )
    redacted_response = replace(
        response,
        headers=redact_headers(response.headers),
        cookies=(),
        content=redact_content(response.content),
    )

    return replace(entry, request=redacted_request, response=redacted_response)


def redact_post_data(post_data: Optional[PostData]) -> Optional[PostData]:
    """Redact JSON post text and blank out form parameter values."""
    if post_data is None:
        return None

    text = post_data.text
    if text and looks_like_json(post_data.mime_type):
        text = redact_json_content(text)

    params = tuple(
        {**param, 'value': REDACTED_PARAM_VALUE} if param.get('value') else dict(param)
        for param in post_data.params
    )

    return replace(post_data, text=text, params=params)


def redact_content(content: Content) -> Content:
    """Redact a JSON response body. Other media types pass through."""
    if content.text and looks_like_json(content.mime_type):
        return replace(content, text=redact_json_content(content.text))
    return content
