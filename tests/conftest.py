"""
Shared fixtures for HarTap tests.

Builders return plain HAR dictionaries so tests can either feed them to the
loader (as files) or turn them into model objects with ``HarEntry.from_dict``.
"""

import json

import pytest

from src.hartap.har.models import HarDocument, HarEntry

FRAME_ID = "3fa85f64-5717-4562-b3fc-2c963f66afa6"
OTHER_FRAME_ID = "9b2f1c3e-1d2a-4b5c-8e9f-0a1b2c3d4e5f"
CHORE_ID = "123e4567-e89b-12d3-a456-426614174000"


def har_entry(
    method="GET",
    url="https://api.example.com/api/items",
    status=200,
    response_body=None,
    response_mime="application/json",
    request_headers=None,
    query=None,
    post_text=None,
    post_mime="application/json",
    post_params=None,
    size=None,
    cookies=None,
):
    """Build one HAR entry dictionary."""
    if response_body is None:
        text = None
    elif isinstance(response_body, str):
        text = response_body
    else:
        text = json.dumps(response_body)

    content = {"mimeType": response_mime}
    if text is not None:
        content["text"] = text
    content["size"] = size if size is not None else (len(text) if text else 0)

    request = {
        "method": method,
        "url": url,
        "httpVersion": "HTTP/1.1",
        "headers": [{"name": k, "value": v} for k, v in (request_headers or {}).items()],
        "queryString": [{"name": k, "value": v} for k, v in (query or {}).items()],
        "cookies": cookies or [],
    }
    if post_text is not None or post_params:
        request["postData"] = {"mimeType": post_mime}
        if post_text is not None:
            request["postData"]["text"] = post_text
        if post_params:
            request["postData"]["params"] = post_params

    return {
        "startedDateTime": "2024-03-15T10:00:00.000Z",
        "time": 42,
        "request": request,
        "response": {
            "status": status,
            "statusText": "",
            "httpVersion": "HTTP/1.1",
            "headers": [{"name": "Content-Type", "value": response_mime}],
            "cookies": cookies or [],
            "content": content,
        },
    }


def har_file(entries):
    """Wrap entry dictionaries into a HAR file dictionary."""
    return {
        "log": {
            "version": "1.2",
            "creator": {"name": "test", "version": "1.0"},
            "entries": entries,
        }
    }


def make_entry(**kwargs):
    return HarEntry.from_dict(har_entry(**kwargs))


def make_document(*entries):
    return HarDocument(entries=tuple(entries))


@pytest.fixture
def write_har(tmp_path):
    """Write a HAR dictionary to a file and return its path as a string."""

    def _write(data, name="capture.har"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def chores_response():
    """JSON:API collection of chores."""
    return {
        "data": [
            {
                "type": "chore",
                "id": "101",
                "attributes": {
                    "summary": "Dishes",
                    "color": "#FF00AA",
                    "due_on": "2024-03-15",
                    "assignee_email": "parent@family.org",
                },
                "relationships": {"category": {"data": {"type": "category", "id": "7"}}},
            }
        ],
        "included": [
            {"type": "category", "id": "7", "attributes": {"label": "Kitchen"}},
        ],
    }
