"""
HAR data model.

Immutable dataclasses for the parts of a HAR 1.2 capture HarTap works with.
Keys HarTap does not model (timings, cache, pageref, ...) are carried in
``extra`` so ``to_dict`` writes them back out untouched.

Every transform builds new objects with ``dataclasses.replace``; nothing in
this package mutates a record in place.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


def _extra(data: Dict[str, Any], known: Tuple[str, ...]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


@dataclass(frozen=True)
class NameValue:
    """A header or query-string pair. Duplicated names are allowed."""

    name: str
    value: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NameValue':
        value = data.get('value', '')
        return cls(name=str(data.get('name', '')), value='' if value is None else str(value))

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'value': self.value}


@dataclass(frozen=True)
class PostData:
    """Request body as declared in the capture."""

    mime_type: str = ''
    text: Optional[str] = None
    params: Tuple[Dict[str, Any], ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PostData':
        return cls(
            mime_type=data.get('mimeType') or '',
            text=data.get('text'),
            params=tuple(dict(p) for p in data.get('params') or [])
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'mimeType': self.mime_type}
        if self.text is not None:
            result['text'] = self.text
        if self.params:
            result['params'] = [dict(p) for p in self.params]
        return result


@dataclass(frozen=True)
class Content:
    """Response body as declared in the capture."""

    mime_type: str = ''
    text: Optional[str] = None
    size: Optional[int] = None
    encoding: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Content':
        size = data.get('size')
        return cls(
            mime_type=data.get('mimeType') or '',
            text=data.get('text'),
            size=size if isinstance(size, int) and not isinstance(size, bool) else None,
            encoding=data.get('encoding')
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            'size': self.size if self.size is not None else 0,
            'mimeType': self.mime_type,
        }
        if self.text is not None:
            result['text'] = self.text
        if self.encoding:
            result['encoding'] = self.encoding
        return result


@dataclass(frozen=True)
class Request:
    method: str
    url: str
    headers: Tuple[NameValue, ...] = ()
    query_string: Tuple[NameValue, ...] = ()
    cookies: Tuple[Dict[str, Any], ...] = ()
    post_data: Optional[PostData] = None
    http_version: str = 'HTTP/1.1'
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN = ('method', 'url', 'headers', 'queryString', 'cookies', 'postData', 'httpVersion')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Request':
        post_data = data.get('postData')
        return cls(
            method=data['method'],
            url=data['url'],
            headers=tuple(NameValue.from_dict(h) for h in data.get('headers') or []),
            query_string=tuple(NameValue.from_dict(q) for q in data.get('queryString') or []),
            cookies=tuple(dict(c) for c in data.get('cookies') or []),
            post_data=PostData.from_dict(post_data) if isinstance(post_data, dict) else None,
            http_version=data.get('httpVersion') or 'HTTP/1.1',
            extra=_extra(data, cls._KNOWN)
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            'method': self.method,
            'url': self.url,
            'httpVersion': self.http_version,
            'cookies': [dict(c) for c in self.cookies],
            'headers': [h.to_dict() for h in self.headers],
            'queryString': [q.to_dict() for q in self.query_string],
        }
        if self.post_data is not None:
            result['postData'] = self.post_data.to_dict()
        result.update(self.extra)
        return result


@dataclass(frozen=True)
class Response:
    status: int
    status_text: str = ''
    headers: Tuple[NameValue, ...] = ()
    cookies: Tuple[Dict[str, Any], ...] = ()
    content: Content = field(default_factory=Content)
    http_version: str = 'HTTP/1.1'
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN = ('status', 'statusText', 'headers', 'cookies', 'content', 'httpVersion')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Response':
        try:
            status = int(data.get('status', 0))
        except (TypeError, ValueError):
            status = 0
        return cls(
            status=status,
            status_text=data.get('statusText') or '',
            headers=tuple(NameValue.from_dict(h) for h in data.get('headers') or []),
            cookies=tuple(dict(c) for c in data.get('cookies') or []),
            content=Content.from_dict(data.get('content') or {}),
            http_version=data.get('httpVersion') or 'HTTP/1.1',
            extra=_extra(data, cls._KNOWN)
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            'status': self.status,
            'statusText': self.status_text,
            'httpVersion': self.http_version,
            'cookies': [dict(c) for c in self.cookies],
            'headers': [h.to_dict() for h in self.headers],
            'content': self.content.to_dict(),
        }
        result.update(self.extra)
        return result


@dataclass(frozen=True)
class HarEntry:
    """One captured request/response pair."""

    request: Request
    response: Response
    started_date_time: str = ''
    time: float = 0
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN = ('request', 'response', 'startedDateTime', 'time')

    @property
    def response_size(self) -> int:
        """Declared response body size, 0 when the capture omits it."""
        return self.response.content.size or 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HarEntry':
        return cls(
            request=Request.from_dict(data['request']),
            response=Response.from_dict(data['response']),
            started_date_time=data.get('startedDateTime') or '',
            time=data.get('time') or 0,
            extra=_extra(data, cls._KNOWN)
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            'startedDateTime': self.started_date_time,
            'time': self.time,
            'request': self.request.to_dict(),
            'response': self.response.to_dict(),
        }
        result.update(self.extra)
        return result


@dataclass(frozen=True)
class HarDocument:
    """The ``log`` object of a HAR file."""

    entries: Tuple[HarEntry, ...] = ()
    version: str = '1.2'
    creator: Dict[str, Any] = field(default_factory=lambda: {'name': 'hartap', 'version': '1.0.0'})
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN = ('entries', 'version', 'creator')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HarDocument':
        log = data['log']
        return cls(
            entries=tuple(HarEntry.from_dict(e) for e in log['entries']),
            version=log.get('version') or '1.2',
            creator=dict(log.get('creator') or {'name': 'unknown', 'version': ''}),
            extra=_extra(log, cls._KNOWN)
        )

    def to_dict(self) -> Dict[str, Any]:
        log: Dict[str, Any] = {
            'version': self.version,
            'creator': dict(self.creator),
        }
        log.update(self.extra)
        log['entries'] = [e.to_dict() for e in self.entries]
        return {'log': log}
