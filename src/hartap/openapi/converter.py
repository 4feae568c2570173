"""
HAR to OpenAPI conversion.

Turns (already filtered, merged and usually redacted) HAR entries into a draft
OpenAPI 3.0 document: one operation per path and method, with query/header
parameters, request bodies and per-status responses whose schemas are merged
from every observed sample.
"""

import logging
import re
from collections import defaultdict
from http import HTTPStatus
from typing import Any, Dict, List, Optional, Set

from ..common import URLMatcher, header_value, looks_like_json, safe_json_parse
from ..har.filters import is_successful
from ..har.models import HarDocument, HarEntry
from ..redaction.headers import is_sensitive_header
from ..schema import (
    enhance_with_jsonapi_patterns,
    extract_resource_type,
    infer_merged,
    is_jsonapi_collection_response,
    is_jsonapi_single_response,
    resource_type_to_schema_name,
)
from .path_normalizer import normalize_openapi_paths

logger = logging.getLogger("hartap.openapi")

OPENAPI_VERSION = '3.0.3'

# Headers every client sends; they say nothing about the API
STANDARD_HEADERS = frozenset({
    'accept',
    'accept-encoding',
    'accept-language',
    'cache-control',
    'connection',
    'content-length',
    'content-type',
    'dnt',
    'host',
    'if-modified-since',
    'if-none-match',
    'origin',
    'pragma',
    'priority',
    'referer',
    'sec-ch-ua',
    'sec-ch-ua-mobile',
    'sec-ch-ua-platform',
    'sec-fetch-dest',
    'sec-fetch-mode',
    'sec-fetch-site',
    'te',
    'upgrade-insecure-requests',
    'user-agent',
})

_METHODS_WITH_BODY = {'post', 'put', 'patch', 'delete'}


def convert_har_to_openapi(
    document: HarDocument,
    normalize_paths: bool = True,
    title: str = 'Observed API',
    version: str = '0.1.0'
) -> Dict[str, Any]:
    """
    Convert a HAR document to a draft OpenAPI document.

    Args:
        document: HAR document to convert
        normalize_paths: Template concrete paths with the path normalizer
        title: Draft info.title
        version: Draft info.version

    Returns:
        OpenAPI document as a plain dict
    """
    endpoints = _group_by_endpoint(document.entries)
    resources: Dict[str, List[Dict[str, Any]]] = defaultdict(list)

    paths: Dict[str, Dict[str, Any]] = {}
    for path, entries in endpoints.items():
        if not any(is_successful(e) for e in entries):
            logger.debug(f"Dropping {path}: no successful response observed")
            continue
        paths[path] = _build_path_item(path, entries, resources)

    if normalize_paths:
        paths = normalize_openapi_paths(paths)

    spec: Dict[str, Any] = {
        'openapi': OPENAPI_VERSION,
        'info': {'title': title, 'version': version},
        'servers': _extract_servers(document.entries),
        'paths': paths,
    }

    schemas = _build_resource_schemas(resources)
    if schemas:
        spec['components'] = {'schemas': schemas}

    logger.info(f"Converted {len(document.entries)} entries into {len(paths)} path(s)")
    return spec


def _group_by_endpoint(entries) -> Dict[str, List[HarEntry]]:
    grouped: Dict[str, List[HarEntry]] = defaultdict(list)

    for entry in entries:
        grouped[URLMatcher.extract_path(entry.request.url)].append(entry)

    return dict(grouped)


def _build_path_item(path: str, entries: List[HarEntry], resources) -> Dict[str, Any]:
    methods: Dict[str, List[HarEntry]] = defaultdict(list)
    for entry in entries:
        methods[entry.request.method.lower()].append(entry)

    return {
        method: _build_operation(method, method_entries, path, resources)
        for method, method_entries in methods.items()
    }


def _build_operation(method: str, entries: List[HarEntry], path: str, resources) -> Dict[str, Any]:
    operation: Dict[str, Any] = {}

    tag = generate_tag_from_path(path)
    if tag:
        operation['tags'] = [tag]

    parameters = _extract_parameters(entries)
    if parameters:
        operation['parameters'] = parameters

    if method in _METHODS_WITH_BODY:
        request_body = _build_request_body(entries)
        if request_body:
            operation['requestBody'] = request_body

    operation['responses'] = _build_responses(entries, resources)
    return operation


def _extract_parameters(entries: List[HarEntry]) -> List[Dict[str, Any]]:
    """Query and non-standard header parameters seen on any sample."""
    parameters: List[Dict[str, Any]] = []
    seen: Set[tuple] = set()

    for entry in entries:
        for param in entry.request.query_string:
            if ('query', param.name) in seen:
                continue
            seen.add(('query', param.name))
            parameters.append({
                'name': param.name,
                'in': 'query',
                'required': False,
                'schema': {'type': 'string'},
                'example': param.value,
            })

    for entry in entries:
        for header in entry.request.headers:
            lower = header.name.lower()
            if (lower in STANDARD_HEADERS or is_sensitive_header(lower)
                    or lower.startswith(':') or ('header', lower) in seen):
                continue
            seen.add(('header', lower))
            parameters.append({
                'name': header.name,
                'in': 'header',
                'required': False,
                'schema': {'type': 'string'},
                'example': header.value,
            })

    return parameters


_NOT_JSON = object()


def _parse_json(text: Optional[str], mime_type: str) -> Any:
    """
    Decode a body as JSON, also for bodies labelled with another media type.

    Returns ``_NOT_JSON`` when the text does not decode.
    """
    if not text:
        return _NOT_JSON
    if not looks_like_json(mime_type) and text.lstrip()[:1] not in ('{', '['):
        return _NOT_JSON
    return safe_json_parse(text, default=_NOT_JSON)


def _media_type(mime_type: str, default: str) -> str:
    return mime_type.split(';')[0].strip() or default


def _build_request_body(entries: List[HarEntry]) -> Optional[Dict[str, Any]]:
    samples = []
    raw_sample = None
    form_params: Dict[str, Any] = {}

    for entry in entries:
        post_data = entry.request.post_data
        if post_data is None:
            continue

        mime_type = post_data.mime_type or header_value(entry.request.headers, 'content-type') or ''
        data = _parse_json(post_data.text, mime_type)
        if data is not _NOT_JSON:
            samples.append(data)
        elif post_data.text and raw_sample is None:
            raw_sample = (mime_type, post_data.text)
        for param in post_data.params:
            form_params.setdefault(param.get('name', ''), param.get('value', ''))

    if samples:
        return {
            'required': True,
            'content': {
                'application/json': {
                    'schema': infer_merged(samples).to_dict(),
                    'example': samples[0],
                }
            }
        }

    if form_params:
        return {
            'required': True,
            'content': {
                'application/x-www-form-urlencoded': {
                    'schema': {
                        'type': 'object',
                        'properties': {name: {'type': 'string'} for name in form_params},
                    },
                    'example': form_params,
                }
            }
        }

    if raw_sample is not None:
        return {
            'required': True,
            'content': {
                _media_type(raw_sample[0], 'text/plain'): {
                    'schema': {'type': 'string'},
                    'example': raw_sample[1],
                }
            }
        }

    return None


def _describe_status(status: str) -> str:
    try:
        return HTTPStatus(int(status)).phrase
    except ValueError:
        return f"Response for {status}"


def _build_responses(entries: List[HarEntry], resources) -> Dict[str, Any]:
    """One response object per observed status code."""
    by_status: Dict[str, List[HarEntry]] = defaultdict(list)
    for entry in entries:
        by_status[str(entry.response.status)].append(entry)

    responses = {}
    for status in sorted(by_status):
        status_entries = by_status[status]
        response: Dict[str, Any] = {'description': _describe_status(status)}

        samples = []
        raw_sample = None
        for entry in status_entries:
            content = entry.response.content
            data = _parse_json(content.text, content.mime_type)
            if data is not _NOT_JSON:
                samples.append(data)
                _collect_resources(data, resources)
            elif content.text and raw_sample is None:
                raw_sample = content

        if samples:
            response['content'] = {
                'application/json': {
                    'schema': infer_merged(samples).to_dict(),
                    'example': samples[0],
                }
            }
        elif raw_sample is not None:
            response['content'] = {
                _media_type(raw_sample.mime_type, 'text/plain'): {
                    'schema': {'type': 'string'},
                }
            }

        responses[status] = response

    return responses


def _collect_resources(data: Any, resources: Dict[str, List[Dict[str, Any]]]) -> None:
    """Gather JSON:API resource objects from "data" and "included"."""
    if not isinstance(data, dict):
        return

    candidates: List[Any] = []
    if is_jsonapi_collection_response(data):
        candidates.extend(data['data'])
    elif is_jsonapi_single_response(data):
        candidates.append(data['data'])

    included = data.get('included')
    if isinstance(included, list):
        candidates.extend(included)

    for candidate in candidates:
        resource_type = extract_resource_type(candidate)
        if resource_type:
            resources[resource_type].append(candidate)


def _build_resource_schemas(resources: Dict[str, List[Dict[str, Any]]]) -> Dict[str, Any]:
    return {
        resource_type_to_schema_name(resource_type): enhance_with_jsonapi_patterns(infer_merged(samples)).to_dict()
        for resource_type, samples in sorted(resources.items())
    }


def _extract_servers(entries) -> List[Dict[str, str]]:
    servers: Set[str] = set()

    for entry in entries:
        origin = URLMatcher.extract_origin(entry.request.url)
        if origin:
            servers.add(origin)

    return [{'url': url} for url in sorted(servers)]


def generate_tag_from_path(path: str) -> Optional[str]:
    """
    Derive an operation tag from a request path.

    Examples:
        /api/frames/{frameId}/chores -> Chores
        /api/frames/{frameId}       -> Frames
        /api/categories             -> Categories
    """
    match = re.search(r'/api/frames/[^/]+/([a-z_]+)', path, re.IGNORECASE)
    if match:
        return capitalize_tag(match.group(1))

    if re.search(r'/api/frames/[^/]+/?$', path):
        return 'Frames'

    match = re.search(r'/api/([a-z_]+)', path, re.IGNORECASE)
    if match:
        return capitalize_tag(match.group(1))

    return None


def capitalize_tag(tag: str) -> str:
    """snake_case to Title Case: reward_points -> Reward Points"""
    return ' '.join(word[:1].upper() + word[1:].lower() for word in tag.split('_'))
