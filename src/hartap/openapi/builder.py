"""
OpenAPI document builder.

Finalizes a draft document with metadata, tags, security and operation ids.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from .converter import OPENAPI_VERSION
from .path_normalizer import HTTP_METHODS
from .security import get_default_security, get_security_schemes

DEFAULT_TITLE = 'Unofficial API Reference'


@dataclass
class BuildConfig:
    """Metadata for the final document."""

    version: str = '0.1.0'
    title: str = DEFAULT_TITLE
    description: Optional[str] = None
    server_url: Optional[str] = None


def get_default_description() -> str:
    return (
        "Reverse-engineered reference for endpoints based on observed traffic.\n"
        "JSON:API-style resources are common (type, id, attributes, relationships).\n"
        "**Unofficial**; for research and interoperability. All examples redacted.\n"
        "\n"
        f"Generated on: {datetime.now(timezone.utc).isoformat()}"
    )


def build_openapi_spec(base_spec: Mapping[str, Any], config: Optional[BuildConfig] = None) -> Dict[str, Any]:
    """
    Build the final OpenAPI document around a draft's paths and components.

    Args:
        base_spec: Draft document (from convert_har_to_openapi)
        config: Title, version, description and server URL

    Returns:
        New OpenAPI 3.0 document
    """
    config = config or BuildConfig()
    paths = base_spec.get('paths') or {}

    servers = [{'url': config.server_url}] if config.server_url else list(base_spec.get('servers') or [])

    components = dict(base_spec.get('components') or {})
    components['securitySchemes'] = get_security_schemes()

    return {
        'openapi': OPENAPI_VERSION,
        'info': {
            'title': config.title,
            'version': config.version,
            'description': config.description or get_default_description(),
        },
        'servers': servers,
        'tags': [{'name': name} for name in extract_tags(paths)],
        'components': components,
        'paths': _finalize_operations(paths),
        'security': get_default_security(),
    }


def extract_tags(paths: Mapping[str, Any]) -> List[str]:
    """Unique operation tags, sorted alphabetically."""
    tags = set()

    for path_item in paths.values():
        if not path_item:
            continue
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if operation:
                tags.update(operation.get('tags') or [])

    return sorted(tags)


def operation_id(method: str, path: str) -> str:
    """
    Build an operationId from method and path template.

    Example: ("get", "/api/frames/{frameId}/chores") -> getApiFramesFrameIdChores
    """
    words = [w for w in re.split(r'[^A-Za-z0-9]+', path) if w]
    return method.lower() + ''.join(w[:1].upper() + w[1:] for w in words)


def _finalize_operations(paths: Mapping[str, Any]) -> Dict[str, Any]:
    """Add summary, operationId and default security where missing."""
    result: Dict[str, Any] = {}
    used_ids = set()

    for path, path_item in paths.items():
        if not path_item:
            continue

        new_item = dict(path_item)
        for method in HTTP_METHODS:
            operation = new_item.get(method)
            if not operation:
                continue

            operation = dict(operation)
            operation.setdefault('summary', f"{method.upper()} {path}")

            if 'operationId' not in operation:
                candidate = base = operation_id(method, path)
                suffix = 2
                while candidate in used_ids:
                    candidate = f"{base}{suffix}"
                    suffix += 1
                operation['operationId'] = candidate
            used_ids.add(operation['operationId'])

            if not operation.get('security'):
                operation['security'] = get_default_security()

            new_item[method] = operation

        result[path] = new_item

    return result


def merge_component_schemas(spec: Mapping[str, Any], schemas: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of the document with extra component schemas added."""
    components = dict(spec.get('components') or {})
    components['schemas'] = {**(components.get('schemas') or {}), **schemas}
    return {**spec, 'components': components}
