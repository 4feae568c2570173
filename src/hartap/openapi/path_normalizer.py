"""
Path normalization for OpenAPI output.

Converts concrete paths such as ``/api/frames/3fa85f64-.../chores/42`` into
templates such as ``/api/frames/{frameId}/chores/{choreId}``, merges path
items that collapse onto the same template and declares the template's path
parameters on every operation.
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Pattern, Tuple

from ..redaction.patterns import PATH_ID_PATTERNS, GENERIC_UUID_SEGMENT, GENERIC_NUMERIC_SEGMENT

logger = logging.getLogger("hartap.openapi")

HTTP_METHODS = ('get', 'post', 'put', 'patch', 'delete', 'head', 'options', 'trace')

# Applied in order, every occurrence, each to the output of the previous one.
# Resource rules come before the generic fallbacks.
PATH_PARAM_PATTERNS: Tuple[Tuple[Pattern, str], ...] = tuple(
    (path_id.pattern, path_id.replacement) for path_id in PATH_ID_PATTERNS
) + (
    (GENERIC_UUID_SEGMENT, '/{id}'),
    (GENERIC_NUMERIC_SEGMENT, '/{id}'),
)

_PARAM_TOKEN = re.compile(r'\{(\w+)\}')


def normalize_path(path: str) -> str:
    """
    Normalize a single path to use parameter placeholders.

    A placeholder name that occurs more than once gets a numeric suffix
    (``{id}``, ``{id2}``) so names stay unique within the template.
    """
    normalized = path

    for pattern, replacement in PATH_PARAM_PATTERNS:
        normalized = pattern.sub(replacement, normalized)

    return _uniquify_param_names(normalized)


def _uniquify_param_names(template: str) -> str:
    seen: Dict[str, int] = {}

    def rename(match):
        name = match.group(1)
        seen[name] = seen.get(name, 0) + 1
        if seen[name] == 1:
            return match.group(0)
        return f'{{{name}{seen[name]}}}'

    return _PARAM_TOKEN.sub(rename, template)


def extract_path_parameters(path: str) -> List[Dict[str, Any]]:
    """
    Build OpenAPI path parameter objects for every ``{name}`` in a template.

    Parameters are returned left to right, each required and string-typed.
    """
    return [
        {
            'name': match.group(1),
            'in': 'path',
            'required': True,
            'schema': {'type': 'string'},
        }
        for match in _PARAM_TOKEN.finditer(path)
    ]


def normalize_openapi_paths(paths: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """
    Normalize all paths of an OpenAPI ``paths`` object.

    Path items whose templates collide are merged: for every method the first
    path seen keeps its operation, later paths only fill in methods that are
    still missing. Afterwards each operation gets the template's path
    parameters, skipping names it already declares.

    Args:
        paths: Mapping of path to path item

    Returns:
        New mapping of template to path item; the input is not modified
    """
    merged: Dict[str, Dict[str, Any]] = {}

    for path, path_item in paths.items():
        if not path_item:
            continue

        template = normalize_path(path)

        if template in merged:
            logger.debug(f"Merging {path} into {template}")
            merged[template] = _merge_path_items(merged[template], path_item)
        else:
            merged[template] = dict(path_item)

    return {
        template: _add_path_parameters(path_item, template)
        for template, path_item in merged.items()
    }


def _merge_path_items(existing: Dict[str, Any], incoming: Mapping[str, Any]) -> Dict[str, Any]:
    result = dict(existing)

    for method in HTTP_METHODS:
        if incoming.get(method) and not existing.get(method):
            result[method] = incoming[method]

    return result


def _add_path_parameters(path_item: Dict[str, Any], template: str) -> Dict[str, Any]:
    path_params = extract_path_parameters(template)

    if not path_params:
        return path_item

    result = dict(path_item)

    for method in HTTP_METHODS:
        operation = result.get(method)
        if not operation:
            continue

        existing_params = list(operation.get('parameters') or [])
        existing_names = {p.get('name') for p in existing_params if isinstance(p, dict)}
        new_params = [p for p in path_params if p['name'] not in existing_names]

        result[method] = {**operation, 'parameters': new_params + existing_params}

    return result
