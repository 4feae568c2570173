"""
JSON:API pattern detection and enhancement.

See https://jsonapi.org/format/
"""

from dataclasses import replace
from typing import Any, Dict, Optional

from .inferrer import SchemaKind, SchemaNode

OPEN_OBJECT = SchemaNode(kind=SchemaKind.OBJECT)


def is_jsonapi_resource(schema: SchemaNode) -> bool:
    """Check if a schema describes a JSON:API resource object."""
    if schema.kind is not SchemaKind.OBJECT:
        return False
    return 'type' in schema.properties and 'id' in schema.properties


def is_jsonapi_resource_data(data: Any) -> bool:
    """Check if decoded data looks like a JSON:API resource."""
    if not isinstance(data, dict):
        return False

    resource_id = data.get('id')
    return isinstance(data.get('type'), str) and (
        isinstance(resource_id, str)
        or (isinstance(resource_id, (int, float)) and not isinstance(resource_id, bool))
    )


def _described(node: SchemaNode, description: str) -> SchemaNode:
    if node.description:
        return node
    return replace(node, description=description)


def enhance_with_jsonapi_patterns(schema: SchemaNode) -> SchemaNode:
    """
    Annotate a resource-object schema with the JSON:API envelope.

    Schemas that are not resource objects are returned unchanged.
    """
    if not is_jsonapi_resource(schema):
        return schema

    props = schema.properties
    properties: Dict[str, SchemaNode] = {
        'type': _described(props['type'], 'JSON:API resource type'),
        'id': _described(props['id'], 'Resource identifier'),
        'attributes': props.get('attributes', OPEN_OBJECT),
    }
    for optional in ('relationships', 'links', 'meta'):
        if optional in props:
            properties[optional] = props[optional]

    return replace(
        schema,
        description='JSON:API resource object',
        properties=properties,
        required=('type', 'id'),
    )


def extract_resource_type(data: Any) -> Optional[str]:
    """Extract the resource type from JSON:API resource data."""
    if not is_jsonapi_resource_data(data):
        return None
    return data['type']


def resource_type_to_schema_name(resource_type: str) -> str:
    """
    Component schema name for a resource type.

    Example: calendar_events -> CalendarEventsResource
    """
    return ''.join(part[:1].upper() + part[1:] for part in resource_type.split('_')) + 'Resource'


def is_jsonapi_collection_response(data: Any) -> bool:
    """A JSON:API collection response has an array in "data"."""
    return isinstance(data, dict) and bool(data.get('data')) and isinstance(data['data'], list)


def is_jsonapi_single_response(data: Any) -> bool:
    """A JSON:API single-resource response has a resource object in "data"."""
    if not isinstance(data, dict) or not data.get('data'):
        return False
    return not isinstance(data['data'], list) and is_jsonapi_resource_data(data['data'])
