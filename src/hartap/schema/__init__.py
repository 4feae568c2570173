"""
HarTap Schema Module

Schema inference from observed JSON payloads.
"""

from .inferrer import (
    MISSING,
    SchemaKind,
    SchemaNode,
    infer_schema,
    infer_merged,
    merge_schemas,
)
from .jsonapi import (
    enhance_with_jsonapi_patterns,
    extract_resource_type,
    is_jsonapi_collection_response,
    is_jsonapi_resource,
    is_jsonapi_resource_data,
    is_jsonapi_single_response,
    resource_type_to_schema_name,
)

__all__ = [
    # Inference
    'MISSING',
    'SchemaKind',
    'SchemaNode',
    'infer_schema',
    'infer_merged',
    'merge_schemas',

    # JSON:API
    'enhance_with_jsonapi_patterns',
    'extract_resource_type',
    'is_jsonapi_collection_response',
    'is_jsonapi_resource',
    'is_jsonapi_resource_data',
    'is_jsonapi_single_response',
    'resource_type_to_schema_name',
]
