"""
HarTap OpenAPI Module

Conversion of HAR captures into OpenAPI documents.
"""

from .converter import convert_har_to_openapi, generate_tag_from_path
from .path_normalizer import normalize_path, normalize_openapi_paths, extract_path_parameters
from .builder import BuildConfig, build_openapi_spec, merge_component_schemas, extract_tags
from .security import get_security_schemes, get_default_security
from .writer import format_openapi_spec, write_openapi_spec, OUTPUT_FORMATS

__all__ = [
    # Conversion
    'convert_har_to_openapi',
    'generate_tag_from_path',

    # Normalization
    'normalize_path',
    'normalize_openapi_paths',
    'extract_path_parameters',

    # Document assembly
    'BuildConfig',
    'build_openapi_spec',
    'merge_component_schemas',
    'extract_tags',
    'get_security_schemes',
    'get_default_security',

    # Output
    'format_openapi_spec',
    'write_openapi_spec',
    'OUTPUT_FORMATS',
]
