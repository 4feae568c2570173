"""
HarTap HAR Module

Loading, filtering and merging of HAR captures.
"""

from .models import HarDocument, HarEntry, Request, Response, NameValue, PostData, Content
from .parser import HarLoader, load_har_files, parse_har_data, validate_har_structure
from .filters import (
    RequestFilter,
    apply_standard_filters,
    filter_requests,
    filter_successful_responses,
    filter_out_preflight,
)
from .merger import get_entry_key, deduplicate_entries, merge_entries, merge_har_documents

__all__ = [
    # Model
    'HarDocument',
    'HarEntry',
    'Request',
    'Response',
    'NameValue',
    'PostData',
    'Content',

    # Loading
    'HarLoader',
    'load_har_files',
    'parse_har_data',
    'validate_har_structure',

    # Filtering
    'RequestFilter',
    'apply_standard_filters',
    'filter_requests',
    'filter_successful_responses',
    'filter_out_preflight',

    # Merging
    'get_entry_key',
    'deduplicate_entries',
    'merge_entries',
    'merge_har_documents',
]
