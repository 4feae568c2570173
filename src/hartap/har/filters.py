"""
Filtering logic for HarTap.

Decides which captured entries take part in a conversion, based on host
matching (exact, wildcard), regex patterns, response status and method.
"""

import logging
import re
from dataclasses import replace
from typing import Callable, List, Optional

from ..common import URLMatcher
from .models import HarDocument, HarEntry

logger = logging.getLogger("hartap.har")


class RequestFilter:
    """
    Handles host/URL filtering of captured entries.

    Supports:
    - Exact host matching (e.g., "api.example.com")
    - Wildcard matching (e.g., "*.example.com")
    - Regex pattern matching on URL and host
    """

    def __init__(self, host_filters: List[str], regex_pattern: Optional[str] = None):
        """
        Initialize the filter.

        Args:
            host_filters: List of hosts to match (supports wildcards)
            regex_pattern: Optional regex pattern to match against URLs

        Raises:
            ValueError: If regex_pattern is not a valid regular expression
        """
        self.host_filters = list(host_filters)
        self.regex_pattern = None

        if regex_pattern:
            try:
                self.regex_pattern = re.compile(regex_pattern)
            except re.error as e:
                raise ValueError(f"Invalid regex pattern: {e}") from e

    @property
    def is_active(self) -> bool:
        return bool(self.host_filters or self.regex_pattern)

    def should_include(self, host: str, url: str) -> bool:
        """
        Determine if an entry should be kept based on filters.

        Filtering logic:
        - If no filters configured: keep everything
        - If any filter matches: keep (OR logic)

        Args:
            host: The request hostname (e.g., "api.example.com")
            url: The full URL (e.g., "https://api.example.com/users")

        Returns:
            True if the entry should be kept, False otherwise
        """
        if not self.is_active:
            return True

        for filter_host in self.host_filters:
            if filter_host == host:
                logger.debug(f"[KEEP] {host} (exact match: {filter_host})")
                return True

            # *.example.com matches api.example.com and example.com itself
            if filter_host.startswith('*.'):
                domain = filter_host[2:]
                if host.endswith('.' + domain) or host == domain:
                    logger.debug(f"[KEEP] {host} (wildcard match: {filter_host})")
                    return True

        if self.regex_pattern and (self.regex_pattern.search(url) or self.regex_pattern.search(host)):
            logger.debug(f"[KEEP] {host} (regex match: {self.regex_pattern.pattern})")
            return True

        logger.debug(f"[SKIP] {host}")
        return False

    def matches_entry(self, entry: HarEntry) -> bool:
        """Apply the filter to a HAR entry's request URL."""
        url = entry.request.url
        try:
            host = URLMatcher.parse_url_components(url)['hostname'] or ''
        except ValueError:
            host = ''
        return self.should_include(host, url)


def _filter_entries(document: HarDocument, predicate: Callable[[HarEntry], bool]) -> HarDocument:
    return replace(document, entries=tuple(e for e in document.entries if predicate(e)))


def filter_requests(document: HarDocument, request_filter: RequestFilter) -> HarDocument:
    """Keep only entries accepted by the host/regex filter."""
    return _filter_entries(document, request_filter.matches_entry)


def is_successful(entry: HarEntry) -> bool:
    """2xx and 304 responses count as successful."""
    status = entry.response.status
    return 200 <= status < 300 or status == 304


def filter_successful_responses(document: HarDocument) -> HarDocument:
    """Keep entries that have successful responses (2xx or 304)."""
    return _filter_entries(document, is_successful)


def filter_out_preflight(document: HarDocument) -> HarDocument:
    """Drop OPTIONS preflight requests."""
    return _filter_entries(document, lambda e: e.request.method.upper() != 'OPTIONS')


def apply_standard_filters(
    document: HarDocument,
    request_filter: Optional[RequestFilter] = None,
    successful_only: bool = True,
    drop_preflight: bool = True
) -> HarDocument:
    """
    Apply the filters used by the convert pipeline, in order:
    host/regex filter, OPTIONS removal, successful-response filter.
    """
    filtered = document
    if request_filter is not None:
        filtered = filter_requests(filtered, request_filter)
    if drop_preflight:
        filtered = filter_out_preflight(filtered)
    if successful_only:
        filtered = filter_successful_responses(filtered)

    dropped = len(document.entries) - len(filtered.entries)
    if dropped:
        logger.debug(f"Filtered out {dropped} of {len(document.entries)} entries")
    return filtered
