"""
HarTap URL Utilities

Shared URL parsing and normalization helpers.
"""

from urllib.parse import urlparse, urlunparse, parse_qsl, urlencode
from typing import Dict, Any, List, Tuple


class URLMatcher:
    """URL helpers used for dedup keys, server extraction and query rewriting."""

    @staticmethod
    def is_absolute(url: str) -> bool:
        """Return True for URLs with both a scheme and a network location."""
        try:
            parsed = urlparse(url)
        except ValueError:
            return False
        return bool(parsed.scheme and parsed.netloc)

    @staticmethod
    def normalize_url(url: str, strip_query: bool = False) -> str:
        """
        Normalize URL for comparison.

        The fragment is always dropped. Malformed or relative URLs are
        returned unchanged so callers can treat them as opaque strings.

        Args:
            url: URL to normalize
            strip_query: If True, remove query parameters

        Returns:
            Normalized URL string
        """
        if not URLMatcher.is_absolute(url):
            return url

        parsed = urlparse(url)
        if strip_query:
            return urlunparse((parsed.scheme, parsed.netloc, parsed.path, '', '', ''))

        return urlunparse((
            parsed.scheme,
            parsed.netloc,
            parsed.path,
            parsed.params,
            parsed.query,
            ''
        ))

    @staticmethod
    def extract_base_url(url: str) -> str:
        """
        Extract URL without query parameters or fragment.

        Args:
            url: Full URL

        Returns:
            Base URL without query params
        """
        return URLMatcher.normalize_url(url, strip_query=True)

    @staticmethod
    def extract_origin(url: str) -> str:
        """Return ``scheme://netloc`` for absolute URLs, or an empty string."""
        if not URLMatcher.is_absolute(url):
            return ''
        parsed = urlparse(url)
        return f"{parsed.scheme}://{parsed.netloc}"

    @staticmethod
    def extract_path(url: str) -> str:
        """Return the path component of a URL ('/' when empty)."""
        try:
            path = urlparse(url).path
        except ValueError:
            return url
        return path or '/'

    @staticmethod
    def rewrite_query(url: str, rewrite) -> str:
        """
        Rebuild a URL with every query value passed through ``rewrite``.

        Args:
            url: URL whose query string should be rewritten
            rewrite: Callable taking (name, value) and returning the new value

        Returns:
            URL with the rewritten query, or the input unchanged when it is
            not an absolute URL or carries no query string
        """
        if not URLMatcher.is_absolute(url):
            return url

        parsed = urlparse(url)
        if not parsed.query:
            return url

        pairs: List[Tuple[str, str]] = [
            (name, rewrite(name, value))
            for name, value in parse_qsl(parsed.query, keep_blank_values=True)
        ]
        return urlunparse((
            parsed.scheme,
            parsed.netloc,
            parsed.path,
            parsed.params,
            urlencode(pairs),
            parsed.fragment
        ))

    @staticmethod
    def parse_url_components(url: str) -> Dict[str, Any]:
        """
        Parse URL into components for easy access.

        Args:
            url: URL to parse

        Returns:
            Dict with scheme, netloc, path, query, etc.
        """
        parsed = urlparse(url)
        return {
            'scheme': parsed.scheme,
            'netloc': parsed.netloc,
            'hostname': parsed.hostname,
            'path': parsed.path,
            'query': parsed.query,
            'query_pairs': parse_qsl(parsed.query, keep_blank_values=True),
            'fragment': parsed.fragment
        }
