"""
Entry deduplication and merging across capture sessions.

Several HAR files usually observe the same endpoints. Entries are keyed by
method, URL without query string, and response status; one entry survives per
key and the result is sorted so the output does not depend on input order.
"""

import logging
from typing import Dict, List, Sequence, Tuple

from ..common import URLMatcher
from ..errors import EmptyInputError
from .models import HarDocument, HarEntry

logger = logging.getLogger("hartap.har")

METHOD_ORDER = ('GET', 'POST', 'PUT', 'PATCH', 'DELETE')

EntryKey = Tuple[str, str, int]


def get_entry_key(entry: HarEntry) -> EntryKey:
    """
    Dedup key for an entry: (METHOD, URL without query/fragment, status).

    Malformed or relative URLs are used verbatim.
    """
    return (
        entry.request.method.upper(),
        URLMatcher.extract_base_url(entry.request.url),
        entry.response.status,
    )


def method_priority(method: str) -> int:
    """
    Sort rank of an HTTP method.

    Methods outside METHOD_ORDER rank -1, so they sort before GET.
    """
    try:
        return METHOD_ORDER.index(method.upper())
    except ValueError:
        return -1


def deduplicate_entries(entries: Sequence[HarEntry]) -> List[HarEntry]:
    """
    Keep one entry per dedup key and sort the survivors.

    The entry with the largest declared response size wins; on a tie the
    first one seen is kept. Output is ordered by request URL, then by
    method priority.
    """
    winners: Dict[EntryKey, HarEntry] = {}

    for entry in entries:
        key = get_entry_key(entry)
        existing = winners.get(key)

        if existing is None or entry.response_size > existing.response_size:
            winners[key] = entry

    return sorted(
        winners.values(),
        key=lambda e: (e.request.url, method_priority(e.request.method))
    )


def merge_entries(collections: Sequence[Sequence[HarEntry]]) -> List[HarEntry]:
    """
    Merge entry collections from several captures into one deduplicated list.

    Args:
        collections: One sequence of entries per capture

    Returns:
        The sole collection unchanged when only one is given, otherwise the
        deduplicated, sorted union of all collections

    Raises:
        EmptyInputError: If no collections are given
    """
    if len(collections) == 0:
        raise EmptyInputError('No HAR files to merge')

    if len(collections) == 1:
        return collections[0]

    all_entries = [entry for collection in collections for entry in collection]
    unique = deduplicate_entries(all_entries)
    logger.debug(f"Deduplicated {len(all_entries)} entries into {len(unique)}")
    return unique


def merge_har_documents(documents: Sequence[HarDocument]) -> HarDocument:
    """
    Merge HAR documents, deduplicating their entries.

    A single document is returned as-is.

    Raises:
        EmptyInputError: If no documents are given
    """
    if len(documents) == 0:
        raise EmptyInputError('No HAR files to merge')

    if len(documents) == 1:
        return documents[0]

    entries = merge_entries([doc.entries for doc in documents])
    return HarDocument(
        entries=tuple(entries),
        version='1.2',
        creator={'name': 'hartap', 'version': '1.0.0'}
    )
