"""
HAR file loading.

Reads HAR 1.2 captures from disk, validates the structure HarTap depends on,
and turns them into ``HarDocument`` objects.
"""

import glob
import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

from ..errors import EmptyInputError, MalformedInputError
from .models import HarDocument

logger = logging.getLogger("hartap.har")


def validate_har_structure(data: Any, source: Optional[str] = None) -> None:
    """
    Validate basic HAR structure.

    Args:
        data: Decoded JSON content of a HAR file
        source: Identifier used in error messages (usually the file path)

    Raises:
        MalformedInputError: On the first structural violation found
    """
    if not isinstance(data, dict):
        raise MalformedInputError('HAR file must be a JSON object', source)

    log = data.get('log')
    if not isinstance(log, dict):
        raise MalformedInputError('HAR file must have a "log" property', source)

    entries = log.get('entries')
    if not isinstance(entries, list):
        raise MalformedInputError('HAR log must have an "entries" array', source)

    for entry in entries:
        if not isinstance(entry, dict):
            raise MalformedInputError('HAR entry must be an object', source)

        request = entry.get('request')
        if not isinstance(request, dict):
            raise MalformedInputError('HAR entry must have a "request" object', source)

        if not isinstance(entry.get('response'), dict):
            raise MalformedInputError('HAR entry must have a "response" object', source)

        if not isinstance(request.get('url'), str):
            raise MalformedInputError('HAR request must have a "url" string', source)

        if not isinstance(request.get('method'), str):
            raise MalformedInputError('HAR request must have a "method" string', source)


def parse_har_data(data: Any, source: Optional[str] = None) -> HarDocument:
    """
    Validate decoded HAR content and build a HarDocument from it.

    Args:
        data: Decoded JSON content
        source: Identifier used in error messages

    Returns:
        Parsed HarDocument
    """
    validate_har_structure(data, source)
    return HarDocument.from_dict(data)


class HarLoader:
    """
    Loader for HAR capture files.

    Example:
        loader = HarLoader("session.har")
        document = loader.load()

        for entry in document.entries:
            print(entry.request.url)
    """

    def __init__(self, file_path: str):
        """
        Initialize HAR loader.

        Args:
            file_path: Path to the HAR file
        """
        self.file_path = Path(file_path)

    def load(self) -> HarDocument:
        """
        Load and validate the HAR file.

        Returns:
            Parsed HarDocument

        Raises:
            FileNotFoundError: If the file doesn't exist
            MalformedInputError: If the content is not valid HAR
        """
        if not self.file_path.exists():
            raise FileNotFoundError(f"HAR file not found: {self.file_path}")

        with open(self.file_path, 'r', encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise MalformedInputError(f"Invalid JSON: {e}", str(self.file_path)) from e

        document = parse_har_data(data, str(self.file_path))
        logger.debug(f"Loaded {len(document.entries)} entries from {self.file_path}")
        return document

    @staticmethod
    def load_from_file(file_path: str) -> HarDocument:
        """
        Convenience method to load a HAR file in one call.

        Example:
            document = HarLoader.load_from_file("session.har")
        """
        return HarLoader(file_path).load()


def expand_patterns(patterns: Sequence[str]) -> List[str]:
    """
    Expand file paths and glob patterns into a sorted, de-duplicated file list.

    Plain paths that exist are kept as-is; anything else is treated as a glob
    (``**`` is recursive).
    """
    files: List[str] = []
    seen = set()

    for pattern in patterns:
        if Path(pattern).is_file():
            matches = [pattern]
        else:
            matches = sorted(
                m for m in glob.glob(pattern, recursive=True) if Path(m).is_file()
            )

        for match in matches:
            if match not in seen:
                seen.add(match)
                files.append(match)

    return files


def load_har_files(patterns: Sequence[str]) -> List[Tuple[str, HarDocument]]:
    """
    Load every HAR file matching the given paths or glob patterns.

    Args:
        patterns: File paths or glob patterns

    Returns:
        List of (path, document) pairs in match order

    Raises:
        EmptyInputError: If no file matches
        MalformedInputError: If any matched file is not valid HAR
    """
    files = expand_patterns(patterns)

    if not files:
        raise EmptyInputError(f"No HAR files found matching patterns: {', '.join(patterns)}")

    results = []
    for file_path in files:
        results.append((file_path, HarLoader(file_path).load()))

    logger.info(f"Loaded {len(results)} HAR file(s)")
    return results
