"""
HarTap Errors

Exception types raised by the HAR loader and the entry merger.

Transform-time problems (unparsable bodies, malformed URLs) are never raised;
they are absorbed where they occur and the input passes through unchanged.
"""

from typing import Optional


class HarTapError(Exception):
    """Base class for all HarTap errors."""


class MalformedInputError(HarTapError):
    """
    A capture file violates the HAR structure HarTap relies on.

    Attributes:
        source: Identifier of the offending input (usually a file path)
        reason: What was wrong with it
    """

    def __init__(self, reason: str, source: Optional[str] = None):
        self.reason = reason
        self.source = source
        if source:
            message = f'Failed to parse HAR file "{source}": {reason}'
        else:
            message = reason
        super().__init__(message)


class EmptyInputError(HarTapError, ValueError):
    """Raised when an operation that needs at least one input receives none."""
