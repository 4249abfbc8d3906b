"""Custom exceptions for the Battlerite client.

All exceptions inherit from :class:`BattleriteError` so callers can catch
the full family with a single ``except BattleriteError`` clause.
"""

from __future__ import annotations


class BattleriteError(Exception):
    """Base exception for all Battlerite client errors."""


class DecodeError(BattleriteError):
    """Raised when a payload cannot be interpreted as the expected record.

    Attributes:
        path: Dotted location of the offending field inside the payload
            (e.g. ``"[4].dataObject.round"``). Empty when the failure
            concerns the payload as a whole.
        index: Position of the offending element in a telemetry event
            array, or ``None`` outside of event decoding.
    """

    def __init__(self, message: str = "", path: str = "", index: int | None = None) -> None:
        if message:
            super().__init__(message)
        else:
            super().__init__()
        self.path = path
        self.index = index


class MissingFieldError(DecodeError):
    """Raised when a required field is absent from a resource or event."""


class FieldTypeError(DecodeError):
    """Raised when a field is present but does not have the expected shape."""


class TransportError(BattleriteError):
    """Raised when an HTTP request fails or returns an error status."""


class RateLimitError(TransportError):
    """Raised when the service reports no remaining requests in the window."""


class FilterError(BattleriteError, ValueError):
    """Raised when a search filter is missing a required parameter."""
