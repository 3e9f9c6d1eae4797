"""
Exceptions raised by the function adapter.

Errors raised by the invoked functions themselves are never wrapped; they
propagate to the Cloud Functions host unchanged.
"""

from typing import Any, Optional


class FunctionAdapterError(Exception):
    """Base exception for adapter errors."""


class FunctionNotFoundError(FunctionAdapterError, LookupError):
    """Raised when no function can be resolved for a definition."""

    def __init__(self, message: str, definition: Optional[str] = None):
        super().__init__(message)
        self.definition = definition


class MessageConversionError(FunctionAdapterError):
    """Raised when a payload cannot be converted to or from a declared type."""

    def __init__(self, message: str, payload: Any = None,
                 original_error: Optional[Exception] = None):
        super().__init__(message)
        self.payload = payload
        self.original_error = original_error
