"""
Errors raised by index operations.

The driver-code to error mapping lives in index_operations.py.
"""

from typing import Optional


class IndexOperationError(RuntimeError):
    """Base class for index operation failures."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class IndexExistsWithDifferentName(IndexOperationError):
    """An index with the same keys and options exists under another name."""


class ExistingIndexHasSameName(IndexOperationError):
    """An index with the requested name exists with other keys or options."""


class InvalidDefinition(IndexOperationError, ValueError):
    """The index definition could not be parsed, or is missing."""


class DriverError(IndexOperationError):
    """Any other failure reported by the database client."""

    def __init__(self, message: str, code: Optional[int] = None, details: Optional[dict] = None):
        super().__init__(message, code)
        self.details = details

    def __str__(self):
        if self.code is None:
            return self.message
        return f"{self.message} (code {self.code})"
