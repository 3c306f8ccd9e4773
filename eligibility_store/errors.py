"""
Exceptions raised by storage backends.

Backends wrap driver and SQLAlchemy errors in these types so callers can tell
an unreachable store apart from a statement that failed once connected.
The original exception is always chained as ``__cause__``.
"""

from typing import Optional


class StoreError(Exception):
    """Base class for all storage failures."""


class StoreUnavailable(StoreError):
    """A connection could not be acquired, or was lost mid-request."""


class QueryFailed(StoreError):
    """
    A statement failed after a connection was acquired.

    Typical causes are schema drift (missing table or column) and
    malformed statements.
    """

    def __init__(self, query: str, message: Optional[str] = None):
        self.query = query
        super().__init__(message or f"Query {query!r} failed")


class DataIntegrityError(QueryFailed):
    """Stored rows violate an invariant, e.g. an eligibility row without its contract."""
