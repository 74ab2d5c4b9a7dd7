"""Exceptions raised by the analytics layer."""

from typing import Optional


class AggregationFailed(Exception):
    """Raised when a dashboard cannot be computed from a complete snapshot.

    The bulk fetch either returns every collection or nothing; any query
    error or a timeout surfaces as this single error kind.

    Attributes:
        cause: The underlying exception, also chained as ``__cause__``.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
