"""Exception types raised by the analytics engine."""

from __future__ import annotations


class AnalyticsError(Exception):
    """Base class for analytics failures; wraps an optional original cause."""

    def __init__(self, message: str, original_error: BaseException | None = None):
        super().__init__(message)
        self.original_error = original_error


class ConnectivityFailure(AnalyticsError):
    """The sales repository could not be reached."""


class InsufficientDataError(AnalyticsError):
    """The query succeeded but produced nothing to analyze."""
