"""Custom exception hierarchy for sitelens."""

from sitelens.models.result import ErrorCategory


class SitelensError(Exception):
    """Base exception for all sitelens errors."""


class NavigationError(SitelensError):
    """Browser failed to load the page."""

    def __init__(self, category: ErrorCategory, raw_message: str):
        super().__init__(raw_message)
        self.category = category
        self.raw_message = raw_message


class StorageError(SitelensError):
    """Database operation failed."""
