"""
errors.py - Exception types raised by the insights workflow.

Store-read and API errors propagate up to the invocation handler, which logs
them and replaces them with a generic InternalError for the caller.
"""

from typing import Optional


class JournalInsightsError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(JournalInsightsError):
    """Required configuration is missing or invalid."""


class InvalidDocumentError(JournalInsightsError):
    """A stored document is missing a field the workflow depends on."""


class InsightAPIError(JournalInsightsError):
    """The language-model API answered with an error or an unusable body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class InternalError(JournalInsightsError):
    """
    Generic failure signalled to the caller of the function.
    The message is safe to expose; the real cause is only logged.
    """

    code = "internal"

    def __init__(self, message: str = "Failed to add insights."):
        super().__init__(message)
        self.message = message
