"""
Exceptions for the Pivot API.

Every error the request pipeline can raise derives from PivotException and
carries the HTTP status the API layer maps it to.

Usage: from src.core.exceptions import PivotException, ProviderError
"""

from typing import Any, Optional


class PivotException(Exception):
    """
    Base exception for all Pivot API errors.
    """

    status_code: int = 500

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.context = context


class ValidationError(PivotException):
    """Missing or empty required request fields."""

    status_code = 400


class ConfigurationError(PivotException):
    """A required provider credential is absent."""

    pass


class ProviderError(PivotException):
    """
    An upstream provider returned a non-success HTTP status or could not
    be reached.
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        provider: Optional[str] = None,
        context: Optional[Any] = None,
    ):
        super().__init__(message, context)
        self.status = status
        self.provider = provider


class ProviderTimeoutError(ProviderError):
    """A provider call exceeded its timeout."""

    pass


class MalformedResponseError(PivotException):
    """
    A provider response could not be parsed into the expected shape.
    """

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message, context=raw)
        self.raw = raw


class MissingTopicError(PivotException):
    """Topic extraction succeeded but produced no core subject."""

    pass
