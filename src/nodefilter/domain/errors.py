"""Domain-specific errors.

Configuration errors are logged and disable a feature; base URL errors turn the
current document into a failed parse record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class NodeFilterError(Exception):
    """Base class for all domain errors."""


@dataclass(frozen=True)
class DomainErrorInfo:
    code: str
    message: str
    detail: Optional[str] = None


class ConfigurationError(NodeFilterError):
    """Raised when a mode value or rule string cannot be compiled."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="CONFIGURATION_ERROR", message=message, detail=detail)


class BaseURLError(NodeFilterError):
    """Raised when a document's base URL cannot be parsed."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="INVALID_BASE_URL", message=message, detail=detail)
