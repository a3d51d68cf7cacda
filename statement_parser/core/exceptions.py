"""
Exceptions raised by the statement parser.

Hierarchy:
    StatementParserError (base)
    ├── DocumentUnreadableError
    └── ConfigurationError
"""
from typing import Any, Dict, Optional


class StatementParserError(Exception):
    """Base exception for all statement parser errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class DocumentUnreadableError(StatementParserError):
    """
    Raised when a document cannot be turned into text.

    Covers corrupted, encrypted and non-PDF input, as well as documents
    without a text layer (scanned images).
    """

    user_message = "Failed to read the document. It may be corrupted or protected."

    def __init__(self, reason: str, source: Optional[str] = None):
        details = {"reason": reason}
        if source:
            details["source"] = source
        super().__init__(self.user_message, details)
        self.reason = reason


class ConfigurationError(StatementParserError):
    """Raised when the issuer registry or field configuration is invalid."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, {"path": path} if path else None)
