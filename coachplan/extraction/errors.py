"""Extraction error types.

The engine expresses structural ambiguity, field misses and validation
findings as data. Only invalid input and programming errors raise.

Standard error codes:
- INVALID_DOCUMENT_TEXT: Document text is not a string
- EMPTY_DOCUMENT: Document text is empty or whitespace only
- UNKNOWN_PATTERN: No strategy is registered for the requested pattern
"""

from typing import Any


class ExtractionError(RuntimeError):
    """Base error for the extraction engine.

    Attributes:
        code: Error code (e.g., "EMPTY_DOCUMENT", "UNKNOWN_PATTERN")
        message: Human-readable error message
        details: Optional structured context for logging
    """

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code}] {message}")


class InvalidDocumentError(ExtractionError):
    """Raised when the input document cannot be processed at all."""


class UnknownPatternError(ExtractionError):
    """Raised when a strategy is requested for an unknown organization pattern."""
