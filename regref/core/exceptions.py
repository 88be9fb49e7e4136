"""
Centralized Exception Hierarchy for RegRef.

This module defines all custom exceptions used throughout RegRef.
All exceptions inherit from RegRefError for easy catching.

Each exception includes:
- kind: Failure category a caller can branch on (retry vs. abort)
- error_code: Unique identifier for documentation lookup (e.g., "RR-EXT-001")
- why_it_happened: Explanation of the root cause
- how_to_fix: Actionable steps to resolve the issue

Usage
-----
    from regref.core.exceptions import (
        RegRefError,
        ExtractionFailure,
        NormalizationError,
    )

    try:
        candidates = normalize_candidates(payload)
    except NormalizationError as e:
        logger.warning("Payload rejected", kind=e.kind, error=str(e))

Exception Hierarchy
-------------------
    RegRefError (base)
    ├── ExtractionFailure
    ├── CollectionNotFoundError
    ├── NormalizationError
    ├── CollaboratorUnavailable
    │   └── LLMError
    │       ├── ConfigurationError
    │       └── ContextLengthError
    └── ValidationError
        └── ConfigValidationError

Soft vs. hard failures
----------------------
ExtractionFailure is soft per local file (the file is skipped).
CollaboratorUnavailable is soft per analysis (zero candidates).
NormalizationError is hard for the candidate set it was raised for: no
partial result is ever returned. Nothing in RegRef retries; that policy
belongs to the caller.
"""

import re
from typing import Any, Dict, List, Optional


def sanitize_message(message: str) -> str:
    """Sanitize an error message to avoid leaking API keys or tokens.

    Args:
        message: Original error message

    Returns:
        Sanitized message with sensitive values replaced
    """
    if not message:
        return message

    patterns = [
        # Google API keys
        (r"AIza[0-9A-Za-z_\-]{20,}", "<api-key>"),
        (r"(api_key[=:][\s]*)[a-zA-Z0-9_-]{20,}", r"\1<api-key>"),
        (r"(GEMINI_API_KEY|GOOGLE_API_KEY|API_KEY)[=:]\s*[^\s]+", r"\1=<hidden>"),
        (r"Bearer\s+[a-zA-Z0-9_.-]+", "Bearer <token>"),
        (r"(key=)[a-zA-Z0-9_\-]{20,}", r"\1<api-key>"),
    ]

    result = message
    for pattern, replacement in patterns:
        result = re.sub(pattern, replacement, result)
    return result


def get_root_cause(exc: BaseException) -> BaseException:
    """Follow __cause__ / __context__ to the original error of a chain."""
    seen = set()
    current = exc

    while current is not None:
        if id(current) in seen:
            break
        seen.add(id(current))

        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__context__ is not None:
            current = current.__context__
        else:
            break

    return current


class RegRefError(Exception):
    """
    Base exception for all RegRef errors.

    Example
    -------
        try:
            analyzer.analyze(path)
        except RegRefError as e:
            logger.error(f"Analysis failed: {e}")
            print(f"Fix: {e.how_to_fix}")
    """

    kind: str = "RegRefError"
    error_code: str = "RR-ERR-000"
    why_it_happened: str = "An unexpected error occurred"
    how_to_fix: List[str] = ["Check the error message for details"]

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        super().__init__(sanitize_message(message))

        if error_code is not None:
            self.error_code = error_code
        if why_it_happened is not None:
            self.why_it_happened = why_it_happened
        if how_to_fix is not None:
            self.how_to_fix = how_to_fix

    @property
    def user_message(self) -> str:
        """Get the user-friendly error message."""
        return str(self)

    def get_root_cause(self) -> BaseException:
        """Get the root cause of this exception chain."""
        return get_root_cause(self)


# ============================================================================
# Extraction Exceptions
# ============================================================================


class ExtractionFailure(RegRefError):
    """
    Raised when no usable text can be obtained from a document.

    Soft failure: the index builder skips the file and keeps going, and
    the analyzer reports zero candidates for the analyzed document.

    Attributes
    ----------
    filename : str, optional
        Name of the document that failed
    """

    kind = "ExtractionFailure"
    error_code = "RR-EXT-001"
    why_it_happened = (
        "Could not extract text from the document. The file may be scanned, "
        "corrupted, password-protected or empty"
    )
    how_to_fix = [
        "Check that the PDF opens and has selectable text",
        "Remove password protection from the file",
        "Run OCR on scanned circulars before adding them to the collection",
    ]

    def __init__(
        self,
        message: str,
        filename: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.filename = filename


class CollectionNotFoundError(RegRefError):
    """Raised when the local collection directory does not exist."""

    kind = "CollectionNotFound"
    error_code = "RR-COL-001"
    why_it_happened = "The local circular collection directory could not be found"
    how_to_fix = [
        "Create the directory and place the circular PDFs in it",
        "Set collection.directory in config.yaml",
        "Or export REGREF_COLLECTION_DIR=/path/to/circulars",
    ]


# ============================================================================
# Candidate Exceptions
# ============================================================================


class NormalizationError(RegRefError):
    """
    Raised when the inference payload cannot be decoded into a list of records.

    Hard failure for the candidate set: no partial or best-effort result is
    ever returned alongside this error.

    Attributes
    ----------
    payload_preview : str
        First characters of the rejected payload, for logs
    """

    kind = "NormalizationError"
    error_code = "RR-NRM-001"
    why_it_happened = (
        "The model response was not a JSON array of reference records, even "
        "after removing code fences"
    )
    how_to_fix = [
        "Re-run the analysis; model output can vary between calls",
        "Lower llm.temperature in config.yaml for more stable output",
        "Use a model that supports JSON output mode",
    ]

    def __init__(self, message: str, payload_preview: str = "", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.payload_preview = payload_preview


# ============================================================================
# Collaborator Exceptions
# ============================================================================


class CollaboratorUnavailable(RegRefError):
    """
    Raised when the inference collaborator cannot produce a response.

    Covers unreachable services, timeouts and missing credentials. Soft at
    the analysis level: the analysis proceeds with zero candidates.
    """

    kind = "CollaboratorUnavailable"
    error_code = "RR-COL-100"
    why_it_happened = "The inference service could not be reached or returned nothing"
    how_to_fix = [
        "Check your internet connection",
        "Verify the API key is valid",
        "Increase llm.timeout_seconds for long documents",
    ]


class LLMError(CollaboratorUnavailable):
    """Raised when an LLM provider call fails."""

    error_code = "RR-LLM-000"
    why_it_happened = "An LLM operation failed"
    how_to_fix = [
        "Check your API key is set correctly",
        "Verify your internet connection",
        "Retry the analysis later",
    ]


class ConfigurationError(LLMError):
    """
    Raised when LLM configuration is invalid.

    This can occur when:
    - API key is missing
    - Provider name is not supported
    - google-generativeai is not installed
    """

    error_code = "RR-LLM-002"
    why_it_happened = (
        "The LLM configuration is invalid. The API key may be missing or the "
        "provider may not be supported"
    )
    how_to_fix = [
        "Set your API key: export GEMINI_API_KEY=your-key",
        "Or put GEMINI_API_KEY=your-key in .env.local",
        "Use llm.provider: gemini in config.yaml",
    ]


class ContextLengthError(LLMError):
    """
    Raised when the prompt exceeds the model's context window.

    Attributes
    ----------
    max_tokens : int
        Maximum tokens the model supports
    actual_tokens : int
        Token count of the prompt
    """

    error_code = "RR-LLM-003"
    why_it_happened = "The document is too long for the model's context window"
    how_to_fix = [
        "Split the document and analyze the parts separately",
        "Switch to a model with a larger context window",
    ]

    def __init__(
        self,
        message: str,
        max_tokens: Optional[int] = None,
        actual_tokens: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.max_tokens = max_tokens
        self.actual_tokens = actual_tokens


# ============================================================================
# Validation Exceptions
# ============================================================================


class ValidationError(RegRefError):
    """Raised when input validation fails."""

    kind = "ValidationError"
    error_code = "RR-VAL-000"
    why_it_happened = "The provided input did not pass validation"
    how_to_fix = ["Check the input value and try again"]


class ConfigValidationError(ValidationError):
    """
    Raised when a configuration value is out of range.

    Attributes
    ----------
    field : str, optional
        Dotted name of the offending setting
    """

    error_code = "RR-VAL-001"
    why_it_happened = "A configuration value in config.yaml is invalid"
    how_to_fix = [
        "Check the value named in the message",
        "Delete the setting to fall back to the default",
    ]

    def __init__(self, message: str, field: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.field = field


def get_error_info(exc: BaseException) -> Dict[str, Any]:
    """Collect kind, code, why and how-to-fix for any exception."""
    if isinstance(exc, RegRefError):
        return {
            "kind": exc.kind,
            "error_code": exc.error_code,
            "why_it_happened": exc.why_it_happened,
            "how_to_fix": list(exc.how_to_fix),
        }
    return {
        "kind": type(exc).__name__,
        "error_code": RegRefError.error_code,
        "why_it_happened": RegRefError.why_it_happened,
        "how_to_fix": list(RegRefError.how_to_fix),
    }
