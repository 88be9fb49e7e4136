"""
Tests for the RegRef exception hierarchy.

Organization
------------
- TestSanitizeMessage: secret scrubbing
- TestHierarchy: kinds and inheritance the analyzer branches on
- TestErrorInfo: get_error_info() and root cause lookup
"""

import pytest

from regref.core.exceptions import (
    CollaboratorUnavailable,
    CollectionNotFoundError,
    ConfigurationError,
    ConfigValidationError,
    ContextLengthError,
    ExtractionFailure,
    LLMError,
    NormalizationError,
    RegRefError,
    ValidationError,
    get_error_info,
    get_root_cause,
    sanitize_message,
)


class TestSanitizeMessage:
    def test_google_key_removed(self):
        message = "call failed for key AIzaSyA1234567890abcdefghijklmnop"

        assert "AIza" not in sanitize_message(message)

    def test_env_assignment_hidden(self):
        assert sanitize_message("GEMINI_API_KEY=secret") == "GEMINI_API_KEY=<hidden>"

    def test_bearer_token(self):
        assert sanitize_message("Bearer abc.def-123") == "Bearer <token>"

    def test_plain_message_unchanged(self):
        assert sanitize_message("File not found") == "File not found"

    def test_applied_to_exceptions(self):
        error = LLMError("bad key AIzaSyA1234567890abcdefghijklmnop")

        assert "<api-key>" in str(error)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_type,kind",
        [
            (ExtractionFailure, "ExtractionFailure"),
            (CollectionNotFoundError, "CollectionNotFound"),
            (NormalizationError, "NormalizationError"),
            (CollaboratorUnavailable, "CollaboratorUnavailable"),
            (LLMError, "CollaboratorUnavailable"),
            (ConfigurationError, "CollaboratorUnavailable"),
            (ValidationError, "ValidationError"),
            (ConfigValidationError, "ValidationError"),
        ],
    )
    def test_kind(self, exc_type, kind):
        assert exc_type("message").kind == kind

    def test_all_derive_from_base(self):
        for exc_type in (ExtractionFailure, NormalizationError, ConfigurationError):
            assert issubclass(exc_type, RegRefError)

    def test_llm_errors_are_collaborator_unavailable(self):
        with pytest.raises(CollaboratorUnavailable):
            raise ContextLengthError("too long", max_tokens=10, actual_tokens=20)

    def test_attributes(self):
        assert ExtractionFailure("x", filename="a.pdf").filename == "a.pdf"
        assert NormalizationError("x", payload_preview="{").payload_preview == "{"
        assert ConfigValidationError("x", field="llm.model").field == "llm.model"

    def test_per_instance_overrides(self):
        error = RegRefError("x", error_code="RR-TEST-1", how_to_fix=["do this"])

        assert error.error_code == "RR-TEST-1"
        assert error.how_to_fix == ["do this"]
        assert RegRefError.error_code == "RR-ERR-000"


class TestErrorInfo:
    def test_regref_error(self):
        info = get_error_info(ExtractionFailure("x"))

        assert info["kind"] == "ExtractionFailure"
        assert info["error_code"] == "RR-EXT-001"
        assert info["how_to_fix"]

    def test_foreign_error(self):
        info = get_error_info(KeyError("x"))

        assert info["kind"] == "KeyError"
        assert info["error_code"] == "RR-ERR-000"

    def test_root_cause(self):
        try:
            try:
                raise OSError("disk")
            except OSError as e:
                raise ExtractionFailure("wrapped") from e
        except ExtractionFailure as outer:
            root = outer.get_root_cause()

        assert isinstance(root, OSError)
        assert get_root_cause(ValueError("alone")).args == ("alone",)
