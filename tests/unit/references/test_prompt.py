"""Tests for build_reference_prompt()."""

from regref.extraction.models import CircularMetadata
from regref.index.local_index import LocalIndex
from regref.references.prompt import build_reference_prompt, format_target


class TestFormatTarget:
    def test_all_fields(self, circular_a):
        entry = format_target(circular_a)

        assert entry.splitlines() == [
            "- circA.pdf:",
            "   Number: SEBI/X/1",
            "   Subject: Guidelines for Investment Advisers",
            "   Date: March 15, 2021",
            "   Key terms: investment adviser, compliance, guidelines",
        ]

    def test_only_first_five_key_terms(self, circular_b):
        entry = format_target(circular_b)

        assert "Key terms: mutual fund, portfolio, compliance, audit, framework" in entry
        assert "risk management" not in entry

    def test_missing_fields_omitted(self):
        entry = format_target(CircularMetadata(filename="bare.pdf", file_path="/bare.pdf"))

        assert entry == "- bare.pdf:"


class TestBuildReferencePrompt:
    def test_contains_document_and_targets(self, sample_index):
        prompt = build_reference_prompt("\n--- PAGE 1 ---\nBody text\n", sample_index)

        assert "--- PAGE 1 ---\nBody text" in prompt
        assert "- circA.pdf:" in prompt
        assert "- circB.pdf:" in prompt
        assert prompt.index("- circA.pdf:") < prompt.index("- circB.pdf:")

    def test_describes_record_schema(self, sample_index):
        prompt = build_reference_prompt("text", sample_index)

        for field in (
            "exact_text",
            "reference_type",
            "circular_number",
            "title",
            "page_number",
            "context",
            "confidence",
            "reasoning",
            "matched_target",
        ):
            assert f"- {field}:" in prompt
        assert '"external_reference"' in prompt
        assert "Return ONLY a valid JSON array" in prompt

    def test_empty_index(self):
        prompt = build_reference_prompt("text", LocalIndex())

        assert "(none)" in prompt
