"""
Shared pytest fixtures for RegRef tests.

Fixture Organization
--------------------
- **temp_dir**: Temporary directory for file operations
- **circular_a / circular_b / sample_index**: Local index built from metadata
- **make_candidate**: CandidateReference factory
- **FakeLLMClient / fake_llm**: LLMClient returning a canned payload
- **FakeTextExtractor**: Text source keyed by filename, no PyMuPDF needed

No test touches the network or needs a real PDF.
"""

import json
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

import pytest

from regref.core.exceptions import ExtractionFailure
from regref.extraction.models import CircularMetadata
from regref.index.local_index import LocalIndex
from regref.ingest.text_extractor import ExtractedDocument, join_pages
from regref.llm.base import GenerationConfig, LLMClient
from regref.references.models import CandidateReference, Confidence


# ============================================================================
# Path and Directory Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ============================================================================
# Metadata and Index Fixtures
# ============================================================================


@pytest.fixture
def circular_a() -> CircularMetadata:
    return CircularMetadata(
        filename="circA.pdf",
        file_path="/collection/circA.pdf",
        circular_number="SEBI/X/1",
        subject="Guidelines for Investment Advisers",
        date="March 15, 2021",
        key_terms=("investment adviser", "compliance", "guidelines"),
    )


@pytest.fixture
def circular_b() -> CircularMetadata:
    return CircularMetadata(
        filename="circB.pdf",
        file_path="/collection/circB.pdf",
        circular_number="SEBI/HO/IMD/DF3/CIR/P/2019/17",
        subject="Risk management framework for mutual funds",
        date="January 4, 2019",
        key_terms=(
            "mutual fund",
            "portfolio",
            "compliance",
            "audit",
            "framework",
            "risk management",
            "disclosure",
        ),
    )


@pytest.fixture
def sample_index(circular_a: CircularMetadata, circular_b: CircularMetadata) -> LocalIndex:
    return LocalIndex({m.filename: m for m in (circular_b, circular_a)})


# ============================================================================
# Candidate Fixtures
# ============================================================================


@pytest.fixture
def make_candidate():
    """Factory for CandidateReference with overridable fields.

    Example:
        def test_x(make_candidate):
            candidate = make_candidate(matched_target="circA.pdf")
    """

    def _make(**overrides: Any) -> CandidateReference:
        fields: Dict[str, Any] = {
            "exact_text": "SEBI/X/1 dated March 15, 2021",
            "reference_type": "sebi_circular",
            "circular_number": "SEBI/X/1",
            "title": "Guidelines for Investment Advisers",
            "page_number": 2,
            "context": "As per SEBI/X/1 dated March 15, 2021, advisers must comply.",
            "confidence": Confidence.HIGH,
            "reasoning": "Explicit circular number",
            "matched_target": None,
        }
        fields.update(overrides)
        return CandidateReference(**fields)

    return _make


def payload_of(*records: Dict[str, Any]) -> str:
    """Serialize records the way the model returns them (fenced JSON)."""
    return "```json\n" + json.dumps(list(records), indent=2) + "\n```"


# ============================================================================
# Collaborator Fakes
# ============================================================================


class FakeLLMClient(LLMClient):
    """LLMClient returning a fixed payload, or raising a fixed error."""

    def __init__(self, payload: str = "[]", error: Optional[Exception] = None) -> None:
        self.payload = payload
        self.error = error
        self.prompts: List[str] = []
        self.configs: List[Optional[GenerationConfig]] = []

    def generate(
        self, prompt: str, config: Optional[GenerationConfig] = None, **kwargs: Any
    ) -> str:
        self.prompts.append(prompt)
        self.configs.append(config)
        if self.error is not None:
            raise self.error
        return self.payload

    def is_available(self) -> bool:
        return True

    @property
    def model_name(self) -> str:
        return "fake-model"


class FakeTextExtractor:
    """Text source keyed by filename.

    Missing filenames raise ExtractionFailure, like an unreadable PDF.
    """

    def __init__(self, pages_by_name: Optional[Dict[str, List[str]]] = None) -> None:
        self.pages_by_name = pages_by_name or {}

    def _pages(self, path: Path) -> List[str]:
        name = Path(path).name
        if name not in self.pages_by_name:
            raise ExtractionFailure(f"Cannot read {name}", filename=name)
        return self.pages_by_name[name]

    def extract_leading_text(self, path: Path, max_pages: int = 2) -> str:
        return "\n".join(self._pages(path)[:max_pages])

    def extract_document(self, path: Path) -> ExtractedDocument:
        pages = self._pages(path)
        return ExtractedDocument(text=join_pages(pages), page_count=len(pages))


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient()
