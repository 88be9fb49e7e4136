"""
Reference analysis for one document.

    PDF --TextExtractor--> text with page markers
        --build_reference_prompt + LLMClient.generate--> payload
        --normalize_candidates--> candidates
        --resolve_references (source = the PDF's filename)--> resolved
        --aggregate_references--> aggregate

The candidate stage degrades to zero candidates on any of its soft failures
(unreadable document, unavailable model, malformed payload). The failure
kind is recorded on the result so the report can say why nothing was found.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

from regref.core.exceptions import (
    CollaboratorUnavailable,
    ExtractionFailure,
    NormalizationError,
    RegRefError,
)
from regref.core.logging import get_logger
from regref.index.local_index import LocalIndex
from regref.ingest.text_extractor import TextExtractor
from regref.llm.base import GenerationConfig, LLMClient
from regref.references.aggregator import aggregate_references
from regref.references.models import (
    CandidateReference,
    ReferenceAggregate,
    ResolvedReference,
)
from regref.references.normalizer import normalize_candidates
from regref.references.prompt import build_reference_prompt
from regref.references.resolver import resolve_references

logger = get_logger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Everything known about one analyzed document."""

    source_file: str
    source_path: Path
    analyzed_at: datetime
    references: Tuple[ResolvedReference, ...]
    aggregate: ReferenceAggregate
    collection_size: int
    page_count: int = 0
    candidate_error: Optional[str] = None
    candidate_count: int = field(default=0)

    @property
    def dropped_count(self) -> int:
        """Candidates not materialized (self-references)."""
        return self.candidate_count - len(self.references)


class ReferenceAnalyzer:
    """
    Finds references in a document and classifies them against the index.

    Args:
        index: Local index built for this run
        llm_client: Inference collaborator
        text_extractor: Full-text source for the analyzed document
        generation_config: Settings for the single inference call
    """

    def __init__(
        self,
        index: LocalIndex,
        llm_client: LLMClient,
        text_extractor: Optional[TextExtractor] = None,
        generation_config: Optional[GenerationConfig] = None,
    ) -> None:
        self.index = index
        self.llm_client = llm_client
        self.text_extractor = text_extractor or TextExtractor()
        self.generation_config = generation_config or GenerationConfig(json_mode=True)

    def _find_candidates(self, text: str) -> Tuple[CandidateReference, ...]:
        """
        Run the inference call and normalize its payload.

        Raises:
            CollaboratorUnavailable: If the model gave no response
            NormalizationError: If the response is not a list of records
        """
        prompt = build_reference_prompt(text, self.index)
        payload = self.llm_client.generate(prompt, self.generation_config)
        return normalize_candidates(payload)

    def analyze(self, path: Path) -> AnalysisResult:
        """
        Analyze the document at path.

        Never raises for candidate-stage failures; see candidate_error on the
        result.
        """
        path = Path(path)
        source = path.name
        analyzed_at = datetime.now()

        page_count = 0
        candidates: Tuple[CandidateReference, ...] = ()
        candidate_error: Optional[str] = None
        try:
            document = self.text_extractor.extract_document(path)
            page_count = document.page_count
            candidates = self._find_candidates(document.text)
        except (ExtractionFailure, CollaboratorUnavailable, NormalizationError) as e:
            candidate_error = e.kind
            logger.warning(
                "Candidate stage failed, continuing with zero candidates",
                source=source,
                kind=e.kind,
                error=str(e),
            )
        except RegRefError as e:
            logger.error(
                "Unexpected analysis failure", source=source, kind=e.kind, error=str(e)
            )
            raise

        resolved = resolve_references(candidates, self.index, source)
        aggregate = aggregate_references(resolved)
        summary = aggregate.summary
        logger.info(
            "Analysis complete",
            source=source,
            candidates=len(candidates),
            local=summary.available_locally,
            external=summary.external,
        )

        return AnalysisResult(
            source_file=source,
            source_path=path.resolve(),
            analyzed_at=analyzed_at,
            references=tuple(resolved),
            aggregate=aggregate,
            collection_size=len(self.index),
            page_count=page_count,
            candidate_error=candidate_error,
            candidate_count=len(candidates),
        )
