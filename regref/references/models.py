"""
Reference data models.

    CandidateReference   one reference as proposed by the model (normalized)
    ResolvedReference    a candidate classified against the local index
    ReferenceDrop        explicit decision not to materialize a candidate
    ReferenceAggregate   resolved references partitioned for the report

AvailabilityStatus replaces the model's "external_reference" sentinel with
an explicit three-way status. Only the resolver assigns it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from regref.extraction.models import LocalFileSnapshot

EXTERNAL_NOTE = "Referenced document not in local collection"


class Confidence(str, Enum):
    """Model-reported confidence for a candidate."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "Confidence":
        """Map any value to a Confidence; unrecognized values are UNKNOWN."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return cls.UNKNOWN
        return cls.UNKNOWN


class AvailabilityStatus(str, Enum):
    SELF_REFERENCE = "self_reference"
    AVAILABLE_LOCALLY = "available_locally"
    EXTERNAL_REFERENCE = "external_reference"


@dataclass(frozen=True)
class CandidateReference:
    """A reference proposed by the model, after normalization."""

    exact_text: str = "N/A"
    reference_type: str = "other"
    circular_number: Optional[str] = None
    title: Optional[str] = None
    page_number: Optional[int] = None
    context: str = ""
    confidence: Confidence = Confidence.UNKNOWN
    reasoning: str = ""
    matched_target: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exact_text": self.exact_text,
            "reference_type": self.reference_type,
            "circular_number": self.circular_number,
            "title": self.title,
            "page_number": self.page_number,
            "context": self.context,
            "confidence": self.confidence.value,
            "reasoning": self.reasoning,
            "matched_target": self.matched_target,
        }


@dataclass(frozen=True)
class ResolvedReference:
    """
    A candidate with its availability.

    Exactly one of local_file (available_locally) or note
    (external_reference) is set. Self-references are never materialized.
    """

    candidate: CandidateReference
    availability: AvailabilityStatus
    local_file: Optional[LocalFileSnapshot] = None
    note: Optional[str] = None

    def __post_init__(self) -> None:
        if self.availability is AvailabilityStatus.SELF_REFERENCE:
            raise ValueError("Self-references cannot be materialized")
        if self.availability is AvailabilityStatus.AVAILABLE_LOCALLY:
            if self.local_file is None:
                raise ValueError("available_locally requires a local_file snapshot")
        elif self.local_file is not None:
            raise ValueError("external_reference cannot carry a local_file")

    @property
    def is_local(self) -> bool:
        return self.availability is AvailabilityStatus.AVAILABLE_LOCALLY

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into the report record layout."""
        data = self.candidate.to_dict()
        data["availability_status"] = self.availability.value
        if self.local_file is not None:
            data["local_file"] = self.local_file.to_dict()
        if self.note is not None:
            data["note"] = self.note
        return data


@dataclass(frozen=True)
class ReferenceDrop:
    """A candidate that was deliberately not materialized."""

    candidate: CandidateReference
    status: AvailabilityStatus = AvailabilityStatus.SELF_REFERENCE
    reason: str = "Document references itself"


@dataclass(frozen=True)
class ReferenceSummary:
    available_locally: int = 0
    external: int = 0

    @property
    def total(self) -> int:
        return self.available_locally + self.external

    def to_dict(self) -> Dict[str, int]:
        return {
            "total_references": self.total,
            "local_references": self.available_locally,
            "external_references": self.external,
        }


@dataclass(frozen=True)
class ReferenceAggregate:
    """Resolved references split by availability, arrival order kept."""

    local: Tuple[ResolvedReference, ...] = field(default_factory=tuple)
    external: Tuple[ResolvedReference, ...] = field(default_factory=tuple)

    @property
    def summary(self) -> ReferenceSummary:
        return ReferenceSummary(
            available_locally=len(self.local), external=len(self.external)
        )
