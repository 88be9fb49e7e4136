"""
Reference candidates: normalization, resolution and aggregation.

    payload --normalize_candidates--> CandidateReference*
            --resolve_references----> ResolvedReference* (self-references dropped)
            --aggregate_references--> ReferenceAggregate
"""

from regref.references.aggregator import aggregate_references
from regref.references.models import (
    AvailabilityStatus,
    CandidateReference,
    Confidence,
    ReferenceAggregate,
    ReferenceDrop,
    ReferenceSummary,
    ResolvedReference,
)
from regref.references.normalizer import normalize_candidates, strip_wrapping_markers
from regref.references.prompt import build_reference_prompt
from regref.references.resolver import resolve_reference, resolve_references

__all__ = [
    "AvailabilityStatus",
    "CandidateReference",
    "Confidence",
    "ReferenceAggregate",
    "ReferenceDrop",
    "ReferenceSummary",
    "ResolvedReference",
    "aggregate_references",
    "build_reference_prompt",
    "normalize_candidates",
    "resolve_reference",
    "resolve_references",
    "strip_wrapping_markers",
]
