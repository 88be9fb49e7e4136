"""
Resolution Engine.

Classifies each candidate against the local index:

    matched_target is an index key, same file as the source -> dropped
    matched_target is an index key                          -> available_locally
    anything else                                           -> external_reference

Resolution never raises and never touches the index; anything ambiguous
ends up external.
"""

from typing import Iterable, List, Union

from regref.core.logging import get_logger
from regref.index.local_index import LocalIndex
from regref.references.models import (
    EXTERNAL_NOTE,
    AvailabilityStatus,
    CandidateReference,
    ReferenceDrop,
    ResolvedReference,
)

logger = get_logger(__name__)

Resolution = Union[ResolvedReference, ReferenceDrop]


def resolve_reference(
    candidate: CandidateReference, index: LocalIndex, source_filename: str
) -> Resolution:
    """Resolve one candidate. Deterministic, no dependency on other candidates."""
    target = candidate.matched_target
    if isinstance(target, str):
        target = target.strip() or None

    entry = index.lookup(target)
    if entry is not None and entry.filename == source_filename:
        return ReferenceDrop(
            candidate=candidate,
            reason=f"{source_filename} references itself",
        )
    if entry is not None:
        return ResolvedReference(
            candidate=candidate,
            availability=AvailabilityStatus.AVAILABLE_LOCALLY,
            local_file=entry.snapshot(),
        )
    return ResolvedReference(
        candidate=candidate,
        availability=AvailabilityStatus.EXTERNAL_REFERENCE,
        note=EXTERNAL_NOTE,
    )


def resolve_references(
    candidates: Iterable[CandidateReference],
    index: LocalIndex,
    source_filename: str,
) -> List[ResolvedReference]:
    """Resolve candidates in arrival order, dropping self-references."""
    resolved: List[ResolvedReference] = []
    for candidate in candidates:
        outcome = resolve_reference(candidate, index, source_filename)
        if isinstance(outcome, ReferenceDrop):
            logger.debug("Dropped reference", reason=outcome.reason)
            continue
        resolved.append(outcome)
    return resolved
