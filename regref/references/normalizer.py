"""
Candidate Normalizer.

Turns the model's text payload into a tuple of CandidateReference.

The payload is expected to be a JSON array of reference records, possibly
wrapped in a markdown code fence. Records are validated one by one with a
lenient pydantic model: missing or odd optional fields get defaults, they
never reject the record. The top level is strict: anything that does not
decode to a list raises NormalizationError and no partial result is
returned.
"""

import json
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from regref.core.exceptions import NormalizationError
from regref.core.logging import get_logger
from regref.references.models import CandidateReference, Confidence

logger = get_logger(__name__)

EXTERNAL_SENTINEL = "external_reference"
PREVIEW_CHARS = 200


def strip_wrapping_markers(payload: str) -> str:
    """Remove surrounding whitespace and a markdown code fence."""
    text = payload.strip()
    if text.startswith("```json"):
        text = text[len("```json") :]
    if text.startswith("```"):
        text = text[len("```") :]
    if text.endswith("```"):
        text = text[: -len("```")]
    return text.strip()


def _none_to_default(value: Any, default: Any) -> Any:
    return default if value is None else value


class RawCandidate(BaseModel):
    """One reference record as the model wrote it."""

    model_config = ConfigDict(extra="ignore")

    exact_text: str = "N/A"
    reference_type: str = "other"
    circular_number: Optional[str] = None
    title: Optional[str] = None
    page_number: Optional[int] = None
    context: str = ""
    confidence: Confidence = Confidence.UNKNOWN
    reasoning: str = ""
    matched_target: Optional[str] = Field(None, description="Local filename or sentinel")

    @field_validator("exact_text", mode="before")
    @classmethod
    def _exact_text(cls, v: Any) -> str:
        return str(_none_to_default(v, "N/A"))

    @field_validator("reference_type", mode="before")
    @classmethod
    def _reference_type(cls, v: Any) -> str:
        return str(_none_to_default(v, "other"))

    @field_validator("context", "reasoning", mode="before")
    @classmethod
    def _plain_text(cls, v: Any) -> str:
        return str(_none_to_default(v, ""))

    @field_validator("circular_number", "title", mode="before")
    @classmethod
    def _optional_text(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @field_validator("confidence", mode="before")
    @classmethod
    def _confidence(cls, v: Any) -> Confidence:
        return Confidence.parse(v)

    @field_validator("page_number", mode="before")
    @classmethod
    def _page_number(cls, v: Any) -> Optional[int]:
        if isinstance(v, bool):
            return None
        if isinstance(v, int):
            return v
        if isinstance(v, str) and v.strip().isdigit():
            return int(v.strip())
        return None

    @field_validator("matched_target", mode="before")
    @classmethod
    def _matched_target(cls, v: Any) -> Optional[str]:
        if not isinstance(v, str):
            return None
        target = v.strip()
        if not target or target == EXTERNAL_SENTINEL:
            return None
        return target

    def to_candidate(self) -> CandidateReference:
        return CandidateReference(**self.model_dump())


def _decode(payload: str) -> List[Any]:
    text = strip_wrapping_markers(payload)
    preview = text[:PREVIEW_CHARS]
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise NormalizationError(
            f"Model response is not valid JSON: {e}", payload_preview=preview
        ) from e

    if isinstance(data, dict) and isinstance(data.get("references"), list):
        if len(data) == 1:
            return data["references"]
    if not isinstance(data, list):
        raise NormalizationError(
            f"Model response must be a JSON array, got {type(data).__name__}",
            payload_preview=preview,
        )
    return data


def normalize_candidates(payload: str) -> Tuple[CandidateReference, ...]:
    """
    Normalize a model payload into candidates, in payload order.

    Args:
        payload: Raw text returned by the model

    Returns:
        Tuple of CandidateReference (possibly empty)

    Raises:
        NormalizationError: If the payload is not a JSON list of records
    """
    if not isinstance(payload, str):
        raise NormalizationError(
            f"Model response must be text, got {type(payload).__name__}"
        )

    records = _decode(payload)
    candidates: List[CandidateReference] = []
    for position, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning(
                "Skipping non-object reference record",
                position=position,
                record_type=type(record).__name__,
            )
            continue
        try:
            raw = RawCandidate.model_validate(record)
        except ValidationError as e:
            logger.warning(
                "Skipping invalid reference record",
                position=position,
                errors=e.error_count(),
            )
            continue
        candidates.append(raw.to_candidate())

    logger.debug("Normalized candidates", count=len(candidates))
    return tuple(candidates)
