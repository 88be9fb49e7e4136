"""Circular metadata extractor.

Pulls the circular number, subject line, issue date and key terms out of the
leading text of a circular. Everything here is a pure function of the text;
reading the PDF is the caller's job (see regref.ingest.text_extractor).

Every field is resolved by an ordered rule list where the first rule that
yields an accepted value wins. A field with no accepted value is None.
"""

from typing import Optional, Tuple

from regref.core.exceptions import ExtractionFailure
from regref.extraction.constants import (
    CANONICAL_CIRCULAR_PATTERN,
    DATE_PATTERN,
    GENERIC_CIRCULAR_PATTERN,
    KEY_TERM_VOCABULARY,
    MIN_SUBJECT_LENGTH,
    SUBJECT_PATTERNS,
)
from regref.extraction.models import CircularMetadata


def _collapse_whitespace(value: str) -> str:
    return " ".join(value.split())


def extract_circular_number(text: str) -> Optional[str]:
    """Find the circular number.

    The canonical regulator identifier is searched over the whole text first
    and wins regardless of position; the generic "Circular No." label is
    only consulted when no canonical identifier exists.
    """
    match = CANONICAL_CIRCULAR_PATTERN.search(text)
    if match:
        return match.group(0)

    match = GENERIC_CIRCULAR_PATTERN.search(text)
    if match:
        return match.group(1)
    return None


def extract_subject(text: str) -> Optional[str]:
    """Find the subject line ("Subject:" first, then "Re:")."""
    for pattern in SUBJECT_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        subject = _collapse_whitespace(match.group(1))
        if len(subject) > MIN_SUBJECT_LENGTH:
            return subject
    return None


def extract_date(text: str) -> Optional[str]:
    """Return the first "<Month> <day>[,] <year>" occurrence, as written."""
    match = DATE_PATTERN.search(text)
    return match.group(0) if match else None


def extract_key_terms(text: str) -> Tuple[str, ...]:
    """Return vocabulary terms present in text, in vocabulary order."""
    lowered = text.lower()
    return tuple(term for term in KEY_TERM_VOCABULARY if term in lowered)


def extract_metadata(text: str, filename: str, file_path: str) -> CircularMetadata:
    """Build the metadata record for one circular.

    Args:
        text: Leading text of the circular (first pages are enough)
        filename: Base name used as the index key
        file_path: Absolute path of the circular

    Returns:
        CircularMetadata; optional fields are None when nothing matched

    Raises:
        ExtractionFailure: If text is empty or whitespace-only
    """
    if not text or not text.strip():
        raise ExtractionFailure(
            f"No text extracted from {filename}", filename=filename
        )

    return CircularMetadata(
        filename=filename,
        file_path=file_path,
        circular_number=extract_circular_number(text),
        subject=extract_subject(text),
        date=extract_date(text),
        key_terms=extract_key_terms(text),
    )

