"""Circular metadata extraction.

Pure text -> CircularMetadata functions; no file I/O happens here.
"""

from regref.extraction.metadata_extractor import (
    extract_circular_number,
    extract_date,
    extract_key_terms,
    extract_metadata,
    extract_subject,
)
from regref.extraction.models import CircularMetadata, LocalFileSnapshot

__all__ = [
    "CircularMetadata",
    "LocalFileSnapshot",
    "extract_circular_number",
    "extract_date",
    "extract_key_terms",
    "extract_metadata",
    "extract_subject",
]
