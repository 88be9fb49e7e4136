"""Document text extraction (PyMuPDF)."""

from regref.ingest.text_extractor import ExtractedDocument, TextExtractor

__all__ = ["ExtractedDocument", "TextExtractor"]
