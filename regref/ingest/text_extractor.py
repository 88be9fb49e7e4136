"""
Text extraction from circular PDFs.

Two views of a document are needed:

- the leading pages only, for metadata (number, subject and date live on
  the first page or two)
- the full text with page markers, for the model, so that it can report the
  page a reference appears on

Page markers look like ``\\n--- PAGE 3 ---\\n`` and precede every page.
They are display hints for the model; nothing downstream parses them.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

from regref.core.exceptions import ExtractionFailure
from regref.core.logging import get_logger
from regref.shared.lazy_imports import lazy_property

logger = get_logger(__name__)

# JPL Rule #2: Fixed upper bounds
MAX_PDF_SIZE = 100_000_000  # 100MB


@dataclass(frozen=True)
class ExtractedDocument:
    """Full text of a document with page markers."""

    text: str
    page_count: int


def page_marker(page_number: int) -> str:
    """Marker placed before page_number (1-based)."""
    return f"\n--- PAGE {page_number} ---\n"


def join_pages(pages: Iterable[str]) -> str:
    """Concatenate page texts, each preceded by its marker."""
    parts = []
    for number, page_text in enumerate(pages, start=1):
        parts.append(f"{page_marker(number)}{page_text}\n")
    return "".join(parts)


class TextExtractor:
    """
    Extract text from PDF circulars via PyMuPDF.

    Any failure to open or read a file is raised as ExtractionFailure so that
    callers only have one soft-failure type to handle.
    """

    @lazy_property
    def fitz(self) -> Any:
        """Lazy-load PyMuPDF."""
        try:
            import fitz

            fitz.TOOLS.mupdf_display_errors(False)
            return fitz
        except ImportError as e:
            raise ImportError(
                "PyMuPDF is required for PDF processing. "
                "Install with: pip install pymupdf"
            ) from e

    def _check_file(self, file_path: Path) -> None:
        if not file_path.is_file():
            raise ExtractionFailure(
                f"File not found: {file_path}", filename=file_path.name
            )
        size = file_path.stat().st_size
        if size > MAX_PDF_SIZE:
            raise ExtractionFailure(
                f"{file_path.name} is {size} bytes, limit is {MAX_PDF_SIZE}",
                filename=file_path.name,
            )

    def _read_pages(self, file_path: Path, max_pages: Optional[int] = None) -> list[str]:
        """
        Read page texts, optionally stopping after max_pages.

        Rule #1: Reduced nesting (max 1 level)
        Rule #7: Parameter validation
        """
        self._check_file(file_path)
        try:
            doc = self.fitz.open(file_path)
        except Exception as e:
            raise ExtractionFailure(
                f"Cannot open {file_path.name}: {e}", filename=file_path.name
            ) from e

        try:
            if doc.needs_pass:
                raise ExtractionFailure(
                    f"{file_path.name} is password-protected",
                    filename=file_path.name,
                )
            limit = doc.page_count if max_pages is None else min(max_pages, doc.page_count)
            return [doc[i].get_text("text") for i in range(limit)]
        except ExtractionFailure:
            raise
        except Exception as e:
            raise ExtractionFailure(
                f"Cannot read {file_path.name}: {e}", filename=file_path.name
            ) from e
        finally:
            doc.close()

    def extract_leading_text(self, file_path: Path, max_pages: int = 2) -> str:
        """
        Extract plain text of the first max_pages pages.

        Args:
            file_path: Path to PDF file
            max_pages: Number of leading pages to read

        Returns:
            Page texts joined by newlines (no markers)

        Raises:
            ExtractionFailure: If the file cannot be read
            ValueError: If max_pages is not positive
        """
        if max_pages < 1:
            raise ValueError(f"max_pages must be positive, got {max_pages}")
        pages = self._read_pages(file_path, max_pages)
        return "\n".join(pages)

    def extract_document(self, file_path: Path) -> ExtractedDocument:
        """
        Extract the full text of a PDF with page markers.

        Raises:
            ExtractionFailure: If the file cannot be read or holds no text
        """
        pages = self._read_pages(file_path)
        if not any(page.strip() for page in pages):
            raise ExtractionFailure(
                f"No text found in {file_path.name}", filename=file_path.name
            )

        logger.info(f"Extracted text from {len(pages)} pages", file=file_path.name)
        return ExtractedDocument(text=join_pages(pages), page_count=len(pages))
