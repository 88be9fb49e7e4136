"""Data models for circular metadata.

CircularMetadata is created once per local file during the index build and
never changes afterwards; LocalFileSnapshot is the subset of it that travels
with a resolved reference.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class LocalFileSnapshot:
    """Read-only view of a matched local circular."""

    filename: str
    file_path: str
    circular_number: Optional[str] = None
    subject: Optional[str] = None
    date: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CircularMetadata:
    """Structured metadata for one circular in the local collection."""

    filename: str
    file_path: str
    circular_number: Optional[str] = None
    subject: Optional[str] = None
    date: Optional[str] = None
    key_terms: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (key terms as a list)."""
        d = asdict(self)
        d["key_terms"] = list(self.key_terms)
        return d

    def snapshot(self) -> LocalFileSnapshot:
        """Copy the fields a resolved reference carries."""
        return LocalFileSnapshot(
            filename=self.filename,
            file_path=self.file_path,
            circular_number=self.circular_number,
            subject=self.subject,
            date=self.date,
        )

    @property
    def has_identity(self) -> bool:
        """Whether the text yielded anything beyond key terms."""
        return bool(self.circular_number or self.subject or self.date)
