"""
Base configuration classes for the collection, output and logging settings.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class CollectionConfig:
    """Local circular collection configuration."""

    directory: str = "circulars"
    suffixes: List[str] = field(default_factory=lambda: [".pdf"])
    metadata_pages: int = 2  # Only the leading pages carry number/subject/date
    max_workers: int = 4


@dataclass
class OutputConfig:
    """Report output configuration."""

    directory: str = "."
    filename_prefix: str = "compliance_references"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: Optional[str] = None
