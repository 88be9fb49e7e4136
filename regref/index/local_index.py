"""
Local Index of the circular collection.

The index maps filename -> CircularMetadata for one run. It is built once,
up front, and then passed explicitly to everything that needs it; nothing
mutates it afterwards.

Build
-----
    entries = discover_collection(config.collection_path, [".pdf"])
    text_source = partial(extractor.extract_leading_text, max_pages=2)
    result = build_local_index(entries, text_source, max_workers=4)

Each worker extracts one file and returns its own outcome. Outcomes are
merged into the index once all workers are done, sorted by filename, so the
order workers finish in never shows in the result.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

from regref.core.exceptions import CollectionNotFoundError
from regref.core.logging import get_logger
from regref.extraction.metadata_extractor import extract_metadata
from regref.extraction.models import CircularMetadata

logger = get_logger(__name__)

TextSource = Callable[[Path], str]


class LocalIndex(Mapping[str, CircularMetadata]):
    """Read-only mapping of filename -> CircularMetadata."""

    def __init__(self, entries: Optional[Mapping[str, CircularMetadata]] = None) -> None:
        ordered = dict(sorted((entries or {}).items()))
        self._entries: Mapping[str, CircularMetadata] = MappingProxyType(ordered)

    def __getitem__(self, key: str) -> CircularMetadata:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"LocalIndex({list(self._entries)})"

    def lookup(self, key: Any) -> Optional[CircularMetadata]:
        """Return the entry for key, or None when absent or not a string."""
        if not isinstance(key, str):
            return None
        return self._entries.get(key)


@dataclass(frozen=True)
class IndexBuildResult:
    """Outcome of an index build."""

    index: LocalIndex
    indexed: int
    skipped: int
    failures: Mapping[str, str] = field(default_factory=dict)


def discover_collection(
    directory: Path, suffixes: Sequence[str] = (".pdf",)
) -> List[Tuple[str, Path]]:
    """
    List (filename, absolute path) pairs of the collection directory.

    Non-recursive; suffixes match case-insensitively; sorted by filename.

    Raises:
        CollectionNotFoundError: If directory does not exist
    """
    if not directory.is_dir():
        raise CollectionNotFoundError(f"Collection directory not found: {directory}")

    wanted = {s.lower() for s in suffixes}
    entries = [
        (path.name, path.resolve())
        for path in directory.iterdir()
        if path.is_file() and path.suffix.lower() in wanted
    ]
    return sorted(entries, key=lambda entry: entry[0])


def _extract_one(
    filename: str, path: Path, text_source: TextSource
) -> Tuple[str, Optional[CircularMetadata], Optional[str]]:
    """Extract a single file. Returns (filename, metadata, error_message).

    Any error raised for one file is recorded against that file only.
    """
    try:
        text = text_source(path)
        return (filename, extract_metadata(text, filename, str(path)), None)
    except Exception as e:
        return (filename, None, f"{type(e).__name__}: {e}")


def _check_unique(entries: Sequence[Tuple[str, Path]]) -> None:
    seen: set[str] = set()
    for filename, _ in entries:
        if filename in seen:
            raise ValueError(f"Duplicate filename in collection: {filename}")
        seen.add(filename)


def build_local_index(
    entries: Sequence[Tuple[str, Path]],
    text_source: TextSource,
    max_workers: int = 4,
) -> IndexBuildResult:
    """
    Extract metadata for every entry and build the LocalIndex.

    A file that fails extraction is skipped and recorded in failures; it
    never aborts the build and is never inserted.

    Args:
        entries: (filename, path) pairs; filenames must be unique
        text_source: Returns the leading text of a file
        max_workers: Thread pool size

    Returns:
        IndexBuildResult with the index and counts

    Raises:
        ValueError: If a filename appears twice, or max_workers < 1
    """
    entries = list(entries)
    _check_unique(entries)
    if max_workers < 1:
        raise ValueError(f"max_workers must be positive, got {max_workers}")

    outcomes: List[Tuple[str, Optional[CircularMetadata], Optional[str]]] = []
    if entries:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(_extract_one, filename, path, text_source)
                for filename, path in entries
            ]
            for future in as_completed(futures):
                outcomes.append(future.result())

    found: Dict[str, CircularMetadata] = {}
    failures: Dict[str, str] = {}
    for filename, metadata, error in sorted(outcomes, key=lambda o: o[0]):
        if metadata is None:
            failures[filename] = error or "unknown error"
            logger.warning("Skipping circular", filename=filename, error=error)
            continue
        if not metadata.has_identity:
            logger.debug("No circular number, subject or date found", filename=filename)
        found[filename] = metadata

    logger.info("Local index built", indexed=len(found), skipped=len(failures))
    return IndexBuildResult(
        index=LocalIndex(found),
        indexed=len(found),
        skipped=len(failures),
        failures=MappingProxyType(failures),
    )
