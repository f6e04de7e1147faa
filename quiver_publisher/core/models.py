"""Data models for Quiver Publisher."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

RenamePlan = List[Tuple[str, str]]


class QuiverError(Exception):
    """Base class for fatal conversion errors."""


class MissingMetadata(QuiverError):
    pass


class MalformedMetadata(QuiverError):
    pass


class MissingContent(QuiverError):
    pass


class MalformedContent(QuiverError):
    pass


class ImageCopyFailure(QuiverError):
    pass


class DateParseFailure(QuiverError):
    pass


@dataclass
class NoteContext:
    """Location of a single .qvnote directory.

    Files are only read when a loader asks for them.
    """
    path: Path

    @property
    def meta_path(self) -> Path:
        return self.path / "meta.json"

    @property
    def content_path(self) -> Path:
        return self.path / "content.json"

    @property
    def resources_path(self) -> Path:
        return self.path / "resources"


@dataclass
class NoteMetadata:
    """Parsed meta.json of a note."""
    context: NoteContext
    tags: List[str]
    title: Optional[str] = None
    created_at: Optional[int] = None
    uuid: Optional[str] = None
    updated_at: Optional[int] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def path(self) -> Path:
        """Convenience accessor for the note's directory."""
        return self.context.path


@dataclass
class Cell:
    """One entry of content.json's cell list."""
    kind: str
    data: str
    language: Optional[str] = None


@dataclass
class NoteContent:
    cells: List[Cell]
    title: Optional[str] = None


@dataclass
class MergedBody:
    """Merged cell text plus what the merge asked of the filesystem."""
    text: str
    renames: RenamePlan = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)


@dataclass
class ProcessedNote:
    """Result of converting a note for publishing.

    Contains the body, the composed frontmatter and the output filename,
    along with a reference to the original metadata.
    """
    metadata: NoteMetadata
    content: str
    frontmatter: Dict[str, Any]
    filename: str
    renames: RenamePlan = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)


@dataclass
class NoteError:
    """A fatal error that occurred while converting a note.

    Only collected when the batch runs without fail-fast.
    """
    path: Path
    error: str
    title: Optional[str] = None


@dataclass
class PublishResult:
    """Result of a batch run."""
    published_titles: List[str] = field(default_factory=list)
    written_paths: List[Path] = field(default_factory=list)
    skipped_drafts: List[Path] = field(default_factory=list)
    failures: List[NoteError] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)
