"""Notebook discovery module for finding convertible notes."""

from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from quiver_publisher.core.models import NoteContext, NoteMetadata

# Entries of a .qvnotebook directory that are not notes
NOTEBOOK_FILES = frozenset({'meta.json', '.keep'})


class NotebookDiscovery:
    """Enumerates notes in a Quiver notebook and applies the tag filter."""

    def __init__(
        self,
        notebook_path: Path,
        excluded_tags: Optional[Iterable[str]] = None,
        ignored_entries: Optional[Iterable[str]] = None,
    ):
        """Initialize NotebookDiscovery.

        Args:
            notebook_path: Path to the .qvnotebook directory
            excluded_tags: Tags that exclude a note from publishing (default: draft)
            ignored_entries: Entry names that are never notes
        """
        self.notebook_path = Path(notebook_path)
        self.excluded_tags = list(excluded_tags) if excluded_tags is not None else ['draft']
        self.ignored_entries = frozenset(ignored_entries) if ignored_entries is not None else NOTEBOOK_FILES

    def discover_all(self) -> List[NoteContext]:
        """List every note directory in the notebook.

        Entries are sorted by name so repeated runs see the same order.

        Returns:
            NoteContext for each note, metadata not yet loaded
        """
        if not self.notebook_path.is_dir():
            raise FileNotFoundError(f"Notebook directory not found: {self.notebook_path}")

        notes = []
        for entry in sorted(self.notebook_path.iterdir(), key=lambda p: p.name):
            if entry.name in self.ignored_entries:
                continue
            if not entry.is_dir():
                print(f"Warning: Skipping non-note entry {entry.name}")
                continue
            notes.append(NoteContext(path=entry))

        return notes

    def is_publishable(self, note: NoteMetadata) -> Tuple[bool, str]:
        """Check a note's tags against the excluded tags.

        Tags are compared exactly, so ``Draft`` does not exclude a note.

        Returns:
            Tuple of (is_publishable, reason)
        """
        for tag in note.tags:
            if tag in self.excluded_tags:
                return False, f"Contains excluded tag: {tag}"

        return True, "OK"
