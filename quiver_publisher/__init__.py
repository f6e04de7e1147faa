"""
Quiver Publisher - Publish Quiver notebooks as Jekyll posts

Converts the notes of a Quiver ``.qvnotebook`` export into Markdown posts
with YAML frontmatter, with support for:
- Code, Markdown, text and LaTeX cells
- Image relocation and renaming by alt text
- Frontmatter defaults from note metadata
- Draft filtering
"""

from quiver_publisher.core.models import NoteContext, NoteError, NoteMetadata, ProcessedNote, PublishResult, QuiverError
from quiver_publisher.core.discovery import NotebookDiscovery
from quiver_publisher.core.processor import ContentProcessor
from quiver_publisher.core.publisher import Publisher
from quiver_publisher.images.relocator import ImageRelocator

__version__ = "0.1.0"

__all__ = [
    "NoteContext",
    "NoteError",
    "NoteMetadata",
    "ProcessedNote",
    "PublishResult",
    "QuiverError",
    "NotebookDiscovery",
    "ContentProcessor",
    "Publisher",
    "ImageRelocator",
]
