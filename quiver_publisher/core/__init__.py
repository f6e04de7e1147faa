"""Core components for Quiver Publisher."""

from quiver_publisher.core.models import (
    Cell,
    DateParseFailure,
    ImageCopyFailure,
    MalformedContent,
    MalformedMetadata,
    MergedBody,
    MissingContent,
    MissingMetadata,
    NoteContent,
    NoteContext,
    NoteError,
    NoteMetadata,
    ProcessedNote,
    PublishResult,
    QuiverError,
)
from quiver_publisher.core.loader import load_content, load_metadata
from quiver_publisher.core.discovery import NotebookDiscovery
from quiver_publisher.core.processor import ContentProcessor, find_image_references, rewrite_image_references
from quiver_publisher.core.publisher import Publisher, PublisherConfig, create_publisher_from_config

__all__ = [
    "Cell",
    "DateParseFailure",
    "ImageCopyFailure",
    "MalformedContent",
    "MalformedMetadata",
    "MergedBody",
    "MissingContent",
    "MissingMetadata",
    "NoteContent",
    "NoteContext",
    "NoteError",
    "NoteMetadata",
    "ProcessedNote",
    "PublishResult",
    "QuiverError",
    "load_content",
    "load_metadata",
    "NotebookDiscovery",
    "ContentProcessor",
    "find_image_references",
    "rewrite_image_references",
    "Publisher",
    "PublisherConfig",
    "create_publisher_from_config",
]
