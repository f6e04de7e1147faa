"""Publisher: converts every note of a notebook into Jekyll posts."""

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from quiver_publisher.core.discovery import NotebookDiscovery
from quiver_publisher.core.loader import load_content, load_metadata
from quiver_publisher.core.models import (
    NoteContext,
    NoteError,
    ProcessedNote,
    PublishResult,
    QuiverError,
)
from quiver_publisher.core.processor import ContentProcessor
from quiver_publisher.images.relocator import ImageRelocator
from quiver_publisher.transforms.filename import post_filename
from quiver_publisher.transforms.frontmatter import (
    DEFAULT_LAYOUT,
    FrontmatterTransform,
    jekyll_defaults,
    split_frontmatter,
)


@dataclass(frozen=True)
class PublisherConfig:
    """Everything a batch run needs, already resolved to absolute paths."""
    notebook_path: Path
    post_dir: Path
    image_dir: Path
    image_url_prefix: str = "images/quiver"
    default_layout: str = DEFAULT_LAYOUT
    excluded_tags: Tuple[str, ...] = ("draft",)
    fail_fast: bool = True


class Publisher:
    """Runs the conversion of one notebook.

    Each run clears the post and image directories and regenerates every
    non-draft note.
    """

    def __init__(
        self,
        discovery: NotebookDiscovery,
        processor: ContentProcessor,
        relocator: ImageRelocator,
        post_dir: Path,
        frontmatter_transform: Optional[FrontmatterTransform] = None,
        fail_fast: bool = True,
    ):
        """Initialize Publisher.

        Args:
            discovery: Enumerates notes and applies the draft filter
            processor: Merges cells into a body
            relocator: Manages the output image directory
            post_dir: Directory posts are written into
            frontmatter_transform: Completes the frontmatter (default: jekyll_defaults())
            fail_fast: Re-raise the first fatal error instead of collecting it
        """
        self.discovery = discovery
        self.processor = processor
        self.relocator = relocator
        self.post_dir = Path(post_dir)
        self.frontmatter_transform = frontmatter_transform or jekyll_defaults()
        self.fail_fast = fail_fast

    def prepare_output(self) -> None:
        """Create the output directories and empty them."""
        self.post_dir.mkdir(parents=True, exist_ok=True)
        for entry in self.post_dir.iterdir():
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
        self.relocator.clear()

    def publish_all(self) -> PublishResult:
        """Regenerate all posts from the notebook.

        Returns:
            PublishResult summarising the run

        Raises:
            QuiverError: A note failed and fail_fast is set
        """
        self.prepare_output()
        result = PublishResult()

        for context in self.discovery.discover_all():
            try:
                processed = self.convert_note(context)
            except QuiverError as e:
                if self.fail_fast:
                    raise
                print(f"Warning: Failed to convert {context.path.name}: {e}")
                result.failures.append(NoteError(path=context.path, error=str(e)))
                continue

            if processed is None:
                result.skipped_drafts.append(context.path)
                continue

            result.published_titles.append(processed.frontmatter['title'])
            result.written_paths.append(self.post_dir / processed.filename)
            result.diagnostics.extend(
                f"{context.path.name}: {message}" for message in processed.diagnostics
            )

        return result

    def convert_note(self, context: NoteContext) -> Optional[ProcessedNote]:
        """Convert one note and write its post.

        Args:
            context: The note to convert

        Returns:
            ProcessedNote, or None when the note is excluded by its tags
        """
        metadata = load_metadata(context)
        is_pub, _ = self.discovery.is_publishable(metadata)
        if not is_pub:
            return None

        self.relocator.copy_resources(context.resources_path)

        content = load_content(context)
        merged = self.processor.merge_cells(content.cells)
        self.relocator.apply_renames(merged.renames)

        explicit, body = split_frontmatter(merged.text)
        frontmatter = self.frontmatter_transform(explicit, metadata)

        processed = ProcessedNote(
            metadata=metadata,
            content=body,
            frontmatter=frontmatter,
            filename=post_filename(frontmatter),
            renames=merged.renames,
            diagnostics=merged.diagnostics,
        )

        output = self.processor.build_output(processed)
        (self.post_dir / processed.filename).write_text(output, encoding='utf-8')
        return processed


def create_publisher_from_config(config: PublisherConfig) -> Publisher:
    """Build a Publisher from a resolved configuration."""
    return Publisher(
        discovery=NotebookDiscovery(config.notebook_path, excluded_tags=config.excluded_tags),
        processor=ContentProcessor(image_path_prefix=config.image_url_prefix),
        relocator=ImageRelocator(config.image_dir),
        post_dir=config.post_dir,
        frontmatter_transform=jekyll_defaults(config.default_layout),
        fail_fast=config.fail_fast,
    )
