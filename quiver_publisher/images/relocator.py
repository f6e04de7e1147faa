"""Copies note images into the shared image directory and renames them."""

import shutil
from pathlib import Path
from typing import List, Set, Tuple

from quiver_publisher.core.models import ImageCopyFailure, RenamePlan


class ImageRelocator:
    """Owns the output image directory for a batch run."""

    def __init__(self, image_dir: Path):
        """Initialize ImageRelocator.

        Args:
            image_dir: Physical directory images are copied into
        """
        self.image_dir = Path(image_dir)

    def clear(self) -> None:
        """Remove everything inside the image directory."""
        self.image_dir.mkdir(parents=True, exist_ok=True)
        for entry in self.image_dir.iterdir():
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()

    def copy_resources(self, resources_dir: Path) -> List[Path]:
        """Copy a note's resources into the image directory, keeping names.

        Args:
            resources_dir: The note's resources directory; missing is a no-op

        Returns:
            Paths of the copied entries

        Raises:
            ImageCopyFailure: A file could not be copied
        """
        resources_dir = Path(resources_dir)
        if not resources_dir.is_dir():
            return []

        copied = []
        for source in sorted(resources_dir.iterdir(), key=lambda p: p.name):
            target = self.image_dir / source.name
            try:
                if source.is_dir():
                    shutil.copytree(source, target, dirs_exist_ok=True)
                else:
                    shutil.copy2(source, target)
            except OSError as e:
                raise ImageCopyFailure(f"Failed to copy {source} to {self.image_dir}: {e}") from e
            copied.append(target)

        return copied

    def apply_renames(self, plan: RenamePlan) -> List[Tuple[Path, Path]]:
        """Rename copied images to the names the body now references.

        A pair that already ran earlier in the plan is skipped, since the
        same image may be referenced more than once.

        Args:
            plan: Ordered (raw_name, alt) pairs

        Returns:
            (source, target) paths actually renamed

        Raises:
            ImageCopyFailure: A referenced image is missing or cannot be moved
        """
        done: Set[Tuple[str, str]] = set()
        renamed = []
        for raw_name, alt in plan:
            if (raw_name, alt) in done or raw_name == alt:
                continue
            source = self.image_dir / raw_name
            target = self.image_dir / alt
            try:
                source.rename(target)
            except OSError as e:
                raise ImageCopyFailure(f"Failed to rename image {raw_name} to {alt}: {e}") from e
            done.add((raw_name, alt))
            renamed.append((source, target))

        return renamed
