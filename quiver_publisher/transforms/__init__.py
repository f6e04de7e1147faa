"""Frontmatter and filename transforms."""

from quiver_publisher.transforms.filename import post_filename
from quiver_publisher.transforms.frontmatter import jekyll_defaults, split_frontmatter

__all__ = ["jekyll_defaults", "post_filename", "split_frontmatter"]
