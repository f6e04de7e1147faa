"""Frontmatter helpers for Quiver Publisher.

``split_frontmatter`` pulls an explicit header off the top of a merged body,
and the transform factories fill that header in from the note's metadata.
"""

import datetime
import re
from typing import Any, Callable, Dict, Tuple

import yaml

from quiver_publisher.core.models import DateParseFailure, MalformedMetadata, NoteMetadata

FrontmatterTransform = Callable[[Dict[str, Any], NoteMetadata], Dict[str, Any]]

DEFAULT_LAYOUT = "default"

# A delimiter only counts as a whole line
DELIMITER_PATTERN = re.compile(r'^---\n', re.MULTILINE)


def split_frontmatter(content: str) -> Tuple[Dict[str, Any], str]:
    """Split a leading YAML frontmatter block from content.

    Args:
        content: Merged note body

    Returns:
        Tuple of (frontmatter dict, remaining content). The dict is empty and
        the content unchanged when there is no valid block.
    """
    if not content.startswith('---\n'):
        return {}, content

    parts = DELIMITER_PATTERN.split(content, maxsplit=2)
    if len(parts) < 3:
        return {}, content

    try:
        frontmatter = yaml.safe_load(parts[1])
    except yaml.YAMLError as e:
        print(f"Warning: Failed to parse frontmatter YAML: {e}")
        return {}, content

    if frontmatter is None:
        return {}, parts[2]
    if not isinstance(frontmatter, dict):
        return {}, content

    return frontmatter, parts[2]


def created_date(timestamp: int) -> str:
    """Format a Unix timestamp as a UTC ``YYYY-MM-DD`` string."""
    moment = datetime.datetime.fromtimestamp(timestamp, tz=datetime.timezone.utc)
    return moment.strftime('%Y-%m-%d')


def jekyll_defaults(layout: str = DEFAULT_LAYOUT) -> FrontmatterTransform:
    """Create a transform that completes a post's frontmatter.

    Explicit ``title`` and ``layout`` win when set, an explicit ``date`` wins
    when the key is present, and ``tags`` always come from the notebook.
    Any other explicit keys are kept.

    The transform raises MalformedMetadata when neither source has a title,
    and DateParseFailure when neither has a date.

    Args:
        layout: Layout used when the note does not name one

    Returns:
        A transform function (frontmatter, metadata) -> frontmatter
    """
    def transform(fm: Dict[str, Any], meta: NoteMetadata) -> Dict[str, Any]:
        result = fm.copy()
        if not result.get('title'):
            if not meta.title:
                raise MalformedMetadata(f"No title in {meta.path} or its frontmatter")
            result['title'] = meta.title
        if not result.get('layout'):
            result['layout'] = layout
        if 'date' not in result:
            if meta.created_at is None:
                raise DateParseFailure(f"No created_at in {meta.path} and no date in its frontmatter")
            result['date'] = created_date(meta.created_at)
        result['tags'] = list(meta.tags)
        return result
    return transform
