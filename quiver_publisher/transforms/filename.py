"""Output filename derivation for Jekyll posts."""

import datetime
from typing import Any, Dict

from dateutil import parser as date_parser

from quiver_publisher.core.models import DateParseFailure


def title_slug(title: Any) -> str:
    """Lower-case a title and replace spaces with hyphens.

    No other characters are touched.
    """
    return str(title).replace(" ", "-").lower()


def parse_date(value: Any) -> datetime.date:
    """Parse a frontmatter date value.

    YAML may already have decoded the value into a date or datetime; those
    are used directly, anything else goes through dateutil's parser.

    Raises:
        DateParseFailure: The value is not a recognisable date
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value

    try:
        return date_parser.parse(str(value)).date()
    except (ValueError, OverflowError) as e:
        raise DateParseFailure(f"Cannot parse date {value!r}: {e}") from e


def post_filename(frontmatter: Dict[str, Any]) -> str:
    """Derive ``YYYY-MM-DD-slug.md`` from a composed frontmatter.

    Args:
        frontmatter: Frontmatter containing ``title`` and ``date``

    Returns:
        The post's filename
    """
    date = parse_date(frontmatter.get('date'))
    slug = title_slug(frontmatter['title'])
    return f"{date.year}-{date.month:02d}-{date.day:02d}-{slug}.md"
