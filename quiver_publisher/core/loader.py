"""Readers for a note's meta.json and content.json."""

import json
from pathlib import Path
from typing import Any, Dict

from quiver_publisher.core.models import (
    Cell,
    MalformedContent,
    MalformedMetadata,
    MissingContent,
    MissingMetadata,
    NoteContent,
    NoteContext,
    NoteMetadata,
)


def _read_json(path: Path) -> Any:
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def load_metadata(context: NoteContext) -> NoteMetadata:
    """Load and validate meta.json from a note directory.

    Args:
        context: The note to read

    Returns:
        NoteMetadata for the note

    Raises:
        MissingMetadata: meta.json does not exist
        MalformedMetadata: meta.json is not valid JSON, has no tag list, or
            has a title or created_at of the wrong type
    """
    path = context.meta_path
    if not path.is_file():
        raise MissingMetadata(f"meta.json doesn't exist in {context.path}")

    try:
        data = _read_json(path)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedMetadata(f"Failed to parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise MalformedMetadata(f"{path} must contain a JSON object")

    title = data.get('title')
    if title is not None and not isinstance(title, str):
        raise MalformedMetadata(f"{path} 'title' must be a string")

    tags = data.get('tags')
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise MalformedMetadata(f"{path} 'tags' must be a list of strings")

    created_at = data.get('created_at')
    # bool is an int subclass; reject it explicitly
    if created_at is not None and (not isinstance(created_at, int) or isinstance(created_at, bool)):
        raise MalformedMetadata(f"{path} 'created_at' must be an integer timestamp")

    updated_at = data.get('updated_at')
    return NoteMetadata(
        context=context,
        title=title,
        tags=list(tags),
        created_at=created_at,
        uuid=data.get('uuid'),
        updated_at=updated_at if isinstance(updated_at, int) else None,
        raw=data,
    )


def load_content(context: NoteContext) -> NoteContent:
    """Load content.json from a note directory.

    Raises:
        MissingContent: content.json does not exist
        MalformedContent: content.json is not valid JSON or has no cell list
    """
    path = context.content_path
    if not path.is_file():
        raise MissingContent(f"{path} doesn't exist")

    try:
        data = _read_json(path)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedContent(f"Failed to parse {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get('cells'), list):
        raise MalformedContent(f"{path} must contain a 'cells' list")

    cells = [_parse_cell(raw, path) for raw in data['cells']]
    title = data.get('title')
    return NoteContent(cells=cells, title=title if isinstance(title, str) else None)


def _parse_cell(raw: Dict[str, Any], path: Path) -> Cell:
    if not isinstance(raw, dict):
        raise MalformedContent(f"{path} contains a cell that is not an object")

    language = raw.get('language')
    data = raw.get('data')
    return Cell(
        kind=str(raw.get('type', '')),
        data=data if isinstance(data, str) else ('' if data is None else str(data)),
        language=str(language) if language is not None else None,
    )
