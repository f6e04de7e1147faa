"""Shared fixtures for building Quiver notebooks on disk."""

import json
import pytest
from types import SimpleNamespace

# 2023-04-05 00:00:00 UTC
APRIL_5_2023 = 1680652800


@pytest.fixture
def notebook(tmp_path):
    """An empty .qvnotebook directory with its own meta.json."""
    path = tmp_path / "quiver.qvnotebook"
    path.mkdir()
    (path / "meta.json").write_text(json.dumps({"name": "Blog", "uuid": "NB-1"}))
    return path


@pytest.fixture
def make_note(notebook):
    """Factory writing a .qvnote directory into the notebook fixture."""

    def _make_note(name, title="My First Post", tags=None, cells=None,
                   created_at=APRIL_5_2023, resources=None, meta=True):
        note_dir = notebook / f"{name}.qvnote"
        note_dir.mkdir()
        if meta:
            (note_dir / "meta.json").write_text(json.dumps({
                "title": title,
                "tags": tags if tags is not None else [],
                "created_at": created_at,
                "updated_at": created_at,
                "uuid": name.upper(),
            }))
        (note_dir / "content.json").write_text(json.dumps({
            "title": title,
            "cells": cells if cells is not None else [{"type": "markdown", "data": "Hello"}],
        }))
        if resources:
            res_dir = note_dir / "resources"
            res_dir.mkdir()
            for filename, data in resources.items():
                (res_dir / filename).write_bytes(data)
        return note_dir

    return _make_note



@pytest.fixture
def make_site():
    """Factory for the host site object the hook receives."""

    def _make_site(source, config=None, exclude=None):
        return SimpleNamespace(
            source=source,
            config=config if config is not None else {},
            exclude=exclude if exclude is not None else [],
        )

    return _make_site
