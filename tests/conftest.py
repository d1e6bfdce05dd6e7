"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

from prefstore.store import PreferenceStore


@pytest.fixture
def window_defaults() -> dict:
    return {"theme": "dark", "window": {"width": 800, "height": 600}}


@pytest.fixture
def make_store(tmp_path):
    """Factory for stores backed by tmp_path/prefs.json."""
    def _create(**kwargs) -> PreferenceStore:
        kwargs.setdefault("file_path", tmp_path)
        return PreferenceStore(**kwargs)
    return _create


@pytest.fixture
def json_file(tmp_path):
    """Factory for temp JSON files."""
    def _create(data, filename="prefs.json") -> Path:
        p = tmp_path / filename
        p.write_text(json.dumps(data))
        return p
    return _create
