import json
from pathlib import Path

import pytest

from minimal_json_diff import settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path):
    """Keep logs out of the working tree and restore global settings."""
    original = settings.model_copy()
    settings.log_file = tmp_path / ".minimal_json_diff.log"
    yield
    for name in type(settings).model_fields:
        setattr(settings, name, getattr(original, name))


@pytest.fixture
def write_json(tmp_path: Path):
    """Write a JSON document to a file under ``tmp_path`` and return its path."""

    def _write(name: str, data) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return path

    return _write
