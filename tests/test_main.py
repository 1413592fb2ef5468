"""Tests for the __main__.py module."""

import subprocess
import sys
from unittest.mock import patch


def test_main_module_execution():
    """Test that the __main__.py module runs the CLI app."""
    with patch("minimal_json_diff.cli.app") as mock_app:
        import minimal_json_diff.__main__  # noqa: F401

        mock_app.assert_called_once()


def test_main_module_via_python_m():
    """Test that the module can be executed via python -m."""
    result = subprocess.run(
        [sys.executable, "-m", "minimal_json_diff", "--help"],
        capture_output=True,
        text=True,
        timeout=10,
    )
    assert result.returncode == 0
    assert "Compute and apply minimal JSON Patch documents" in result.stdout
    assert "diff" in result.stdout
    assert "apply" in result.stdout


def test_main_module_diff_exit_code(tmp_path):
    """A differing pair exits with 1 and prints the patch."""
    (tmp_path / "a.json").write_text('{"a": [1, 2, 3]}')
    (tmp_path / "b.json").write_text('{"a": [1]}')
    result = subprocess.run(
        [sys.executable, "-m", "minimal_json_diff", "diff", "a.json", "b.json"],
        capture_output=True,
        text=True,
        timeout=10,
        cwd=tmp_path,
    )
    assert result.returncode == 1
    assert result.stdout.startswith('[{"op":"test","path":"/a/2","value":3}')
