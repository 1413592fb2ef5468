"""Tests for the version module."""

import importlib.metadata
from unittest.mock import patch

import minimal_json_diff.version


def test_version_import():
    """The package re-exports the version module's value."""
    assert isinstance(minimal_json_diff.version.__version__, str)
    assert minimal_json_diff.__version__ == minimal_json_diff.version.__version__


def test_version_package_not_found():
    """Test version fallback when package is not found."""
    with patch("importlib.metadata.version") as mock_version:
        mock_version.side_effect = importlib.metadata.PackageNotFoundError()

        importlib.reload(minimal_json_diff.version)

        assert minimal_json_diff.version.__version__ == "0.0.0"
        mock_version.assert_called_once_with("minimal-json-diff")


def test_version_normal_case():
    """Test version retrieval in normal case."""
    with patch("importlib.metadata.version") as mock_version:
        mock_version.return_value = "1.2.3"

        importlib.reload(minimal_json_diff.version)

        assert minimal_json_diff.version.__version__ == "1.2.3"
        mock_version.assert_called_with("minimal-json-diff")
