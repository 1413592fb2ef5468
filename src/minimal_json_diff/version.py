"""Runtime version information."""

import importlib.metadata

try:
    __version__ = importlib.metadata.version("minimal-json-diff")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0"
