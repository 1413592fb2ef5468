"""Minimal JSON Diff: compute minimal JSON Patch documents between two JSON values."""

from ._settings import settings
from .differ import diff, diff_models, make_patch
from .jsonpatch import JsonPatch, PatchSerializationError, serialize_document
from .jsonpointer import JsonPointer
from .types import deep_equal, to_json_value
from .version import __version__

__all__ = (
    "__version__",
    "JsonPatch",
    "JsonPointer",
    "PatchSerializationError",
    "deep_equal",
    "diff",
    "diff_models",
    "make_patch",
    "serialize_document",
    "settings",
    "to_json_value",
)
