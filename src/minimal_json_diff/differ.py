"""Structural diff of two JSON values into a JSON Patch.

The walk compares both trees in lockstep and never matches array elements
across different indices, so a rotated array shows up as per-index
replacements rather than moves. Every ``remove`` and ``replace`` is preceded
by a ``test`` of the value it expects to find.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ._settings import settings
from .jsonpatch import JsonPatch
from .jsonpointer import JsonPointer
from .types import JsonValue, deep_equal, is_array, is_object, to_json_value

logger = logging.getLogger(__name__)

_FROM_SETTINGS: Any = object()


def _node_diff(a: Any, b: Any, document: JsonPatch, path: JsonPointer) -> None:
    match (a, b):
        case (x, y) if is_object(x) and is_object(y):
            _object_diff(x, y, document, path)
        case (x, y) if is_array(x) and is_array(y):
            _array_diff(x, y, document, path)
        case (x, y) if deep_equal(x, y):
            pass
        case _:
            document.test(path, a)
            document.replace(path, b)


def _object_diff(
    a: Mapping[str, Any], b: Mapping[str, Any], document: JsonPatch, path: JsonPointer
) -> None:
    for key, node_a in a.items():
        key_path = path / key
        if key in b:
            _node_diff(node_a, b[key], document, key_path)
        else:
            document.test(key_path, node_a)
            document.remove(key_path)

    for key, node_b in b.items():
        if key not in a:
            document.add(path / key, node_b)


def _array_diff(
    a: Sequence[Any], b: Sequence[Any], document: JsonPatch, path: JsonPointer
) -> None:
    # Exactly one side empty: replace the array as a whole.
    if (len(a) == 0) != (len(b) == 0):
        document.test(path, a)
        document.replace(path, b)

    elif len(a) <= len(b):
        for i in range(len(b)):
            index_path = path / i
            if i < len(a):
                _node_diff(a[i], b[i], document, index_path)
            else:
                document.add(index_path, b[i])

    else:
        # Backwards, so each remove leaves the lower indices still to be
        # emitted where they were.
        for i in reversed(range(len(a))):
            index_path = path / i
            if i < len(b):
                _node_diff(a[i], b[i], document, index_path)
            else:
                document.test(index_path, a[i])
                document.remove(index_path)


def make_patch(a: JsonValue, b: JsonValue) -> JsonPatch:
    """Build the patch that turns ``a`` into ``b``.

    Neither input is modified. ``make_patch(x, x)`` is always empty.
    """
    document = JsonPatch()
    _node_diff(a, b, document, JsonPointer(""))
    logger.debug("Computed patch with %d operations", len(document))
    return document


def diff(
    a: JsonValue,
    b: JsonValue,
    *,
    indent: int | None = _FROM_SETTINGS,
    ensure_ascii: bool | None = None,
) -> str:
    """Diff two JSON values and return the patch as JSON text.

    Args:
        a: The source document.
        b: The target document.
        indent: Indentation of the output, compact when ``None``.
            Defaults to ``settings.indent`` when not passed.
        ensure_ascii: Escape non-ASCII characters. Defaults to
            ``settings.ensure_ascii``.

    Returns:
        A JSON array of ``add``/``remove``/``replace``/``test`` operations.

    Raises:
        ValueError: If an emitted value is ``NaN`` or infinite.

    """
    return make_patch(a, b).to_json(
        indent=settings.indent if indent is _FROM_SETTINGS else indent,
        ensure_ascii=settings.ensure_ascii if ensure_ascii is None else ensure_ascii,
    )


def diff_models(a: Any, b: Any, **kwargs: Any) -> str:
    """Diff two arbitrary serializable objects, e.g. pydantic models.

    Both sides are converted to plain JSON values first, see
    :func:`~minimal_json_diff.types.to_json_value`.
    """
    return diff(to_json_value(a), to_json_value(b), **kwargs)


__all__ = ("diff", "diff_models", "make_patch")
