"""Minimal JSON Diff types."""

from collections.abc import Mapping, Sequence
from typing import Any, TypeGuard

from pydantic import JsonValue
from pydantic_core import to_jsonable_python


def is_object(value: Any) -> TypeGuard[Mapping[str, Any]]:
    """JSON object."""
    return isinstance(value, Mapping)


def is_array(value: Any) -> TypeGuard[Sequence[Any]]:
    """JSON array. Strings and bytes are scalars."""
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def deep_equal(a: Any, b: Any) -> bool:
    """Compare two JSON values structurally.

    Unlike ``==``, booleans never equal numbers (``True`` vs ``1``).
    Numbers compare by value (``1`` equals ``1.0``), object key order is
    ignored and array element order is significant.
    """
    if is_object(a) and is_object(b):
        return a.keys() == b.keys() and all(deep_equal(a[k], b[k]) for k in a)
    if is_array(a) and is_array(b):
        return len(a) == len(b) and all(deep_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a is b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    if type(a) is not type(b):
        return False
    return a == b


def to_json_value(obj: Any) -> JsonValue:
    """Convert an arbitrary serializable object into a plain JSON value.

    Pydantic models, dataclasses, enums, datetimes and the like are
    converted with pydantic's JSON serializer. Non-finite floats are kept
    as floats so that emitting a patch containing them fails instead of
    silently writing ``null``.

    Raises:
        pydantic_core.PydanticSerializationError: If the object graph contains
            values with no JSON representation.

    """
    return to_jsonable_python(obj, inf_nan_mode="constants")


__all__ = ("JsonValue", "deep_equal", "is_array", "is_object", "to_json_value")
