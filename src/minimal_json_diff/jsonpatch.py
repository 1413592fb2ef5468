"""RFC 6902 JSON Patch documents.

Only the four operations produced by the differ are modelled: ``add``,
``remove``, ``replace`` and ``test``. A patch can be applied to a document and
rendered into its minimal wire form with :func:`serialize_document`.
"""

import copy
import json
import logging
from collections.abc import MutableMapping, MutableSequence
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

from .jsonpointer import JsonPointer, getitem, sequence_index
from .types import deep_equal

logger = logging.getLogger(__name__)


class PatchSerializationError(RuntimeError):
    """The rendered patch document does not have the shape of a JSON Patch."""


def _set_value(
    obj: Any, pointer: JsonPointer, value: Any, *, insert: bool = True
) -> Any:
    """Set a value at the location specified by a JSON Pointer.

    Args:
        obj: The document to modify in place.
        pointer: The JSON Pointer specifying the location.
        value: The value to set.
        insert: Insert into sequences (``add``) rather than overwrite (``replace``).

    Returns:
        The modified document.

    Raises:
        KeyError: If a parent key is not found in a mapping.
        IndexError: If a sequence index is out of range.
        ValueError: If a sequence index is invalid.
        TypeError: If the parent is not a container.

    """
    if pointer.is_root:
        return value

    parent = getitem(obj, pointer.parent)
    last_token = pointer.reference_tokens[-1]

    if isinstance(parent, MutableMapping):
        parent[last_token] = value
    elif isinstance(parent, MutableSequence):
        index = sequence_index(last_token, len(parent), allow_end=insert)
        if insert:
            parent.insert(index, value)
        else:
            parent[index] = value
    else:
        raise TypeError("Cannot set value on immutable or non-indexable parent")

    return obj


def _remove_value(obj: Any, pointer: JsonPointer) -> Any:
    """Remove a value at the location specified by a JSON Pointer.

    Raises:
        ValueError: If attempting to remove root document.
        KeyError: If a key is not found in a mapping.
        IndexError: If a sequence index is out of range.
        TypeError: If removing from immutable or non-indexable object.

    """
    if pointer.is_root:
        raise ValueError("Cannot remove root document")

    parent = getitem(obj, pointer.parent)
    last_token = pointer.reference_tokens[-1]

    if isinstance(parent, MutableMapping):
        if last_token not in parent:
            raise KeyError(f"Key '{last_token}' not found")
        del parent[last_token]
    elif isinstance(parent, MutableSequence):
        parent.pop(sequence_index(last_token, len(parent), allow_end=False))
    else:
        raise TypeError("Cannot remove from immutable or non-indexable parent")

    return obj


class AddOperation(BaseModel, frozen=True):
    """Add operation - adds a value to an object or inserts into an array."""

    op: Literal["add"] = "add"
    path: JsonPointer
    value: Any

    def apply(self, obj: Any) -> Any:
        """Apply add operation to a copy of ``obj``."""
        return self.apply_in_place(copy.deepcopy(obj))

    def apply_in_place(self, obj: Any) -> Any:
        return _set_value(obj, self.path, copy.deepcopy(self.value), insert=True)


class RemoveOperation(BaseModel, frozen=True):
    """Remove operation - removes a value from an object or array."""

    op: Literal["remove"] = "remove"
    path: JsonPointer

    def apply(self, obj: Any) -> Any:
        """Apply remove operation to a copy of ``obj``."""
        return self.apply_in_place(copy.deepcopy(obj))

    def apply_in_place(self, obj: Any) -> Any:
        return _remove_value(obj, self.path)


class ReplaceOperation(BaseModel, frozen=True):
    """Replace operation - replaces an existing value."""

    op: Literal["replace"] = "replace"
    path: JsonPointer
    value: Any

    def apply(self, obj: Any) -> Any:
        """Apply replace operation to a copy of ``obj``."""
        return self.apply_in_place(copy.deepcopy(obj))

    def apply_in_place(self, obj: Any) -> Any:
        # The target must exist; replace never creates.
        getitem(obj, self.path)
        return _set_value(obj, self.path, copy.deepcopy(self.value), insert=False)


class TestOperation(BaseModel, frozen=True):
    """Test operation - tests that a value at the location equals the specified value."""

    __test__ = False
    op: Literal["test"] = "test"
    path: JsonPointer
    value: Any

    def apply(self, obj: Any) -> Any:
        """Apply test operation.

        Returns:
            The unchanged object if test passes.

        Raises:
            AssertionError: If the test fails.

        """
        try:
            actual = getitem(obj, self.path)
        except (KeyError, IndexError, ValueError, TypeError) as e:
            raise AssertionError(f"Test failed at '{self.path}': {e}") from e
        if not deep_equal(actual, self.value):
            raise AssertionError(
                f"Test failed at '{self.path}': expected {self.value!r}, got {actual!r}"
            )
        return obj

    apply_in_place = apply


PatchOperation = Annotated[
    AddOperation | RemoveOperation | ReplaceOperation | TestOperation,
    Field(discriminator="op"),
]

_operations_adapter = TypeAdapter(list[PatchOperation])


class JsonPatch(BaseModel):
    """A JSON Patch document - a sequence of operations to apply to a JSON document.

    The ``add``/``remove``/``replace``/``test`` methods append an operation and
    are what the differ uses to assemble a patch in emission order.
    """

    patch: list[PatchOperation] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.patch)

    def add(self, path: JsonPointer, value: Any) -> None:
        self.patch.append(AddOperation(path=path, value=copy.deepcopy(value)))

    def remove(self, path: JsonPointer) -> None:
        self.patch.append(RemoveOperation(path=path))

    def replace(self, path: JsonPointer, value: Any) -> None:
        self.patch.append(ReplaceOperation(path=path, value=copy.deepcopy(value)))

    def test(self, path: JsonPointer, value: Any) -> None:
        self.patch.append(TestOperation(path=path, value=copy.deepcopy(value)))

    def apply(self, obj: Any) -> Any:
        """Apply all patch operations in sequence to a copy of ``obj``.

        Raises:
            KeyError: If a key is not found.
            IndexError: If an array index is out of range.
            ValueError: If an index is invalid or the root is removed.
            TypeError: If an operation targets a scalar as a container.
            AssertionError: If a test operation fails.

        """
        result = copy.deepcopy(obj)
        for operation in self.patch:
            result = operation.apply_in_place(result)
        return result

    def to_json(self, *, indent: int | None = None, ensure_ascii: bool = False) -> str:
        """Render the wire form, see :func:`serialize_document`."""
        return serialize_document(self, indent=indent, ensure_ascii=ensure_ascii)

    @classmethod
    def from_json(cls, data: str | bytes) -> "JsonPatch":
        """Parse a wire-form document (a JSON array of operations).

        Raises:
            pydantic.ValidationError: If the text is not a valid patch document.

        """
        return cls(patch=_operations_adapter.validate_json(data))


def serialize_document(
    document: JsonPatch, *, indent: int | None = None, ensure_ascii: bool = False
) -> str:
    """Render a patch into its minimal wire form.

    Emission order is preserved. ``from`` never appears, and ``remove``
    operations carry no ``value``.

    Raises:
        PatchSerializationError: If the dumped document is not a list of
            operation objects.
        ValueError: If a value is a non-finite float (``NaN``, ``Infinity``),
            which JSON cannot represent.

    """
    node = _operations_adapter.dump_python(document.patch, by_alias=True)
    if not isinstance(node, list):
        logger.error("Patch dump is %s, not a list", type(node).__name__)
        raise PatchSerializationError("Expected document to be an array")
    for element in node:
        if not isinstance(element, dict) or not isinstance(element.get("op"), str):
            logger.error("Malformed operation in patch dump: %r", element)
            raise PatchSerializationError(
                "Expected all elements of document array to be operation objects"
            )
        element.pop("from", None)
        if element["op"] == "remove":
            element.pop("value", None)
    separators = None if indent is not None else (",", ":")
    try:
        return json.dumps(
            node,
            indent=indent,
            separators=separators,
            ensure_ascii=ensure_ascii,
            allow_nan=False,
        )
    except ValueError as e:
        raise ValueError(f"Patch contains a value JSON cannot represent: {e}") from e


__all__ = (
    "AddOperation",
    "JsonPatch",
    "PatchOperation",
    "PatchSerializationError",
    "RemoveOperation",
    "ReplaceOperation",
    "TestOperation",
    "serialize_document",
)
