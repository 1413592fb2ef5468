"""RFC6901 JSON Pointer paths for patch operations."""

import re
from functools import reduce
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from .types import is_array, is_object

_INVALID_ESCAPE = re.compile(r"(~[^01]|~$)")


def escape(token: str) -> str:
    """Escape a reference token (``~`` → ``~0``, ``/`` → ``~1``)."""
    return token.replace("~", "~0").replace("/", "~1")


def unescape(token: str) -> str:
    """Reverse :func:`escape`. Order matters: ``~01`` must decode to ``~1``."""
    return token.replace("~1", "/").replace("~0", "~")


class JsonPointer(str):
    """A JSON Pointer that references a location inside a JSON document.

    The empty pointer ``""`` references the whole document. Child pointers are
    built with the ``/`` operator, which escapes the appended token::

        >>> JsonPointer("") / "a/b" / 0
        JsonPointer("/a~1b/0")

    """

    __slots__ = ("reference_tokens",)
    reference_tokens: tuple[str, ...]

    def __new__(cls, pointer: str = ""):
        """Validate before new JsonPointer object."""
        if invalid_escape := _INVALID_ESCAPE.search(pointer):
            raise ValueError(f"Found invalid escape {invalid_escape.group()}")

        reference_tokens = pointer.split("/")
        if reference_tokens.pop(0) != "":
            raise ValueError("JSON Pointer must start with a slash")

        self = super().__new__(cls, pointer)
        self.reference_tokens = tuple(unescape(token) for token in reference_tokens)
        return self

    def __truediv__(self, reference_token: str | int) -> "JsonPointer":
        return JsonPointer(f"{self}/{escape(str(reference_token))}")

    def __eq__(self, other: Any):
        if isinstance(other, JsonPointer):
            return self.reference_tokens == other.reference_tokens
        if isinstance(other, str):
            return str(self) == other
        return False

    def __hash__(self):
        # Escaping is one-to-one, so equal tokens imply equal strings.
        return str.__hash__(self)

    def __repr__(self):
        return f'{self.__class__.__name__}("{self}")'

    @property
    def parent(self) -> "JsonPointer":
        """Return the parent pointer (one token shorter)."""
        if len(self.reference_tokens) <= 1:
            return self.__class__("")
        return self.__class__(
            "".join(f"/{escape(token)}" for token in self.reference_tokens[:-1])
        )

    @property
    def is_root(self) -> bool:
        return not self.reference_tokens

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Provide Pydantic validation schema for JsonPointer."""
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.str_schema(),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, return_schema=core_schema.str_schema()
            ),
        )


def sequence_index(token: str, length: int, *, allow_end: bool) -> int:
    """Convert token to sequence index with bounds checking.

    ``allow_end`` permits ``length`` itself (and ``-``) as an insertion point.
    """
    if allow_end and token == "-":
        return length
    if not token.isdigit() or (len(token) > 1 and token.startswith("0")):
        raise ValueError(f"Invalid sequence index '{token}'")
    index = int(token)

    upper_bound = length if allow_end else length - 1
    if index > upper_bound:
        verb = "insert" if allow_end else "access"
        raise IndexError(
            f"Index {index} out of range to {verb} sequence of length {length}"
        )
    return index


def getitem(a: Any, b: Any) -> Any:
    """Retrieve value using a single token or full JsonPointer."""
    if isinstance(b, JsonPointer):
        return reduce(getitem, b.reference_tokens, a)

    token = b
    if is_object(a):
        if token not in a:
            raise KeyError(f"Key '{token}' not found in object")
        return a[token]

    if is_array(a):
        return a[sequence_index(token, len(a), allow_end=False)]

    raise TypeError(f"Cannot traverse into {type(a).__name__} with token '{token}'")


__all__ = ("JsonPointer", "escape", "getitem", "sequence_index", "unescape")
