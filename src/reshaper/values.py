"""
Value classification.

Sources are plain Python data (dicts, lists, str, int/float, bool, None).
value_kind() tags each value once so the rest of the engine can switch on
ValueKind instead of probing shapes.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterator, Tuple, Union

Key = Union[str, int]

# Location of a value below the top-level source: the keys and indexes leading
# to it. Two places holding the same object still have different paths.
SourcePath = Tuple[Key, ...]


class ValueKind(str, Enum):
    """Variant tag of a source value."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"

    @property
    def is_container(self) -> bool:
        return self in (ValueKind.OBJECT, ValueKind.ARRAY)


def value_kind(value: Any) -> ValueKind:
    """
    Classify a source value.

    bool is checked before int/float since it is a subclass of int.

    Raises:
        TypeError: If the value is not part of the value model.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    raise TypeError(f"Unsupported source value of type {type(value).__name__}")


def children(value: Any) -> Iterator[Tuple[Key, Any]]:
    """Yield (key, child) pairs of a container in key or index order."""
    kind = value_kind(value)
    if kind == ValueKind.OBJECT:
        yield from value.items()
    elif kind == ValueKind.ARRAY:
        yield from enumerate(value)
