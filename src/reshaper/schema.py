"""
Schema Models for reshaper.

Defines Pydantic models for the three schema node variants and the parser
that turns the caller's compact surface form into them.

Surface form:
    "String" | "Number" | "Boolean"     -> TypeLeaf
    [<node>]                            -> ArrayTemplate (repeat <node>)
    {"key": <node>, ...}                -> ObjectTemplate (keys kept in order)

Example:
    >>> from reshaper.schema import parse_schema, describe
    >>> node = parse_schema({"names": ["String"], "ages": [{"age": ["Number"]}]})
    >>> describe(node)
    '{names, ages}'
    >>> describe(node.fields["ages"])
    '[{age}]'
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, List, Sequence, Tuple, Union

from jsonschema import Draft202012Validator
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import PathElement, SchemaError
from .values import ValueKind


class Kind(str, Enum):
    """Primitive type names accepted by a type leaf."""

    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"

    @property
    def value_kind(self) -> ValueKind:
        return _VALUE_KINDS[self]


_VALUE_KINDS = {
    Kind.STRING: ValueKind.STRING,
    Kind.NUMBER: ValueKind.NUMBER,
    Kind.BOOLEAN: ValueKind.BOOLEAN,
}


class TypeLeaf(BaseModel):
    """A primitive of the given kind."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Kind = Field(..., description="Primitive kind to extract")


class ArrayTemplate(BaseModel):
    """
    An array whose elements each match ``inner``.

    Example:
        ArrayTemplate(inner=TypeLeaf(kind=Kind.NUMBER))   # ["Number"]
    """

    model_config = ConfigDict(extra="forbid")

    inner: "SchemaNode" = Field(..., description="Schema repeated per element")


class ObjectTemplate(BaseModel):
    """
    An object with exactly the keys of ``fields``.

    Attributes:
        fields: Output key to schema node mapping. Declaration order is the
                resolution order.
    """

    model_config = ConfigDict(extra="forbid")

    fields: Dict[str, "SchemaNode"] = Field(
        ..., description="Output key to schema node mapping"
    )


SchemaNode = Union[TypeLeaf, ArrayTemplate, ObjectTemplate]

ArrayTemplate.model_rebuild()
ObjectTemplate.model_rebuild()

_NODE_TYPES = (TypeLeaf, ArrayTemplate, ObjectTemplate)


def parse_schema(raw: Any, path: Sequence[PathElement] = ()) -> SchemaNode:
    """
    Parse a schema from its surface form.

    Already-parsed nodes are returned unchanged.

    Args:
        raw: Type name string, one-element list, or mapping.
        path: Location of ``raw`` inside the enclosing schema (for errors).

    Returns:
        The schema node tree.

    Raises:
        SchemaError: If ``raw`` or any nested part is malformed.

    Examples:
        >>> parse_schema("Number")
        TypeLeaf(kind=<Kind.NUMBER: 'Number'>)
        >>> parse_schema(["Date"])
        Traceback (most recent call last):
        ...
        reshaper.exceptions.SchemaError: Unknown type name 'Date'; expected String, Number or Boolean (at [])
    """
    path = tuple(path)

    if isinstance(raw, _NODE_TYPES):
        return raw

    if isinstance(raw, str):
        try:
            return TypeLeaf(kind=Kind(raw))
        except ValueError:
            raise SchemaError(
                f"Unknown type name {raw!r}; expected String, Number or Boolean",
                path,
            )

    if isinstance(raw, (list, tuple)):
        if len(raw) != 1:
            raise SchemaError(
                f"Array template must contain exactly one schema, got {len(raw)}",
                path,
            )
        return ArrayTemplate(inner=parse_schema(raw[0], path + ("[]",)))

    if isinstance(raw, Mapping):
        fields: Dict[str, SchemaNode] = {}
        for key, sub in raw.items():
            if not isinstance(key, str):
                raise SchemaError(
                    f"Object template keys must be strings, got {type(key).__name__}",
                    path,
                )
            fields[key] = parse_schema(sub, path + (key,))
        return ObjectTemplate(fields=fields)

    raise SchemaError(f"Unsupported schema element of type {type(raw).__name__}", path)


def describe(node: SchemaNode) -> str:
    """Compact rendering of a node for error messages."""
    if isinstance(node, TypeLeaf):
        return node.kind.value
    if isinstance(node, ArrayTemplate):
        return f"[{describe(node.inner)}]"
    return "{" + ", ".join(node.fields) + "}"


def to_raw(node: SchemaNode) -> Any:
    """Convert a node back into its surface form."""
    if isinstance(node, TypeLeaf):
        return node.kind.value
    if isinstance(node, ArrayTemplate):
        return [to_raw(node.inner)]
    return {key: to_raw(sub) for key, sub in node.fields.items()}


def is_composite(node: SchemaNode) -> bool:
    return not isinstance(node, TypeLeaf)


# JSON Schema (Draft 2020-12) describing the surface form.
SCHEMA_META_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$ref": "#/$defs/node",
    "$defs": {
        "node": {
            "type": ["string", "array", "object"],
            "allOf": [
                {
                    "if": {"type": "string"},
                    "then": {"enum": [kind.value for kind in Kind]},
                },
                {
                    "if": {"type": "array"},
                    "then": {
                        "items": {"$ref": "#/$defs/node"},
                        "minItems": 1,
                        "maxItems": 1,
                    },
                },
                {
                    "if": {"type": "object"},
                    "then": {
                        "additionalProperties": {"$ref": "#/$defs/node"},
                    },
                },
            ],
        }
    },
}


def validate_schema_document(raw: Any) -> Dict[str, Any]:
    """
    Validate a schema document (e.g. loaded from JSON/YAML) against the
    reshaper meta-schema.

    Unlike parse_schema, which stops at the first problem, this reports every
    error found.

    Args:
        raw: Schema document.

    Returns:
        Dict with 'valid' (bool), 'errors' (list of str) and 'schema'
        (the document if valid, else None).
    """
    validator = Draft202012Validator(SCHEMA_META_SCHEMA)
    errors: List[str] = []

    for error in sorted(validator.iter_errors(raw), key=lambda e: list(map(str, e.absolute_path))):
        location = "/".join(str(p) for p in error.absolute_path) or "<root>"
        errors.append(f"{location}: {error.message}")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "schema": raw if len(errors) == 0 else None,
    }


def leaf_kinds(node: SchemaNode) -> Tuple[Kind, ...]:
    """All leaf kinds of a schema, in declaration order."""
    if isinstance(node, TypeLeaf):
        return (node.kind,)
    if isinstance(node, ArrayTemplate):
        return leaf_kinds(node.inner)
    return tuple(kind for sub in node.fields.values() for kind in leaf_kinds(sub))
