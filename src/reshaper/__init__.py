"""
reshaper - reshape nested data into the shape you describe.

Example:
    >>> from reshaper import reshape
    >>> people = [
    ...     {"name": "Joel", "info": {"age": 23, "lastName": "Auterson"}},
    ...     {"name": "Jake", "info": {"age": 24, "lastName": "Hall"}},
    ... ]
    >>> reshape(people, ["String"])
    ['Joel', 'Jake']
    >>> reshape(people, ["String"], "lastName")
    ['Auterson', 'Hall']
    >>> reshape(people, {"name": ["String"], "age": ["Number"]})
    {'name': ['Joel', 'Jake'], 'age': [23, 24]}
"""

__version__ = "0.2.0"

from .engine import Reshaper, reshape
from .exceptions import HintError, MatchNotFound, ReshaperError, SchemaError
from .hints import HintPool
from .schema import (
    ArrayTemplate,
    Kind,
    ObjectTemplate,
    SchemaNode,
    TypeLeaf,
    describe,
    parse_schema,
    validate_schema_document,
)
from .settings import ReshapeSettings
from .values import ValueKind, value_kind

__all__ = [
    # Entry points
    "reshape",
    "Reshaper",
    # Errors
    "ReshaperError",
    "MatchNotFound",
    "SchemaError",
    "HintError",
    # Schema
    "Kind",
    "TypeLeaf",
    "ArrayTemplate",
    "ObjectTemplate",
    "SchemaNode",
    "parse_schema",
    "describe",
    "validate_schema_document",
    # Options
    "HintPool",
    "ReshapeSettings",
    # Values
    "ValueKind",
    "value_kind",
]
