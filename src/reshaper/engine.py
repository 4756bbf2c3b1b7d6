"""
Reshape entry points.

Example:
    >>> from reshaper import reshape
    >>> data = [{"x": 12, "y": 5}, {"x": 2, "y": 3}]
    >>> reshape(data, ["Number"])
    [12, 2]
    >>> reshape(data, ["Number"], "y")
    [5, 3]
"""

import logging
from typing import Any, Dict, Optional, Union

from .context import SearchContext
from .hints import HintPool
from .schema import SchemaNode, describe, parse_schema
from .settings import ReshapeSettings, coerce_settings
from .values import value_kind
from .walker import match

logger = logging.getLogger(__name__)


class Reshaper:
    """
    A parsed schema with its hints and settings, reusable across sources.

    Each apply() call gets its own search context, so one Reshaper can be
    shared between threads.

    Example:
        >>> people = Reshaper({"age": ["Number"], "height": ["Number"]})
        >>> people.apply(people_data)
        {'age': [23, 24], 'height': [1.9, 1.85]}
    """

    def __init__(
        self,
        schema: Any,
        hints: Any = None,
        settings: Union[ReshapeSettings, Dict[str, Any], None] = None,
    ):
        self.schema: SchemaNode = parse_schema(schema)
        self.hints = HintPool.from_raw(hints)
        self.settings = coerce_settings(settings)

    def apply(self, source: Any) -> Any:
        """
        Reshape ``source`` into the schema's shape.

        Raises:
            MatchNotFound: If the schema cannot be satisfied.
            TypeError: If ``source`` contains values outside the value model.
        """
        value_kind(source)
        ctx = SearchContext(self.hints.copy(), self.settings)
        logger.debug(f"Reshaping into {describe(self.schema)} with {ctx.hints!r}")
        return match(self.schema, source, ctx)

    __call__ = apply

    def __repr__(self) -> str:
        return f"Reshaper(schema={describe(self.schema)!r}, hints={self.hints!r})"


def reshape(
    source: Any,
    schema: Any,
    hints: Any = None,
    settings: Optional[Union[ReshapeSettings, Dict[str, Any]]] = None,
) -> Any:
    """
    Search ``source`` for a sub-structure matching ``schema`` and return it in
    exactly that shape.

    Args:
        source: Nested dicts, lists and primitives.
        schema: "String" | "Number" | "Boolean", a one-element list, a dict,
                or an already-parsed schema node.
        hints: A property name, a list of names (consumed in schema key
               order), or a mapping of schema key to property name.
        settings: ReshapeSettings or a dict of its fields.

    Returns:
        A new value conforming to ``schema``.

    Raises:
        MatchNotFound: If any schema position cannot be satisfied.
        SchemaError: If ``schema`` is malformed.
        HintError: If ``hints`` has an unsupported type.
    """
    return Reshaper(schema, hints, settings).apply(source)
