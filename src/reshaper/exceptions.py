"""
Exception classes for reshaper.

Every error raised by the engine derives from ReshaperError so callers can
catch the whole family with one clause. MatchNotFound is the only matching
failure; SchemaError and HintError report malformed caller input before any
search starts.

Design Principle:
    exceptions.py (BASE - zero dependencies)
        ^
    schema.py / hints.py / search.py
        ^
    walker.py -> engine.py -> cli.py
"""

from typing import Any, Dict, Optional, Sequence, Tuple, Union

PathElement = Union[str, int]


class ReshaperError(Exception):
    """Base class for all reshaper errors."""


class MatchNotFound(ReshaperError):
    """
    Raised when a schema position cannot be satisfied by the source.

    The message always starts with "Could not find". Treat it as diagnostic
    text only; use the attributes for anything programmatic.

    Attributes:
        description: What was being looked for (a type name, a schema key,
                     or "<inner> for array").
        path: Schema path of the unsatisfiable position. String elements are
              object template keys, "[]" marks an array template element.

    Example:
        >>> try:
        ...     reshape("a", ["Number"])
        ... except MatchNotFound as e:
        ...     print(e)
        Could not find Number for array
    """

    def __init__(
        self,
        description: str,
        path: Optional[Sequence[PathElement]] = None,
    ):
        self.description = description
        self.path: Tuple[PathElement, ...] = tuple(path or ())
        super().__init__(f"Could not find {description}")

    @property
    def location(self) -> str:
        """Dotted rendering of the schema path ("" for the root)."""
        parts = []
        for element in self.path:
            if element == "[]" and parts:
                parts[-1] += "[]"
            else:
                parts.append(str(element))
        return ".".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        result: Dict[str, Any] = {
            "error": "match_not_found",
            "message": str(self),
            "description": self.description,
        }
        if self.path:
            result["path"] = self.location
        return result

    def __repr__(self) -> str:
        return f"MatchNotFound(description={self.description!r}, path={self.path!r})"


class SchemaError(ReshaperError, ValueError):
    """Raised when a schema document is not a valid reshaper schema."""

    def __init__(self, message: str, path: Optional[Sequence[PathElement]] = None):
        self.path: Tuple[PathElement, ...] = tuple(path or ())
        if self.path:
            message = f"{message} (at {'/'.join(str(p) for p in self.path)})"
        super().__init__(message)


class HintError(ReshaperError, TypeError):
    """Raised when hints are not a name, a sequence of names or a mapping."""
