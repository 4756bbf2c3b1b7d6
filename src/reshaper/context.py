"""
Search context shared by the walker and the searcher during one call.

The context is a single thread of mutable state: the hint pool, the set of
source paths already bound to a leaf within the current object template,
and the property names chosen so far.
Speculative attempts (backoff strategies) run on a fork and are adopted only
when they succeed, so a failed attempt leaves nothing behind.
"""

from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from .hints import HintPool
from .settings import ReshapeSettings
from .values import SourcePath


class SearchContext:
    """
    Mutable state for one reshape call.

    Attributes:
        hints: Pool of caller hints still available.
        settings: Engine options.
        used: Source paths already bound to a leaf by a sibling field of the
              object template being built.
        sticky: Property names fixed by the first element of enclosing arrays.
        chosen: Property names picked in this branch, in order.
    """

    def __init__(
        self,
        hints: Optional[HintPool] = None,
        settings: Optional[ReshapeSettings] = None,
        used: Optional[Iterable[SourcePath]] = None,
        sticky: Iterable[str] = (),
    ):
        self.hints = hints if hints is not None else HintPool()
        self.settings = settings if settings is not None else ReshapeSettings.default()
        self.used: Set[SourcePath] = set(used or ())
        self.sticky: Tuple[str, ...] = tuple(sticky)
        self.chosen: List[str] = []

    def fork(self) -> "SearchContext":
        """Independent copy for a speculative attempt."""
        child = SearchContext(self.hints.copy(), self.settings, self.used, self.sticky)
        child.chosen = list(self.chosen)
        return child

    def adopt(self, child: "SearchContext") -> None:
        """Take over the state of a successful fork."""
        self.hints = child.hints
        self.used = child.used
        self.chosen = child.chosen

    def is_used(self, path: SourcePath) -> bool:
        return path in self.used

    def claim(self, path: SourcePath) -> None:
        """Bind a source path so no later sibling leaf picks it."""
        self.used.add(path)
        if path and isinstance(path[-1], str):
            self.chosen.append(path[-1])

    @contextmanager
    def object_frame(self) -> Iterator[None]:
        """
        Give the sibling fields of one object template their own used set.

        Leaves claimed by an enclosing template neither block the nested
        fields nor are blocked by them; the enclosing set is restored on exit.
        """
        outer = self.used
        self.used = set()
        try:
            yield
        finally:
            self.used = outer

    def __repr__(self) -> str:
        return (
            f"SearchContext(hints={self.hints!r}, used={len(self.used)}, "
            f"sticky={self.sticky!r})"
        )
