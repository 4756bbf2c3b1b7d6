"""
Source search.

Breadth-first traversal of a source tree. Breadth-first order is what makes
the shallowest candidate win: every slot at depth 1 is visited before any
slot at depth 2, and slots at equal depth come in key (or index) order.

Slots are identified by their path from the top-level source, so an object
that appears at two places in the source is two distinct sets of slots.
"""

import logging
from collections import deque
from typing import Any, Iterator, List, NamedTuple, Optional, Sequence, Tuple

from .context import SearchContext
from .schema import Kind
from .values import Key, SourcePath, ValueKind, children, value_kind

logger = logging.getLogger(__name__)


class Match(NamedTuple):
    """A leaf picked by find_leaf. key is None for a root match."""

    value: Any
    path: SourcePath
    key: Optional[Key]
    depth: int


class Slot(NamedTuple):
    depth: int
    path: SourcePath
    key: Key
    value: Any


def iter_slots(
    source: Any,
    max_depth: Optional[int] = None,
    origin: SourcePath = (),
) -> Iterator[Slot]:
    """
    Yield every slot below ``source`` breadth-first.

    ``origin`` is the path of ``source`` itself; slot paths extend it.
    Depths are relative to ``source``.
    """
    if not value_kind(source).is_container:
        return
    queue = deque([(0, tuple(origin), source)])
    while queue:
        depth, path, node = queue.popleft()
        if max_depth is not None and depth + 1 > max_depth:
            continue
        for key, child in children(node):
            child_path = path + (key,)
            yield Slot(depth + 1, child_path, key, child)
            if value_kind(child).is_container:
                queue.append((depth + 1, child_path, child))


def iter_containers(
    source: Any,
    max_depth: Optional[int] = None,
    origin: SourcePath = (),
) -> Iterator[Tuple[int, SourcePath, Any]]:
    """Yield ``source`` and every container below it breadth-first, as (depth, path, value)."""
    if not value_kind(source).is_container:
        return
    yield 0, tuple(origin), source
    for slot in iter_slots(source, max_depth, origin):
        if value_kind(slot.value).is_container:
            yield slot.depth, slot.path, slot.value


def find_leaf(
    kind: Kind,
    source: Any,
    ctx: SearchContext,
    preferred: Sequence[str] = (),
    origin: SourcePath = (),
) -> Optional[Match]:
    """
    Find a primitive of ``kind`` reachable from ``source``.

    A primitive source of the right kind matches itself. Otherwise, for each
    candidate name (preferred names, pool hints, sticky keys) the shallowest
    unused leaf with that key wins; failing all names, the shallowest unused
    leaf of the kind wins. The chosen slot is claimed in ``ctx`` and a pool
    hint that selected it is consumed.

    Returns:
        The match, or None if no eligible leaf exists.
    """
    target = kind.value_kind
    source_kind = value_kind(source)

    if source_kind == target:
        return Match(source, tuple(origin), None, 0)
    if not source_kind.is_container:
        return None

    eligible: List[Slot] = [
        slot
        for slot in iter_slots(source, ctx.settings.max_depth, origin)
        if value_kind(slot.value) == target and not ctx.is_used(slot.path)
    ]
    if not eligible:
        return None

    sticky = ctx.sticky if ctx.settings.sticky_keys else ()
    for name in ctx.hints.candidates(preferred, sticky):
        for slot in eligible:
            if slot.key == name:
                ctx.hints.consume(name)
                return _take(slot, ctx, f"hint '{name}'")

    return _take(eligible[0], ctx, "shallowest")


def _take(slot: Slot, ctx: SearchContext, reason: str) -> Match:
    ctx.claim(slot.path)
    logger.debug(f"Picked '{slot.key}' at depth {slot.depth} ({reason})")
    return Match(slot.value, slot.path, slot.key, slot.depth)


def direct_values(
    kind: ValueKind,
    obj: Any,
    ctx: SearchContext,
    origin: SourcePath = (),
) -> List[Tuple[Key, Any]]:
    """Unused properties of ``obj`` whose values are directly of ``kind``."""
    return [
        (key, value)
        for key, value in children(obj)
        if value_kind(value) == kind and not ctx.is_used(tuple(origin) + (key,))
    ]


def container_values(obj: Any) -> List[Tuple[Key, Any]]:
    """Properties of ``obj`` whose values are objects or arrays."""
    return [(key, value) for key, value in children(obj) if value_kind(value).is_container]
