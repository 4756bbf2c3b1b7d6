"""
Schema walker.

Descends the schema tree and builds the result, dispatching on the node
variant. Failures are raised as MatchNotFound; every backoff attempt runs on
a forked SearchContext so a failed attempt can be dropped and the next
interpretation starts from clean state.

Array strategies, in order:
    1. breadth-first over the source's containers, shallowest first:
       an array is matched element by element, an object is read as the
       sequence of its property values
    2. one-element backoff: the inner schema matched against the source itself
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple

from .context import SearchContext
from .exceptions import MatchNotFound, PathElement
from .schema import ArrayTemplate, ObjectTemplate, SchemaNode, TypeLeaf, describe
from .search import container_values, direct_values, find_leaf, iter_containers
from .values import Key, SourcePath, ValueKind, value_kind

logger = logging.getLogger(__name__)

Path = Tuple[PathElement, ...]


def match(
    node: SchemaNode,
    source: Any,
    ctx: SearchContext,
    preferred: Sequence[str] = (),
    path: Path = (),
    origin: SourcePath = (),
) -> Any:
    """
    Build the value for ``node`` out of ``source``.

    Args:
        node: Schema node to satisfy.
        source: Source subtree to search.
        ctx: Search context of the current branch (mutated on success).
        preferred: Property names contributed by the enclosing schema key.
        path: Schema path of ``node`` (for error reporting).
        origin: Path of ``source`` from the top-level source.

    Raises:
        MatchNotFound: If no interpretation of ``source`` satisfies ``node``.
    """
    if isinstance(node, TypeLeaf):
        return _match_leaf(node, source, ctx, preferred, path, origin)
    if isinstance(node, ArrayTemplate):
        return _match_array(node, source, ctx, preferred, path, origin)
    if isinstance(node, ObjectTemplate):
        return _match_object(node, source, ctx, path, origin)
    raise TypeError(f"Not a schema node: {node!r}")


def _match_leaf(
    node: TypeLeaf,
    source: Any,
    ctx: SearchContext,
    preferred: Sequence[str],
    path: Path,
    origin: SourcePath,
) -> Any:
    found = find_leaf(node.kind, source, ctx, preferred, origin)
    if found is None:
        raise MatchNotFound(node.kind.value, path)
    return found.value


def _match_array(
    node: ArrayTemplate,
    source: Any,
    ctx: SearchContext,
    preferred: Sequence[str],
    path: Path,
    origin: SourcePath,
) -> List[Any]:
    inner = node.inner

    for depth, where, candidate in iter_containers(source, ctx.settings.max_depth, origin):
        claim = False
        if value_kind(candidate) == ValueKind.ARRAY:
            elements = list(enumerate(candidate))
        elif isinstance(inner, TypeLeaf):
            claim = True
            elements = direct_values(inner.kind.value_kind, candidate, ctx, where)
        else:
            elements = container_values(candidate)
        if not elements:
            continue

        attempt = ctx.fork()
        try:
            result = _match_elements(inner, elements, attempt, preferred, path, where, claim)
        except MatchNotFound as e:
            logger.debug(f"Array candidate at depth {depth} rejected: {e}")
            continue
        ctx.adopt(attempt)
        logger.debug(f"Matched {describe(node)} with {len(result)} element(s) at depth {depth}")
        return result

    attempt = ctx.fork()
    try:
        value = match(inner, source, attempt, preferred, path + ("[]",), origin)
    except MatchNotFound:
        pass
    else:
        ctx.adopt(attempt)
        logger.debug(f"Matched {describe(node)} by one-element backoff")
        return [value]

    raise MatchNotFound(f"{describe(inner)} for array", path)


def _match_elements(
    inner: SchemaNode,
    elements: List[Tuple[Key, Any]],
    ctx: SearchContext,
    preferred: Sequence[str],
    path: Path,
    where: SourcePath,
    claim: bool = False,
) -> List[Any]:
    """
    Match every element against ``inner``.

    Each element starts from the same hint pool, so hints are re-resolved per
    element. Names chosen by the first element become sticky for the rest.
    Hints consumed by any element are removed from ``ctx`` afterwards.
    ``where`` is the source path of the container holding the elements.
    ``claim`` is set when the elements are the property values of an object
    read as an array; those slots are claimed.
    """
    base = ctx.hints
    sticky = list(ctx.sticky)
    consumed: List[str] = []
    results = []
    element_path = path + ("[]",)

    for index, (key, element) in enumerate(elements):
        element_origin = where + (key,)
        element_ctx = SearchContext(base.copy(), ctx.settings, ctx.used, sticky)
        value = match(inner, element, element_ctx, preferred, element_path, element_origin)
        if claim:
            element_ctx.claim(element_origin)
        results.append(value)

        ctx.used = element_ctx.used
        ctx.chosen.extend(element_ctx.chosen)
        for name in base.names:
            if name not in element_ctx.hints.names and name not in consumed:
                consumed.append(name)
        if index == 0 and ctx.settings.sticky_keys:
            sticky.extend(name for name in element_ctx.chosen if name not in sticky)

    for name in consumed:
        ctx.hints.consume(name)
    return results


def _match_object(
    node: ObjectTemplate,
    source: Any,
    ctx: SearchContext,
    path: Path,
    origin: SourcePath,
) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    with ctx.object_frame():
        for key, sub in node.fields.items():
            preferred = ctx.hints.preferred_for(key, ctx.settings.key_hints)
            result[key] = _resolve_field(key, sub, source, ctx, preferred, path + (key,), origin)
    return result


def _resolve_field(
    key: str,
    sub: SchemaNode,
    source: Any,
    ctx: SearchContext,
    preferred: Sequence[str],
    path: Path,
    origin: SourcePath,
) -> Any:
    """
    Resolve one object template key. A composite field first tries the
    source property of the same name, then the whole source.
    """
    if (
        not isinstance(sub, TypeLeaf)
        and value_kind(source) == ValueKind.OBJECT
        and key in source
    ):
        attempt = ctx.fork()
        try:
            value = match(sub, source[key], attempt, preferred, path, origin + (key,))
        except MatchNotFound as e:
            logger.debug(f"Property '{key}' does not match {describe(sub)}: {e}")
        else:
            ctx.adopt(attempt)
            return value

    try:
        return match(sub, source, ctx, preferred, path, origin)
    except MatchNotFound as e:
        raise MatchNotFound(key, path) from e
