"""Apply a per-value function to a payload or to each member of a collection."""

from collections.abc import Awaitable, Callable, Iterable, MutableSequence
from typing import Any

from servicehooks.awaitables import settle
from servicehooks.payload.shapes import is_collection

LeafFn = Callable[[Any], Any | Awaitable[Any]]


def rebuild(original: Iterable[Any], items: list[Any]) -> Any:
    """Materialize ``items`` as the same kind of collection as ``original``.

    Lists stay lists; tuples, sets and frozensets keep their type. Anything
    else (generators, iterators, dict views) becomes a fresh single-pass
    iterator over the items.
    """
    if isinstance(original, MutableSequence):
        return list(items)
    if isinstance(original, (tuple, set, frozenset)):
        return type(original)(items)
    return iter(items)


async def normalize(payload: Any, leaf_fn: LeafFn, *, nested: bool = True) -> Any:
    """Normalize a payload by applying ``leaf_fn`` to every leaf.

    Rules:
    - None stays None (leaf_fn is not called)
    - a collection is processed member by member, in order, and rebuilt
    - any other value is replaced by ``leaf_fn(value)``

    Mappings and objects are leaves: normalization never descends into them.

    Args:
        payload: Event data or result
        leaf_fn: Sync or async function applied to each leaf
        nested: When False, non-None members of a collection are handed to
            leaf_fn as-is even if they are collections themselves

    Returns:
        The normalized payload
    """
    if payload is None:
        return None

    if is_collection(payload):
        items = []
        for member in payload:
            if nested or member is None:
                items.append(await normalize(member, leaf_fn))
            else:
                items.append(await settle(leaf_fn(member)))
        return rebuild(payload, items)

    return await settle(leaf_fn(payload))
