"""Hook that strips fields from results returned to clients."""

from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from servicehooks.awaitables import settle
from servicehooks.errors import PhaseViolationError, UnsupportedShapeError
from servicehooks.events import HookedServiceEvent, Listener
from servicehooks.payload.normalize import normalize, rebuild
from servicehooks.payload.shapes import (
    FieldAccess,
    Shape,
    classify,
    is_collection,
    property_bag,
)

# Custom removal: sync or async (key, obj) -> obj | None
Remover = Callable[[Any, Any], Any | Awaitable[Any]]


def remove_key(key: Any, obj: Any) -> Any:
    """Remove ``key`` from ``obj`` using the strategy for its shape.

    Lists lose the first element equal to ``key``; other collections are
    copied without it; mappings, extensible models and FieldAccess objects
    lose the named field. Missing keys are ignored.

    Returns:
        The object with the key removed (a new object for non-list collections)

    Raises:
        UnsupportedShapeError: If ``obj`` has no removal strategy
    """
    shape = classify(obj)

    if shape is Shape.SEQUENCE:
        if key in obj:
            obj.remove(key)
        return obj

    if shape is Shape.COLLECTION:
        return rebuild(obj, [item for item in obj if item != key])

    if shape is Shape.MAPPING:
        obj.pop(key, None)
        return obj

    if shape is Shape.EXTENSIBLE:
        property_bag(obj).pop(key, None)
        return obj

    if isinstance(obj, FieldAccess):
        try:
            obj.remove_field(key)
        except (AttributeError, TypeError) as e:
            raise UnsupportedShapeError(key, obj, action="remove") from e
        return obj

    raise UnsupportedShapeError(key, obj, action="remove")


def remove(key: Any | Iterable[Any], remover: Remover | None = None) -> Listener:
    """Remove one or more keys from ``event.result``.

    Works on single objects and collections. Only applies to client calls
    (events whose params carry a provider) and only on after events.

    Args:
        key: A key or an iterable of keys, removed in order
        remover: Optional replacement for the built-in removal strategies.
            Called once per key; its return value (when not None) replaces
            the object for the next key.

    Raises:
        PhaseViolationError: When the listener receives a before event
    """
    keys = list(key) if is_collection(key) else [key]

    async def remove_all(obj: Any) -> Any:
        for k in keys:
            if remover is not None:
                removed = await settle(remover(k, obj))
                if removed is not None:
                    obj = removed
            else:
                obj = remove_key(k, obj)
        return obj

    async def listener(event: HookedServiceEvent) -> None:
        if not event.is_after:
            raise PhaseViolationError("'remove' only works on after hooks.")

        if event.has_provider:
            event.result = await normalize(event.result, remove_all, nested=False)

    return listener
