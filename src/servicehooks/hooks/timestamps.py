"""Hooks that stamp the current time onto records."""

from collections.abc import Awaitable, Callable, Iterator
from datetime import UTC, datetime
from typing import Any

from servicehooks.awaitables import settle
from servicehooks.config import HookSettings
from servicehooks.errors import UnsupportedShapeError
from servicehooks.events import HookedServiceEvent, Listener
from servicehooks.payload.normalize import normalize
from servicehooks.payload.shapes import (
    FieldAccess,
    Shape,
    classify,
    is_collection,
    property_bag,
)

# Custom assignment: sync or async (obj, now) -> None
Assign = Callable[[Any, str], Awaitable[None] | None]


def set_key(obj: Any, name: str, value: str) -> None:
    """Set ``name`` on a mapping, extensible model or FieldAccess object.

    Raises:
        UnsupportedShapeError: If ``obj`` cannot hold a named field
    """
    shape = classify(obj)

    if shape is Shape.MAPPING:
        obj[name] = value
    elif shape is Shape.EXTENSIBLE:
        property_bag(obj)[name] = value
    elif isinstance(obj, FieldAccess):
        try:
            obj.set_field(name, value)
        except (AttributeError, TypeError) as e:
            raise UnsupportedShapeError(name, obj, action="set") from e
    else:
        raise UnsupportedShapeError(name, obj, action="set")


def _timestamp_hook(name: str, assign: Assign | None, timespec: str) -> Listener:
    async def listener(event: HookedServiceEvent) -> None:
        if not event.has_provider:
            return

        # One timestamp for the whole event, so batches share it
        now = datetime.now(UTC).isoformat(timespec=timespec)

        async def stamp(obj: Any) -> Any:
            if assign is not None:
                await settle(assign(obj, now))
            else:
                set_key(obj, name, now)
            return obj

        target = event.data if event.is_before else event.result

        # Walking a single-pass iterator consumes it, so the rebuild must be kept
        keep_rebuilt = _contains_iterator(target)
        rebuilt = await normalize(target, stamp)

        if keep_rebuilt:
            if event.is_before:
                event.data = rebuilt
            else:
                event.result = rebuilt

    return listener


def _contains_iterator(payload: Any) -> bool:
    """True if ``payload`` is, or holds at any depth, a single-pass iterator."""
    if isinstance(payload, Iterator):
        return True
    return is_collection(payload) and any(_contains_iterator(m) for m in payload)


def add_created_at(
    assign: Assign | None = None,
    key: str | None = None,
    settings: HookSettings | None = None,
) -> Listener:
    """Stamp the current UTC time onto ``event.data`` or ``event.result``.

    Only applies to client calls. Records are mutated in place.

    Args:
        assign: Optional function that sets the timestamp on an object,
            replacing the built-in per-shape strategies
        key: Field name (default: settings.created_at_key, "createdAt")
        settings: Hook settings (default: HookSettings.from_env())
    """
    settings = settings or HookSettings.from_env()
    return _timestamp_hook(key or settings.created_at_key, assign, settings.timespec)


def add_updated_at(
    assign: Assign | None = None,
    key: str | None = None,
    settings: HookSettings | None = None,
) -> Listener:
    """Stamp the current UTC time onto ``event.data`` or ``event.result``.

    Same as add_created_at, with the default key "updatedAt".
    """
    settings = settings or HookSettings.from_env()
    return _timestamp_hook(key or settings.updated_at_key, assign, settings.timespec)
