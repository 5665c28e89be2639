"""Hooks that replace event.data or event.result with a transformed copy."""

from typing import Any

from servicehooks.events import HookedServiceEvent, Listener
from servicehooks.payload.normalize import LeafFn, normalize
from servicehooks.payload.serialization import deserialize, serialize


def transform(transformer: LeafFn) -> Listener:
    """Mutate ``event.data`` or ``event.result`` using ``transformer``.

    Runs on single values and on every element of a collection. Applies to
    internal and client calls alike.
    """

    async def listener(event: HookedServiceEvent) -> None:
        if event.is_before:
            event.data = await normalize(event.data, transformer)
        elif event.is_after:
            event.result = await normalize(event.result, transformer)

    return listener


def to_json() -> Listener:
    """Turn ``event.data`` or ``event.result`` into JSON-friendly data."""
    return transform(serialize)


def to_type(target: type) -> Listener:
    """Convert ``event.data`` or ``event.result`` into instances of ``target``.

    Values that are already exactly ``target`` pass through untouched.
    Any event that is not a before event is treated as an after event.
    """

    def coerce(value: Any) -> Any:
        if type(value) is not target:
            return deserialize(value, target)
        return value

    async def listener(event: HookedServiceEvent) -> None:
        if event.is_before:
            event.data = await normalize(event.data, coerce)
        else:
            event.result = await normalize(event.result, coerce)

    return listener
