"""Helpers for callables that may be sync or async."""

import inspect
from typing import Any


async def settle(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it as-is.

    Lets hooks accept plain functions and coroutine functions alike:
    call the user's function, then ``await settle(...)`` its return value.
    """
    if inspect.isawaitable(value):
        return await value
    return value
