"""Listener composition and service-wide hook registration."""

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from servicehooks.awaitables import settle
from servicehooks.events import HookedServiceEvent, Listener
from servicehooks.services import ServiceRegistry

logger = logging.getLogger(__name__)

ServiceCallback = Callable[[Any], Awaitable[None] | None]
Initializer = Callable[[ServiceRegistry], Awaitable[None]]


def chain_listeners(listeners: Iterable[Listener]) -> Listener:
    """Compose listeners into one that runs them sequentially.

    Each listener is awaited before the next one starts. The first exception
    propagates unchanged and the remaining listeners are skipped.

    Args:
        listeners: Listeners in execution order (sync or async)

    Returns:
        A single async listener
    """
    listeners = tuple(listeners)

    async def chained(event: HookedServiceEvent) -> None:
        for listener in listeners:
            await settle(listener(event))

    return chained


def hook_all_services(callback: ServiceCallback) -> Initializer:
    """Run ``callback`` on every service, now and in the future.

    The returned initializer invokes the callback once for each service
    already in the registry, then subscribes to the registry so every
    service registered later is handled too. A service instance is only
    ever passed to the callback once, even if it is mounted at several
    paths.

    Usage:
        def attach(service):
            service.after_hooks.append(remove("password"))

        await hook_all_services(attach)(registry)
    """
    # id -> service; holding the service keeps its id from being reused
    touched: dict[int, Any] = {}

    async def touch(service: Any) -> None:
        if id(service) in touched:
            return
        touched[id(service)] = service
        logger.debug("Hooking service %r", service)
        await settle(callback(service))

    async def initialize(registry: ServiceRegistry) -> None:
        for service in list(registry.services.values()):
            await touch(service)

        registry.on_service(touch)

    return initialize
