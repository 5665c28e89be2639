"""Service interface and registry consumed by hook_all_services.

The service abstraction itself lives outside this package. This module only
pins down the shape hooks attach to and the registry an application uses to
announce services as they are mounted.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

from servicehooks.awaitables import settle

logger = logging.getLogger(__name__)


@runtime_checkable
class Service(Protocol):
    """Polymorphic CRUD provider that fires hooked service events."""

    async def index(self, params: dict[str, Any] | None = None) -> Any: ...

    async def read(self, id: Any, params: dict[str, Any] | None = None) -> Any: ...

    async def create(self, data: Any, params: dict[str, Any] | None = None) -> Any: ...

    async def modify(
        self, id: Any, data: Any, params: dict[str, Any] | None = None
    ) -> Any: ...

    async def update(
        self, id: Any, data: Any, params: dict[str, Any] | None = None
    ) -> Any: ...

    async def remove(self, id: Any, params: dict[str, Any] | None = None) -> Any: ...


# Notified with each newly registered service: sync or async (service) -> None
ServiceListener = Callable[[Any], Awaitable[None] | None]


class ServiceRegistry:
    """Registry of the services mounted in an application.

    Services are keyed by path. Listeners subscribed with on_service()
    are awaited, in subscription order, every time a service is registered.

    Example:
        registry = ServiceRegistry()
        registry.on_service(lambda service: print("mounted", service))
        await registry.register("/users", UserService())
    """

    def __init__(self) -> None:
        self._services: dict[str, Any] = {}
        self._listeners: list[ServiceListener] = []

    @staticmethod
    def _normalize_path(path: str) -> str:
        return path.strip("/")

    @property
    def services(self) -> dict[str, Any]:
        """Registered services by path, in registration order."""
        return self._services

    def get(self, path: str) -> Any:
        """Get the service mounted at ``path``, or None."""
        return self._services.get(self._normalize_path(path))

    def on_service(self, listener: ServiceListener) -> None:
        """Subscribe to future service registrations."""
        self._listeners.append(listener)

    async def register(self, path: str, service: Any) -> Any:
        """Mount a service at ``path`` and notify subscribers.

        Re-registering a path replaces the previous service.

        Returns:
            The registered service
        """
        path = self._normalize_path(path)
        self._services[path] = service
        logger.debug("Registered service at '%s': %r", path, service)

        for listener in list(self._listeners):
            await settle(listener(service))

        return service
