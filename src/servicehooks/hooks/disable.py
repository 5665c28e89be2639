"""Hook that blocks client access to a service method."""

import logging
from collections.abc import Awaitable, Callable, Iterable

from servicehooks.awaitables import settle
from servicehooks.errors import MethodNotAllowedError
from servicehooks.events import HookedServiceEvent, Listener, Providers

logger = logging.getLogger(__name__)

# Sync or async (event) -> bool; the call is allowed only on exactly True
ProviderPredicate = Callable[[HookedServiceEvent], bool | Awaitable[bool]]


def disable(
    provider: Providers | str | Iterable[Providers | str] | ProviderPredicate | None = None,
) -> Listener:
    """Disable a service method for client access.

    Internal calls (no provider in params) always pass through.

    Args:
        provider: Which client calls to reject:
            - None: every client call
            - a predicate of the event: calls for which it does not return True
            - a provider, provider tag, or iterable of them: calls from
              those providers

    Raises:
        ValueError: If a provider tag is unknown (at construction time)
        MethodNotAllowedError: When a call is rejected
    """
    predicate: ProviderPredicate | None = None
    blocked: tuple[Providers, ...] = ()

    if provider is not None:
        if callable(provider):
            predicate = provider
        elif isinstance(provider, (Providers, str)):
            blocked = (Providers.parse(provider),)
        else:
            blocked = tuple(Providers.parse(p) for p in provider)

    def reject(event: HookedServiceEvent) -> MethodNotAllowedError:
        logger.debug(
            "Rejecting %s call from provider '%s'",
            event.method.value if event.method else "service",
            event.provider,
        )
        return MethodNotAllowedError()

    async def listener(event: HookedServiceEvent) -> None:
        if not event.has_provider:
            return

        if provider is None:
            raise reject(event)

        if predicate is not None:
            allowed = await settle(predicate(event))
            if allowed is not True:
                raise reject(event)
            return

        if any(p == event.provider for p in blocked):
            raise reject(event)

    return listener
