"""Event model passed through service hooks.

Defines the core data structures shared by every hook:
- Phase: which checkpoint fired the event (before or after execution)
- Providers: the transport a call arrived through
- HookedServiceEvent: the mutable event handed to each listener
- Listener: the callable signature hooks implement
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Context key the transport layer sets on client-originated calls
PROVIDER_KEY = "provider"


class Phase(Enum):
    """The checkpoint an event was fired at."""

    BEFORE = "before"
    AFTER = "after"


class ServiceMethod(Enum):
    """The CRUD method that produced an event."""

    INDEX = "index"
    READ = "read"
    CREATE = "create"
    MODIFY = "modify"
    UPDATE = "update"
    REMOVE = "remove"


class Providers(str, Enum):
    """Transport that issued a service call.

    String-valued so that a plain tag compares equal to its member:
    ``Providers.REST == "rest"``.
    """

    SERVER = "server"
    REST = "rest"
    WEBSOCKET = "websocket"

    @classmethod
    def _missing_(cls, value: object) -> "Providers | None":
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None

    @classmethod
    def parse(cls, value: "Providers | str") -> "Providers":
        """Coerce a provider tag into a member.

        Raises:
            ValueError: If the tag does not name a known provider
        """
        if isinstance(value, cls):
            return value
        return cls(str(value))


@dataclass
class HookedServiceEvent:
    """A single checkpoint of a single service call.

    Attributes:
        phase: BEFORE or AFTER
        method: The service method being called, if known
        data: Input payload (meaningful on BEFORE only)
        result: Output payload (meaningful on AFTER only)
        params: Call context; carries "provider" for client-originated calls
        id: Record id for read/modify/update/remove calls
        service: The service that fired the event
    """

    phase: Phase
    method: ServiceMethod | None = None
    data: Any = None
    result: Any = None
    params: dict[str, Any] | None = field(default_factory=dict)
    id: Any = None
    service: Any = None

    @property
    def is_before(self) -> bool:
        return self.phase is Phase.BEFORE

    @property
    def is_after(self) -> bool:
        return self.phase is Phase.AFTER

    @property
    def has_provider(self) -> bool:
        """True when the call came in through an external transport."""
        return self.params is not None and PROVIDER_KEY in self.params

    @property
    def provider(self) -> Any:
        if not self.has_provider:
            return None
        return self.params[PROVIDER_KEY]


# Listener signature: sync or async (HookedServiceEvent) -> None
Listener = Callable[[HookedServiceEvent], Awaitable[None] | None]
