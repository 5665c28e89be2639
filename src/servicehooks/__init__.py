"""servicehooks: before/after hooks for CRUD services.

A service fires a HookedServiceEvent before and after each call. Listeners
attached to those checkpoints inspect or rewrite the call's input (data)
or output (result):
- chain_listeners: run several listeners in order as one
- hook_all_services: attach hooks to every present and future service
- transform, to_json, to_type: convert payloads
- remove: strip server-only fields before results reach a client
- disable: reject client calls to a method
- add_created_at, add_updated_at: stamp timestamps onto records

Usage:
    from servicehooks import (
        HookedServiceEvent,
        Phase,
        add_updated_at,
        chain_listeners,
        remove,
    )

    after_read = chain_listeners([remove("password"), add_updated_at()])
    await after_read(HookedServiceEvent(Phase.AFTER, result=user, params={"provider": "rest"}))
"""

from servicehooks.chain import chain_listeners, hook_all_services
from servicehooks.config import HookSettings
from servicehooks.errors import (
    HookError,
    MethodNotAllowedError,
    PhaseViolationError,
    SerializationError,
    UnsupportedShapeError,
)
from servicehooks.events import (
    PROVIDER_KEY,
    HookedServiceEvent,
    Listener,
    Phase,
    Providers,
    ServiceMethod,
)
from servicehooks.hooks import (
    add_created_at,
    add_updated_at,
    disable,
    remove,
    to_json,
    to_type,
    transform,
)
from servicehooks.payload import (
    Extensible,
    FieldAccess,
    FieldAccessMixin,
    normalize,
)
from servicehooks.services import Service, ServiceRegistry

__all__ = [
    "Extensible",
    "FieldAccess",
    "FieldAccessMixin",
    "HookError",
    "HookSettings",
    "HookedServiceEvent",
    "Listener",
    "MethodNotAllowedError",
    "PROVIDER_KEY",
    "Phase",
    "PhaseViolationError",
    "Providers",
    "SerializationError",
    "Service",
    "ServiceMethod",
    "ServiceRegistry",
    "UnsupportedShapeError",
    "add_created_at",
    "add_updated_at",
    "chain_listeners",
    "disable",
    "hook_all_services",
    "normalize",
    "remove",
    "to_json",
    "to_type",
    "transform",
]
