"""Exceptions raised by service hooks.

Every error is raised from inside the hook that detects it and propagates
unchanged through the listener chain to the service abstraction. Nothing in
this package catches, retries or logs them.
"""

from typing import Any

from fastapi import HTTPException, status


class HookError(Exception):
    """Base class for all hook failures."""


class PhaseViolationError(HookError):
    """Raised when a hook is attached to a phase it does not support."""


class UnsupportedShapeError(HookError):
    """Raised when no strategy can mutate a payload leaf.

    Attributes:
        key: The field name that could not be removed or set
        obj: The offending payload leaf
        action: "remove" or "set"
    """

    def __init__(self, key: Any, obj: Any, action: str = "remove") -> None:
        self.key = key
        self.obj = obj
        self.action = action
        preposition = "from" if action == "remove" else "on"
        super().__init__(f"Cannot {action} key '{key}' {preposition} {obj!r}.")


class SerializationError(HookError):
    """Raised when a value cannot be converted to or from a plain mapping."""


class MethodNotAllowedError(HTTPException, HookError):
    """Raised when a service method is disabled for the calling provider.

    Subclasses FastAPI's HTTPException so the transport layer can surface it
    as a 405 response without translation.
    """

    def __init__(self, detail: str = "Method not allowed") -> None:
        super().__init__(status_code=status.HTTP_405_METHOD_NOT_ALLOWED, detail=detail)
