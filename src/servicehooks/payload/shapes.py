"""Classification of payload leaves.

Hooks that mutate payloads (remove, add_created_at, add_updated_at) pick a
strategy from the shape of each value. Shapes are checked in this order:

- SEQUENCE: ordered mutable sequence (list)
- COLLECTION: any other iterable that is not a mapping, string or model
- MAPPING: mutable key/value mapping (dict)
- EXTENSIBLE: pydantic model with a dynamic property bag (extra="allow")
- OPAQUE: anything else; mutable only through the FieldAccess capability
"""

from collections.abc import Iterable, Mapping, MutableMapping, MutableSequence
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

# Iterable, but always treated as a single value
_SCALAR_ITERABLES = (str, bytes, bytearray, memoryview)


class Shape(Enum):
    """The five payload leaf shapes, in dispatch priority order."""

    SEQUENCE = "sequence"
    COLLECTION = "collection"
    MAPPING = "mapping"
    EXTENSIBLE = "extensible"
    OPAQUE = "opaque"


@runtime_checkable
class FieldAccess(Protocol):
    """Capability for objects that support named-field mutation.

    Payload types that are neither mappings nor extensible models implement
    this to be targets of the built-in remove/timestamp strategies. Raising
    AttributeError or TypeError signals the field cannot be mutated.
    """

    def set_field(self, name: str, value: Any) -> None: ...

    def remove_field(self, name: str) -> None: ...


class FieldAccessMixin:
    """FieldAccess implemented with instance attributes."""

    def set_field(self, name: str, value: Any) -> None:
        setattr(self, name, value)

    def remove_field(self, name: str) -> None:
        if name in getattr(self, "__dict__", {}):
            delattr(self, name)
        elif hasattr(self, name):
            raise AttributeError(
                f"'{type(self).__name__}' field '{name}' is not an instance attribute"
            )


class Extensible(BaseModel):
    """Model with a dynamic property bag.

    Any keyword not declared as a field lands in ``properties`` and is
    readable as an attribute and included in model_dump().

    Example:
        user = Extensible(name="Ada", password="secret")
        user.properties.pop("password")
    """

    model_config = ConfigDict(extra="allow")

    @property
    def properties(self) -> dict[str, Any]:
        return self.__pydantic_extra__


def is_collection(obj: Any) -> bool:
    """True for values hooks apply element-wise (lists, sets, generators...)."""
    return isinstance(obj, Iterable) and not isinstance(
        obj, (*_SCALAR_ITERABLES, Mapping, BaseModel)
    )


def property_bag(obj: Any) -> MutableMapping[str, Any] | None:
    """Return the dynamic property bag of an extensible object, or None."""
    if isinstance(obj, BaseModel):
        extra = obj.__pydantic_extra__
        if isinstance(extra, MutableMapping):
            return extra
    return None


def classify(obj: Any) -> Shape:
    """Pick the shape used to dispatch a mutation strategy for ``obj``."""
    if isinstance(obj, MutableSequence) and not isinstance(obj, bytearray):
        return Shape.SEQUENCE
    if is_collection(obj):
        return Shape.COLLECTION
    if isinstance(obj, MutableMapping):
        return Shape.MAPPING
    if property_bag(obj) is not None:
        return Shape.EXTENSIBLE
    return Shape.OPAQUE
