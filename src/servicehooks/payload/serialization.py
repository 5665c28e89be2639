"""Conversion between typed objects and plain JSON-friendly values.

Backed by pydantic: models, dataclasses and typed containers round-trip
through pydantic's serializer and TypeAdapter validation.
"""

from dataclasses import is_dataclass
from functools import lru_cache
from typing import Any

from pydantic import (
    BaseModel,
    PydanticSchemaGenerationError,
    TypeAdapter,
    ValidationError,
)
from pydantic_core import PydanticSerializationError, to_jsonable_python

from servicehooks.errors import SerializationError


def _public_attributes(obj: Any) -> dict[str, Any]:
    """Fallback for objects pydantic has no serializer for."""
    try:
        attributes = vars(obj)
    except TypeError as e:
        raise SerializationError(f"Cannot serialize {obj!r}") from e
    return {k: v for k, v in attributes.items() if not k.startswith("_")}


def serialize(obj: Any) -> Any:
    """Convert ``obj`` to plain data (dicts, lists, strings, numbers).

    Models, dataclasses and plain objects become dicts; plain objects are
    reduced to their public instance attributes.

    Raises:
        SerializationError: If the value cannot be represented as plain data
    """
    try:
        return to_jsonable_python(obj, fallback=_public_attributes)
    except PydanticSerializationError as e:
        raise SerializationError(f"Cannot serialize {obj!r}: {e}") from e


@lru_cache(maxsize=256)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def deserialize(value: Any, target: Any) -> Any:
    """Coerce plain data into an instance of ``target``.

    Instances of other models or dataclasses are serialized first, so a
    value can be converted between two structurally compatible types.

    Raises:
        SerializationError: If the value does not validate against ``target``
            or ``target`` is not a type pydantic can build
    """
    if isinstance(value, BaseModel) or (
        is_dataclass(value) and not isinstance(value, type)
    ):
        value = serialize(value)

    try:
        adapter = _adapter(target)
    except PydanticSchemaGenerationError as e:
        raise SerializationError(f"Cannot deserialize into {target!r}") from e

    try:
        return adapter.validate_python(value)
    except ValidationError as e:
        raise SerializationError(
            f"Cannot deserialize {value!r} into {target!r}: {e}"
        ) from e
