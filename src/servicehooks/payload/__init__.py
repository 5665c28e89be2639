"""Payload shape handling shared by the built-in hooks."""

from servicehooks.payload.normalize import normalize, rebuild
from servicehooks.payload.serialization import deserialize, serialize
from servicehooks.payload.shapes import (
    Extensible,
    FieldAccess,
    FieldAccessMixin,
    Shape,
    classify,
    is_collection,
    property_bag,
)

__all__ = [
    "Extensible",
    "FieldAccess",
    "FieldAccessMixin",
    "Shape",
    "classify",
    "deserialize",
    "is_collection",
    "normalize",
    "property_bag",
    "rebuild",
    "serialize",
]
