"""Built-in service hooks.

Each factory returns a listener to attach to a service's before or after
checkpoint:
- transform / to_json / to_type: replace data or result with a converted copy
- remove: strip fields from results sent to clients
- disable: reject client calls to a method
- add_created_at / add_updated_at: stamp the current time onto records
"""

from servicehooks.hooks.disable import disable
from servicehooks.hooks.remove import remove, remove_key
from servicehooks.hooks.timestamps import add_created_at, add_updated_at, set_key
from servicehooks.hooks.transform import to_json, to_type, transform

__all__ = [
    "add_created_at",
    "add_updated_at",
    "disable",
    "remove",
    "remove_key",
    "set_key",
    "to_json",
    "to_type",
    "transform",
]
