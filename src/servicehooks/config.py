"""Hook configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

VALID_TIMESPECS = (
    "auto",
    "hours",
    "minutes",
    "seconds",
    "milliseconds",
    "microseconds",
)


@dataclass
class HookSettings:
    """Defaults used by the timestamp hooks.

    Attributes:
        created_at_key: Field stamped by add_created_at when no key is given
        updated_at_key: Field stamped by add_updated_at when no key is given
        timespec: Precision passed to datetime.isoformat
    """

    created_at_key: str = "createdAt"
    updated_at_key: str = "updatedAt"
    timespec: str = "auto"

    def __post_init__(self) -> None:
        if self.timespec not in VALID_TIMESPECS:
            raise ValueError(
                f"Invalid timespec '{self.timespec}'. "
                f"Expected one of: {', '.join(VALID_TIMESPECS)}"
            )

    @classmethod
    def from_env(cls) -> HookSettings:
        """Create settings from environment variables.

        Reads SERVICEHOOKS_CREATED_AT_KEY, SERVICEHOOKS_UPDATED_AT_KEY and
        SERVICEHOOKS_TIMESPEC. Empty or unset variables keep the defaults.
        """
        return cls(
            created_at_key=os.environ.get("SERVICEHOOKS_CREATED_AT_KEY") or "createdAt",
            updated_at_key=os.environ.get("SERVICEHOOKS_UPDATED_AT_KEY") or "updatedAt",
            timespec=os.environ.get("SERVICEHOOKS_TIMESPEC") or "auto",
        )
