"""Shared Kernel - Core domain types shared across bounded contexts.

These types are intentionally minimal and shared between:
- Identity Context (produces SdomId)
- Interception Context (decides which event types are hooked)
- Rehydration Context (consumes SdomId for client lookups and reports)

Attribute names defined here are part of the wire format of the
rendered markup and must stay stable.
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass, field
from typing import Annotated, Any, Literal, Tuple

from pydantic import BeforeValidator

# Attribute persisted on elements that registered a hooked event
SDOM_ID_ATTRIBUTE = "data-sdom-id"

# Attribute marking the injected bootstrap script
BOOTSTRAP_ATTRIBUTE = "data-sdom-bootstrap"

# Script attribute declaring the execution context
CONTEXT_ATTRIBUTE = "context"

# Closed allow-list of event types whose registration is recorded.
# Extending it also requires extending HookedEventType below.
HOOKED_EVENT_TYPES: Tuple[str, ...] = ("click",)

_BASE36_DIGITS = string.digits + string.ascii_lowercase


def is_hooked_event_type(event_type: str) -> bool:
    """Check whether registrations of ``event_type`` are recorded."""
    return event_type in HOOKED_EVENT_TYPES


def to_base36(value: int) -> str:
    """Render a non-negative integer in base 36 (``0-9a-z``)."""
    if value < 0:
        raise ValueError(f"Cannot encode negative value: {value}")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


class SdomError(RuntimeError):
    """Base class for rehydration errors."""


class SessionNotInitializedError(SdomError):
    """Raised when a core operation runs for an environment without a session.

    This is a caller ordering bug: ``init_hooks`` must run before any
    server-side script can register events or the document is serialized.
    """

    def __init__(self, environment: object) -> None:
        self.environment = environment
        super().__init__(
            f"No rehydration session for environment {environment!r}. "
            "Call init_hooks(environment) first."
        )


@dataclass(frozen=True)
class SdomId:
    """Identity string persisted on a tracked element.

    Format: base-36 digits, optionally followed by ``-<n>`` when a
    collision with a different live element had to be disambiguated.

    Security: the format is validated so identities are always safe to
    embed in a CSS attribute-selector literal and in generated script.
    """
    value: str

    ID_PATTERN: str = field(
        default=r"^[0-9a-z]{1,64}(-\d{1,10})?$", init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        """Validate identity format on creation."""
        if not re.match(self.ID_PATTERN, self.value):
            raise ValueError(
                f"Invalid SdomId format: '{self.value}'. "
                "Must be base-36 digits with an optional '-<number>' suffix"
            )

    @classmethod
    def from_seed(cls, seed: int) -> "SdomId":
        """Create an SdomId from a numeric identity seed."""
        return cls(value=to_base36(seed))

    def with_suffix(self, disambiguator: int) -> "SdomId":
        """Return a disambiguated copy of this identity."""
        base = self.value.split("-", 1)[0]
        return SdomId(value=f"{base}-{disambiguator}")

    @property
    def selector(self) -> str:
        """CSS attribute selector matching the element carrying this identity."""
        return f'[{SDOM_ID_ATTRIBUTE}="{self.value}"]'

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        try:
            cls(value=value)
        except ValueError:
            return False
        return True

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        return hash(self.value)


# ============================================================
# Literal type aliases with BeforeValidator for case-insensitive
# normalization of values arriving from the client.
# ============================================================


def _normalize_str(v: Any) -> Any:
    """Normalize string input: strip whitespace, lowercase."""
    return v.strip().lower() if isinstance(v, str) else v


HookedEventType = Annotated[
    Literal["click"],
    BeforeValidator(_normalize_str),
]
