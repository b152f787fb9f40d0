"""Shared Kernel - Types shared across bounded contexts."""

from sdom.domains.shared.contracts import (
    DocumentLike,
    ElementLike,
    EnvironmentLike,
)
from sdom.domains.shared.kernel import (
    BOOTSTRAP_ATTRIBUTE,
    CONTEXT_ATTRIBUTE,
    HOOKED_EVENT_TYPES,
    SDOM_ID_ATTRIBUTE,
    HookedEventType,
    SdomError,
    SdomId,
    SessionNotInitializedError,
    is_hooked_event_type,
    to_base36,
)

__all__ = [
    "BOOTSTRAP_ATTRIBUTE",
    "CONTEXT_ATTRIBUTE",
    "HOOKED_EVENT_TYPES",
    "SDOM_ID_ATTRIBUTE",
    "DocumentLike",
    "ElementLike",
    "EnvironmentLike",
    "HookedEventType",
    "SdomError",
    "SdomId",
    "SessionNotInitializedError",
    "is_hooked_event_type",
    "to_base36",
]
