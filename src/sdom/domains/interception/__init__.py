"""Interception Context - Observing event registrations.

This bounded context manages:
- The tracking subclass composed over the element capability
- Install-once semantics per capability class and session lifecycle
- Forwarding every registration to the base element class
"""

from sdom.domains.interception.hooks import (
    HOOK_MARKER,
    EventTrackingMixin,
    SessionResolver,
    base_element_class,
    install_event_hooks,
    is_hooked_class,
)

__all__ = [
    "HOOK_MARKER",
    "EventTrackingMixin",
    "SessionResolver",
    "base_element_class",
    "install_event_hooks",
    "is_hooked_class",
]
