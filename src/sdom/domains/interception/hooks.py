"""Event registration interception.

``install_event_hooks`` derives a tracking subclass from an element
capability class. The subclass records registrations of hooked event
types in the session its resolver finds for the element, then delegates
to the base implementation, so listeners still behave normally during
the server pass. The base class itself is never modified.

The resolver is the session lifecycle that installed the hooks. It is
carried by the tracking class, so hooked elements report to that
lifecycle and to no other.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Protocol, Tuple, Type

from sdom.domains.shared import is_hooked_event_type

logger = logging.getLogger(__name__)

# Marker set on tracking classes
HOOK_MARKER = "__sdom_hooked__"

# Class attributes of a tracking class: the capability it wraps and its resolver
BASE_ATTRIBUTE = "__sdom_base__"
RESOLVER_ATTRIBUTE = "__sdom_resolver__"

# Tracking class per (base capability, resolver). Entries hold the resolver
# through the class, so an id() key cannot be reused while it is cached.
_tracking_classes: Dict[Tuple[type, int], type] = {}


class SessionResolver(Protocol):
    """Finds the session an element's registrations belong to."""

    def session_for_element(self, element: Any) -> Any: ...


class EventTrackingMixin:
    """Records hooked event registrations before delegating to the DOM."""

    def add_event_listener(
        self,
        event_type: str,
        listener: Callable[..., Any],
        use_capture: bool = False,
    ) -> Any:
        if is_hooked_event_type(event_type):
            resolver: SessionResolver = getattr(type(self), RESOLVER_ATTRIBUTE)
            resolver.session_for_element(self).track_event(self, event_type)
        return super().add_event_listener(event_type, listener, use_capture)  # type: ignore[misc]

    def remove_event_listener(
        self,
        event_type: str,
        listener: Callable[..., Any],
        use_capture: bool = False,
    ) -> Any:
        # Recorded events are not retracted: tracking is append-only
        return super().remove_event_listener(event_type, listener, use_capture)  # type: ignore[misc]


def is_hooked_class(element_class: type) -> bool:
    """Check whether a capability class already records registrations."""
    return bool(getattr(element_class, HOOK_MARKER, False))


def base_element_class(element_class: type) -> type:
    """The unhooked capability class underneath a tracking class."""
    return getattr(element_class, BASE_ATTRIBUTE, element_class)


def install_event_hooks(element_class: Type[Any], resolver: SessionResolver) -> Type[Any]:
    """Return the tracking variant of an element capability class.

    Installation is idempotent: a tracking class already bound to
    ``resolver`` is returned unchanged, and each (base class, resolver)
    pair gets exactly one tracking subclass. A tracking class bound to a
    different resolver is re-derived from its base class, never stacked.

    Args:
        element_class: The environment's element capability
        resolver: Session lifecycle that hooked registrations report to

    Returns:
        The tracking subclass to use as the environment's element class
    """
    if is_hooked_class(element_class) and getattr(element_class, RESOLVER_ATTRIBUTE) is resolver:
        return element_class

    base = base_element_class(element_class)
    key = (base, id(resolver))
    tracking = _tracking_classes.get(key)
    if tracking is None:
        tracking = type(
            f"Tracking{base.__name__}",
            (EventTrackingMixin, base),
            {
                HOOK_MARKER: True,
                BASE_ATTRIBUTE: base,
                RESOLVER_ATTRIBUTE: resolver,
                "__module__": base.__module__,
            },
        )
        _tracking_classes[key] = tracking
        logger.debug(f"Installed event hooks on {base.__qualname__}")
    return tracking
