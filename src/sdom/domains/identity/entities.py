"""Entities for the Identity Context.

TrackedElement is the entity recording which interesting events an
element registered during the server pass. Its identity is the SdomId.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

from sdom.domains.shared import SDOM_ID_ATTRIBUTE, ElementLike, SdomId


@dataclass(eq=False)
class TrackedElement:
    """Registry record for one element.

    The record does not own the element: the document tree does. Whether
    the element is still part of the rendered page is decided by
    ``is_live()``, which checks the persisted attribute and the element's
    attachment to its document.

    Entity Identity: the SdomId serves as the identity.
    """
    sdom_id: SdomId
    element: ElementLike
    event_types: List[str] = field(default_factory=list)
    registered_at: datetime = field(default_factory=datetime.now)

    @property
    def identity(self) -> str:
        return self.sdom_id.value

    def record_event(self, event_type: str) -> bool:
        """Record an event type, keeping insertion order.

        Returns:
            True if the type was new for this element
        """
        if event_type in self.event_types:
            return False
        self.event_types.append(event_type)
        return True

    def has_events(self) -> bool:
        return bool(self.event_types)

    def is_live(self) -> bool:
        """Check whether the element still carries this identity in the document."""
        if self.element.get_attribute(SDOM_ID_ATTRIBUTE) != self.identity:
            return False
        # DOMs without connectivity information are treated as attached
        return getattr(self.element, "is_connected", True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.identity,
            "tag_name": self.element.tag_name,
            "event_types": list(self.event_types),
            "live": self.is_live(),
            "registered_at": self.registered_at.isoformat(),
        }

    def __hash__(self) -> int:
        """Hash based on identity."""
        return hash(self.sdom_id)

    def __eq__(self, other: object) -> bool:
        """Equality based on identity."""
        if not isinstance(other, TrackedElement):
            return NotImplemented
        return self.sdom_id == other.sdom_id
