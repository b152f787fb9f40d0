"""Domain Events for the Identity Context.

Events are collected by the IdentityRegistry aggregate and drained with
``get_events()``. They are used for debugging render passes and for
characterizing identity collisions in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class IdentityAssigned:
    """Emitted when an element receives a new identity."""
    session_id: str
    sdom_id: str
    seed: int
    tag_name: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "identity_assigned",
            "session_id": self.session_id,
            "sdom_id": self.sdom_id,
            "seed": self.seed,
            "tag_name": self.tag_name,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        return f"IdentityAssigned(id={self.sdom_id}, tag={self.tag_name}, seed={self.seed})"


@dataclass(frozen=True)
class IdentityCollision:
    """Emitted when a computed identity already belongs to another live element.

    The heuristic identity function does not guarantee uniqueness; the
    registry resolves the clash with a suffix and records this event.
    """
    session_id: str
    computed_id: str
    assigned_id: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "identity_collision",
            "session_id": self.session_id,
            "computed_id": self.computed_id,
            "assigned_id": self.assigned_id,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        return f"IdentityCollision(computed={self.computed_id}, assigned={self.assigned_id})"


@dataclass(frozen=True)
class EventTracked:
    """Emitted when a hooked event type is first recorded for an element."""
    session_id: str
    sdom_id: str
    event_type: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "event_tracked",
            "session_id": self.session_id,
            "sdom_id": self.sdom_id,
            "tracked_event_type": self.event_type,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        return f"EventTracked(id={self.sdom_id}, event={self.event_type})"
