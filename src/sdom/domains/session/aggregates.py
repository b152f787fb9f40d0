"""Aggregates for the Session Context.

A RehydrationSession scopes one render of one document: it owns the
identity registry and is the handle passed to every core operation.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Union

from sdom.domains.identity import IdentityRegistry, TrackedElement
from sdom.domains.rehydration import (
    RehydrationEvent,
    UnknownIdentityError,
)
from sdom.domains.shared import ElementLike, SdomError

logger = logging.getLogger(__name__)


class SessionClosedError(SdomError):
    """Raised when a closed session is used."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Rehydration session {session_id} has been closed")


@dataclass
class RehydrationSession:
    """Aggregate root for one document render.

    Invariants:
    - One environment, one registry, for the whole session
    - A closed session rejects every registry operation
    """
    session_id: str
    environment: Any
    registry: IdentityRegistry
    created_at: datetime = field(default_factory=datetime.now)
    closed_at: Optional[datetime] = None

    @classmethod
    def open(cls, environment: Any, session_id: Optional[str] = None) -> "RehydrationSession":
        """Factory method creating a session with an empty registry.

        Args:
            environment: The environment (window) being rendered
            session_id: Optional explicit identifier

        Returns:
            A new RehydrationSession
        """
        session_id = session_id or f"sdom_{uuid.uuid4().hex[:12]}"
        return cls(
            session_id=session_id,
            environment=environment,
            registry=IdentityRegistry(session_id=session_id),
        )

    @property
    def is_closed(self) -> bool:
        return self.closed_at is not None

    def _require_open(self) -> None:
        if self.is_closed:
            raise SessionClosedError(self.session_id)

    def ensure_identity(self, element: ElementLike) -> str:
        self._require_open()
        return self.registry.ensure_identity(element)

    def track_event(self, element: ElementLike, event_type: str) -> TrackedElement:
        self._require_open()
        return self.registry.track_event(element, event_type)

    def resolve_event(self, payload: Union[str, bytes, Dict[str, Any], RehydrationEvent]) -> TrackedElement:
        """Find the tracked element a browser report refers to.

        Args:
            payload: The report body (JSON text or mapping) or a decoded event

        Returns:
            The TrackedElement that recorded the reported event type

        Raises:
            InvalidRehydrationEvent: If the payload cannot be decoded
            UnknownIdentityError: If no tracked element matches
        """
        self._require_open()
        event = payload if isinstance(payload, RehydrationEvent) else RehydrationEvent.decode(payload)
        record = self.registry.lookup(event.sdom_id)
        if record is None or event.event_type not in record.event_types:
            raise UnknownIdentityError(event.sdom_id, event.event_type)
        return record

    def close(self) -> None:
        """Discard the registry and mark the session closed."""
        if self.is_closed:
            return
        self.registry.clear()
        self.closed_at = datetime.now()

    def stats(self) -> Dict[str, object]:
        stats = self.registry.stats()
        stats.update({
            "closed": self.is_closed,
            "closed_at": self.closed_at.isoformat() if self.closed_at else None,
        })
        return stats
