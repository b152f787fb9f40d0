"""Aggregates for the Identity Context.

The IdentityRegistry is the aggregate root for this context. It owns the
table from identity string to tracked element record, the ordered list of
issued seeds, and enforces the registry invariants.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from sdom.domains.identity.entities import TrackedElement
from sdom.domains.identity.events import EventTracked, IdentityAssigned, IdentityCollision
from sdom.domains.identity.value_objects import StructuralFingerprint
from sdom.domains.shared import SDOM_ID_ATTRIBUTE, ElementLike, SdomId

logger = logging.getLogger(__name__)


def get_identity(element: ElementLike) -> Optional[str]:
    """Read the persisted identity of an element without side effects."""
    return element.get_attribute(SDOM_ID_ATTRIBUTE) or None


@dataclass
class IdentityRegistry:
    """Aggregate root for element identities within one session.

    Invariants:
    - Lookup happens before creation: an element already carrying an
      identity known to this registry keeps it
    - An identity, once issued, is never mapped to a different element
    - ``issued_seeds`` grows by exactly one per newly issued identity
    - Event types per element are recorded once, in registration order
    """
    session_id: str
    elements: Dict[str, TrackedElement] = field(default_factory=dict)
    issued_seeds: List[int] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)

    # Domain events collected during operations
    _events: List[object] = field(default_factory=list, init=False, repr=False)

    @property
    def issued_count(self) -> int:
        return len(self.issued_seeds)

    def ensure_identity(self, element: ElementLike) -> str:
        """Return the element's identity, assigning one if needed.

        Args:
            element: The element to identify

        Returns:
            The identity string persisted on the element
        """
        existing = get_identity(element)
        if existing is not None:
            record = self.elements.get(existing)
            if record is not None and record.element is element:
                return existing
            if record is None and SdomId.is_valid(existing):
                # Identity persisted by an earlier pass over the same markup
                self.elements[existing] = TrackedElement(sdom_id=SdomId(existing), element=element)
                logger.debug(f"Adopted persisted identity {existing} on <{element.tag_name}>")
                return existing
            if record is None:
                logger.warning(
                    f"Ignoring malformed {SDOM_ID_ATTRIBUTE}='{existing}' "
                    f"on <{element.tag_name}>, assigning a new identity"
                )
            else:
                logger.debug(
                    f"Identity {existing} already belongs to another element, "
                    f"assigning a new identity to <{element.tag_name}>"
                )

        return self._assign(element)

    def _assign(self, element: ElementLike) -> str:
        fingerprint = StructuralFingerprint.of(element)
        seed = fingerprint.seed(self.issued_count)
        sdom_id = SdomId.from_seed(seed)

        if sdom_id.value in self.elements:
            computed = sdom_id.value
            disambiguator = self.issued_count
            sdom_id = sdom_id.with_suffix(disambiguator)
            while sdom_id.value in self.elements:
                disambiguator += 1
                sdom_id = sdom_id.with_suffix(disambiguator)
            logger.debug(f"Identity collision on {computed}, using {sdom_id.value}")
            self._events.append(
                IdentityCollision(
                    session_id=self.session_id,
                    computed_id=computed,
                    assigned_id=sdom_id.value,
                )
            )

        element.set_attribute(SDOM_ID_ATTRIBUTE, sdom_id.value)
        self.issued_seeds.append(seed)
        self.elements[sdom_id.value] = TrackedElement(sdom_id=sdom_id, element=element)

        self._events.append(
            IdentityAssigned(
                session_id=self.session_id,
                sdom_id=sdom_id.value,
                seed=seed,
                tag_name=fingerprint.tag_name,
            )
        )
        logger.debug(f"Assigned identity {sdom_id.value} to <{fingerprint.tag_name}> (seed={seed})")
        return sdom_id.value

    def track_event(self, element: ElementLike, event_type: str) -> TrackedElement:
        """Record that ``element`` registered a listener for ``event_type``.

        Args:
            element: The element the listener was added to
            event_type: The hooked event type

        Returns:
            The element's tracked record
        """
        identity = self.ensure_identity(element)
        record = self.elements[identity]
        if record.record_event(event_type):
            self._events.append(
                EventTracked(
                    session_id=self.session_id,
                    sdom_id=identity,
                    event_type=event_type,
                )
            )
            logger.debug(f"Tracking '{event_type}' on {identity}")
        return record

    def lookup(self, identity: str) -> Optional[TrackedElement]:
        """Get the record for an identity, if any."""
        return self.elements.get(identity)

    def tracked_elements(self) -> List[TrackedElement]:
        """Records in the order their identities were issued."""
        return list(self.elements.values())

    def clear(self) -> None:
        """Drop every record and seed."""
        self.elements.clear()
        self.issued_seeds.clear()
        self._events.clear()

    def get_events(self) -> List[object]:
        """Get and clear collected domain events.

        Returns:
            List of domain events that occurred during operations
        """
        events = self._events.copy()
        self._events.clear()
        return events

    def stats(self) -> Dict[str, object]:
        """Get statistics about the registry.

        Returns:
            Dictionary with registry statistics
        """
        records = self.tracked_elements()
        return {
            "session_id": self.session_id,
            "issued_identities": self.issued_count,
            "tracked_elements": len(records),
            "elements_with_events": sum(1 for r in records if r.has_events()),
            "live_elements": sum(1 for r in records if r.is_live()),
            "created_at": self.created_at.isoformat(),
        }
