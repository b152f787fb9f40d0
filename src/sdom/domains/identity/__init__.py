"""Identity Context - Structural identities for tracked elements.

This bounded context manages:
- Identity computation from an element's structural position and shape
- Persisting identities on elements as ``data-sdom-id``
- The session table from identity to tracked element record
- Recorded event types per element
"""

# Value Objects
from sdom.domains.identity.value_objects import (
    StructuralFingerprint,
)

# Entities
from sdom.domains.identity.entities import (
    TrackedElement,
)

# Aggregates
from sdom.domains.identity.aggregates import (
    IdentityRegistry,
    get_identity,
)

# Domain Events
from sdom.domains.identity.events import (
    EventTracked,
    IdentityAssigned,
    IdentityCollision,
)

__all__ = [
    # Value Objects
    "StructuralFingerprint",
    # Entities
    "TrackedElement",
    # Aggregates
    "IdentityRegistry",
    "get_identity",
    # Events
    "EventTracked",
    "IdentityAssigned",
    "IdentityCollision",
]
