"""Session Context - Lifecycle of one document render.

This bounded context manages:
- Opening a session (fresh identity registry) per environment
- Selecting the tracking element capability at environment setup
- Looking up the session of an environment, document or element
- Discarding the session when the render ends
"""

from sdom.domains.session.aggregates import (
    RehydrationSession,
    SessionClosedError,
)
from sdom.domains.session.repository import (
    InMemorySessionRepository,
    SessionRepository,
)
from sdom.domains.session.services import (
    SessionLifecycle,
)

__all__ = [
    "InMemorySessionRepository",
    "RehydrationSession",
    "SessionClosedError",
    "SessionLifecycle",
    "SessionRepository",
]
