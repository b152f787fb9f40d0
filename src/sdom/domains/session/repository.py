"""Repository for the Session Context.

Sessions are kept outside the environment object: the repository maps an
environment to its current session. Entries are keyed by object identity
and hold the environment strongly, so a key cannot be reused while its
session exists.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from sdom.domains.session.aggregates import RehydrationSession


@runtime_checkable
class SessionRepository(Protocol):
    """Repository protocol for RehydrationSession aggregates."""

    def save(self, session: RehydrationSession) -> None:
        """Store a session, replacing any session of the same environment."""
        ...

    def get_for_environment(self, environment: Any) -> Optional[RehydrationSession]:
        """Get the current session of an environment, or None."""
        ...

    def delete_for_environment(self, environment: Any) -> Optional[RehydrationSession]:
        """Remove and return the session of an environment."""
        ...


class InMemorySessionRepository:
    """In-memory implementation of SessionRepository.

    Thread Safety: uses a plain dict; rendering is single-threaded and
    one environment is never rendered by two sessions at once.
    """

    def __init__(self) -> None:
        self._sessions: Dict[int, RehydrationSession] = {}

    def save(self, session: RehydrationSession) -> None:
        self._sessions[id(session.environment)] = session

    def get_for_environment(self, environment: Any) -> Optional[RehydrationSession]:
        session = self._sessions.get(id(environment))
        if session is not None and session.environment is environment:
            return session
        return None

    def delete_for_environment(self, environment: Any) -> Optional[RehydrationSession]:
        session = self.get_for_environment(environment)
        if session is not None:
            del self._sessions[id(environment)]
        return session

    def all(self) -> List[RehydrationSession]:
        return list(self._sessions.values())

    def __len__(self) -> int:
        return len(self._sessions)
