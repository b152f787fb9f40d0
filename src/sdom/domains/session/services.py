"""Session Domain Services.

SessionLifecycle opens and closes rehydration sessions for environments
and selects the tracking element capability at environment setup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from sdom.domains.interception import install_event_hooks
from sdom.domains.session.aggregates import RehydrationSession
from sdom.domains.session.repository import InMemorySessionRepository
from sdom.domains.shared import SessionNotInitializedError

logger = logging.getLogger(__name__)


@dataclass
class SessionLifecycle:
    """Creates, looks up and discards sessions per environment."""
    repository: InMemorySessionRepository = field(default_factory=InMemorySessionRepository)

    def init_hooks(self, environment: Any, session_id: Optional[str] = None) -> RehydrationSession:
        """Open a fresh session for an environment and install event hooks.

        Any previous session of the environment is closed first. Hooks are
        bound to this lifecycle and installed once per capability class.

        Args:
            environment: The environment (window) about to be rendered
            session_id: Optional explicit session identifier

        Returns:
            The new RehydrationSession
        """
        previous = self.repository.delete_for_environment(environment)
        if previous is not None:
            logger.debug(f"Replacing session {previous.session_id}")
            previous.close()

        environment.element_class = install_event_hooks(environment.element_class, self)

        session = RehydrationSession.open(environment, session_id=session_id)
        self.repository.save(session)
        logger.debug(f"Opened rehydration session {session.session_id}")
        return session

    def cleanup(self, environment: Any) -> None:
        """Discard the environment's session.

        The tracking element class stays selected: other environments
        hooked by this lifecycle share it.
        """
        session = self.repository.delete_for_environment(environment)
        if session is None:
            return
        session.close()
        logger.debug(f"Closed rehydration session {session.session_id}")

    def get(self, environment: Any) -> Optional[RehydrationSession]:
        return self.repository.get_for_environment(environment)

    def require(self, environment: Any) -> RehydrationSession:
        """Get the environment's session, failing loudly when there is none.

        Raises:
            SessionNotInitializedError: If init_hooks was not called
        """
        session = self.get(environment) if environment is not None else None
        if session is None:
            raise SessionNotInitializedError(environment)
        return session

    def session_for_document(self, document: Any) -> RehydrationSession:
        return self.require(getattr(document, "default_view", None))

    def session_for_element(self, element: Any) -> RehydrationSession:
        document = getattr(element, "owner_document", None)
        return self.session_for_document(document)
