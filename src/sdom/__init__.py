"""sdom - Server-side DOM event rehydration.

Entry points invoked by the rendering environment, in order:

    session = init_hooks(window)           # before the document is built
    if script_pre_execution(script):       # for every script element
        ...run the script...
        script_post_execution(script, source)
    document_pre_serialize(document)       # right before markup generation
    markup = document.serialize()
    document_post_serialize(document)
    cleanup(window)                        # when the render ends
"""

from __future__ import annotations

from typing import Any, Optional

from sdom.container import get_container
from sdom.domains.identity import get_identity
from sdom.domains.rehydration import BootstrapPlan
from sdom.domains.session import RehydrationSession
from sdom.domains.shared import SdomError, SessionNotInitializedError

__version__ = "0.1.0"


def init_hooks(environment: Any, session_id: Optional[str] = None) -> RehydrationSession:
    """Open a rehydration session for ``environment`` and install event hooks."""
    return get_container().session_lifecycle.init_hooks(environment, session_id=session_id)


def ensure_identity(environment: Any, element: Any) -> str:
    """Return the element's identity within the environment's session, assigning one if needed."""
    return get_container().session_lifecycle.require(environment).ensure_identity(element)


def script_pre_execution(script: Any) -> bool:
    """Return True if the script element should run during the server pass."""
    return get_container().script_classifier.pre_execution(script)


def script_post_execution(script: Any, source: Optional[str] = None) -> None:
    """Apply the context policy to a script element after it ran."""
    get_container().script_classifier.post_execution(script, source)


def document_pre_serialize(document: Any) -> BootstrapPlan:
    """Strip server-only scripts and inject the bootstrap script."""
    container = get_container()
    session = container.session_lifecycle.session_for_document(document)
    return container.rehydrator.pre_serialize(document, session.registry)


def document_post_serialize(document: Any) -> None:
    """Extension point called after the document was serialized."""
    get_container().rehydrator.post_serialize(document)


def cleanup(environment: Any) -> None:
    """Discard the environment's session. Installed hooks stay in place."""
    get_container().session_lifecycle.cleanup(environment)


__all__ = [
    "RehydrationSession",
    "SdomError",
    "SessionNotInitializedError",
    "cleanup",
    "document_post_serialize",
    "document_pre_serialize",
    "ensure_identity",
    "get_identity",
    "init_hooks",
    "script_post_execution",
    "script_pre_execution",
]
