"""Dependency Injection Container for the sdom bounded contexts.

This container wires together:
- Session Context: session lifecycle and repository
- Script Context: the script context classifier
- Rehydration Context: the serialization rehydrator

Usage:
    from sdom.container import get_container

    container = get_container()
    session = container.session_lifecycle.init_hooks(window)
    container.rehydrator.pre_serialize(window.document, session.registry)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from sdom.config import SdomConfig
    from sdom.domains.rehydration import SerializationRehydrator
    from sdom.domains.script_context import ScriptContextClassifier
    from sdom.domains.session import SessionLifecycle

logger = logging.getLogger(__name__)

# Singleton container instance
_container: Optional["ServiceContainer"] = None


@dataclass
class ServiceContainer:
    """Simple dependency injection container for domain services.

    Services are created lazily on first access and shared by every
    caller of ``get_container()``.
    """

    _config: Optional["SdomConfig"] = field(default=None, repr=False)
    _session_lifecycle: Optional["SessionLifecycle"] = field(default=None, repr=False)
    _script_classifier: Optional["ScriptContextClassifier"] = field(default=None, repr=False)
    _rehydrator: Optional["SerializationRehydrator"] = field(default=None, repr=False)

    @property
    def config(self) -> "SdomConfig":
        """Get the configuration, loading it from the environment on first use."""
        if self._config is None:
            from sdom.config import load_config
            self._config = load_config()
        return self._config

    def configure(self, config: "SdomConfig") -> None:
        """Replace the configuration and drop services derived from it."""
        self._config = config
        self._rehydrator = None
        logger.debug(f"Container reconfigured: report_url={config.report_url!r}")

    @property
    def session_lifecycle(self) -> "SessionLifecycle":
        """Get the session lifecycle service."""
        if self._session_lifecycle is None:
            from sdom.domains.session import SessionLifecycle
            self._session_lifecycle = SessionLifecycle()
        return self._session_lifecycle

    @property
    def script_classifier(self) -> "ScriptContextClassifier":
        """Get the script context classifier."""
        if self._script_classifier is None:
            from sdom.domains.script_context import ScriptContextClassifier
            self._script_classifier = ScriptContextClassifier()
        return self._script_classifier

    @property
    def rehydrator(self) -> "SerializationRehydrator":
        """Get the serialization rehydrator."""
        if self._rehydrator is None:
            from sdom.domains.rehydration import BootstrapTemplate, SerializationRehydrator
            self._rehydrator = SerializationRehydrator(
                classifier=self.script_classifier,
                template=BootstrapTemplate(report_url=self.config.report_url),
            )
        return self._rehydrator


def get_container() -> ServiceContainer:
    """Get the singleton service container.

    Returns:
        The shared ServiceContainer instance
    """
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """Reset the container (for testing).

    Clears the singleton instance so a fresh container is created
    on next get_container() call.
    """
    global _container
    _container = None
