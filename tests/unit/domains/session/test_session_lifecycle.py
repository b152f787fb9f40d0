"""Tests for the Session Context: lifecycle, repository and aggregate."""

import pytest

import sdom
from sdom.dom import Window
from sdom.domains.session import (
    InMemorySessionRepository,
    RehydrationSession,
    SessionClosedError,
    SessionLifecycle,
    SessionRepository,
)


class TestRehydrationSession:
    def test_open_generates_identifier(self, window):
        session = RehydrationSession.open(window)
        assert session.session_id.startswith("sdom_")
        assert session.registry.session_id == session.session_id
        assert not session.is_closed

    def test_open_with_explicit_identifier(self, window):
        assert RehydrationSession.open(window, session_id="render-1").session_id == "render-1"

    def test_close_clears_registry(self, load_page):
        win, session = load_page('<body><button id="btn">Go</button></body>')
        win.document.get_element_by_id("btn").add_event_listener("click", lambda e: None)

        session.close()

        assert session.is_closed
        assert session.registry.tracked_elements() == []
        assert session.stats()["closed"] is True

    def test_closed_session_rejects_operations(self, window):
        session = RehydrationSession.open(window)
        session.close()
        element = window.document.create_element("div")
        with pytest.raises(SessionClosedError):
            session.ensure_identity(element)
        with pytest.raises(SessionClosedError):
            session.track_event(element, "click")

    def test_close_is_idempotent(self, window):
        session = RehydrationSession.open(window)
        session.close()
        closed_at = session.closed_at
        session.close()
        assert session.closed_at == closed_at


class TestInMemorySessionRepository:
    def test_satisfies_protocol(self):
        assert isinstance(InMemorySessionRepository(), SessionRepository)

    def test_save_and_get(self, window):
        repository = InMemorySessionRepository()
        session = RehydrationSession.open(window)
        repository.save(session)
        assert repository.get_for_environment(window) is session
        assert len(repository) == 1

    def test_environments_are_separate(self, window):
        repository = InMemorySessionRepository()
        repository.save(RehydrationSession.open(window))
        assert repository.get_for_environment(Window()) is None

    def test_delete(self, window):
        repository = InMemorySessionRepository()
        session = RehydrationSession.open(window)
        repository.save(session)
        assert repository.delete_for_environment(window) is session
        assert repository.delete_for_environment(window) is None
        assert repository.all() == []


class TestSessionLifecycle:
    def test_init_hooks_opens_session(self, window):
        lifecycle = SessionLifecycle()
        session = lifecycle.init_hooks(window, session_id="s1")
        assert lifecycle.get(window) is session
        assert session.environment is window

    def test_reinit_replaces_and_closes_previous(self, window):
        lifecycle = SessionLifecycle()
        first = lifecycle.init_hooks(window)
        second = lifecycle.init_hooks(window)
        assert first.is_closed
        assert lifecycle.get(window) is second

    def test_cleanup(self, window):
        lifecycle = SessionLifecycle()
        session = lifecycle.init_hooks(window)
        lifecycle.cleanup(window)
        assert session.is_closed
        assert lifecycle.get(window) is None
        # Hooks stay installed
        assert window.element_class.__sdom_hooked__ is True

    def test_cleanup_without_session(self, window):
        SessionLifecycle().cleanup(window)

    def test_require_without_session(self, window):
        with pytest.raises(sdom.SessionNotInitializedError):
            SessionLifecycle().require(window)

    def test_require_without_environment(self):
        with pytest.raises(sdom.SessionNotInitializedError):
            SessionLifecycle().require(None)

    def test_session_for_element(self, window):
        lifecycle = SessionLifecycle()
        session = lifecycle.init_hooks(window)
        element = window.document.create_element("div")
        assert lifecycle.session_for_element(element) is session

    def test_session_for_orphan_element(self):
        class Orphan:
            owner_document = None

        with pytest.raises(sdom.SessionNotInitializedError):
            SessionLifecycle().session_for_element(Orphan())


class TestFacade:
    def test_init_hooks_and_cleanup(self, window):
        session = sdom.init_hooks(window)
        assert session.session_id
        sdom.cleanup(window)
        assert session.is_closed

    def test_ensure_identity(self, load_page):
        win, session = load_page('<body><button id="btn">Go</button></body>')
        button = win.document.get_element_by_id("btn")
        assert sdom.ensure_identity(win, button) == "27d"
        assert sdom.get_identity(button) == "27d"
        assert session.registry.lookup("27d").event_types == []

    def test_ensure_identity_requires_session(self):
        win = Window()
        with pytest.raises(sdom.SessionNotInitializedError):
            sdom.ensure_identity(win, win.document.create_element("div"))

    def test_error_hierarchy(self):
        assert issubclass(sdom.SessionNotInitializedError, sdom.SdomError)
        assert issubclass(SessionClosedError, sdom.SdomError)
