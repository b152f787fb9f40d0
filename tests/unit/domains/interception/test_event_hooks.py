"""Tests for event registration interception."""

import pytest

import sdom
from sdom.container import get_container, reset_container
from sdom.dom import Element, Window, parse_into
from sdom.domains.interception import (
    HOOK_MARKER,
    EventTrackingMixin,
    base_element_class,
    install_event_hooks,
    is_hooked_class,
)
from sdom.domains.identity import get_identity
from sdom.domains.session import SessionLifecycle


@pytest.fixture
def lifecycle():
    return SessionLifecycle()


class TestInstallEventHooks:
    def test_returns_tracking_subclass(self, lifecycle):
        tracking = install_event_hooks(Element, lifecycle)
        assert issubclass(tracking, Element)
        assert issubclass(tracking, EventTrackingMixin)
        assert is_hooked_class(tracking)
        assert getattr(tracking, HOOK_MARKER) is True
        assert base_element_class(tracking) is Element

    def test_base_class_is_untouched(self, lifecycle):
        install_event_hooks(Element, lifecycle)
        assert not is_hooked_class(Element)
        assert "add_event_listener" in Element.__dict__
        assert Element.add_event_listener is not EventTrackingMixin.add_event_listener

    def test_installation_is_idempotent(self, lifecycle):
        tracking = install_event_hooks(Element, lifecycle)
        assert install_event_hooks(Element, lifecycle) is tracking
        assert install_event_hooks(tracking, lifecycle) is tracking

    def test_one_tracking_class_per_base(self, lifecycle):
        class Custom(Element):
            pass

        tracking = install_event_hooks(Custom, lifecycle)
        assert tracking is not install_event_hooks(Element, lifecycle)
        assert tracking.__name__ == "TrackingCustom"

    def test_other_lifecycle_rederives_from_base(self, lifecycle):
        tracking = install_event_hooks(Element, lifecycle)
        other = install_event_hooks(tracking, SessionLifecycle())
        assert other is not tracking
        assert base_element_class(other) is Element
        assert other.__mro__.count(EventTrackingMixin) == 1


class TestInitHooks:
    def test_selects_tracking_capability(self, window):
        sdom.init_hooks(window)
        assert is_hooked_class(window.element_class)
        assert isinstance(window.document.create_element("div"), EventTrackingMixin)

    def test_repeated_init_keeps_single_hook(self, window):
        sdom.init_hooks(window)
        first = window.element_class
        sdom.init_hooks(window)
        assert window.element_class is first
        assert first.__mro__.count(EventTrackingMixin) == 1


class TestRecording:
    def test_click_is_recorded(self, load_page):
        win, session = load_page('<body><button id="btn">Go</button></body>')
        button = win.document.get_element_by_id("btn")
        button.add_event_listener("click", lambda e: None)

        identity = get_identity(button)
        assert identity == "27d"
        assert session.registry.lookup(identity).event_types == ["click"]

    def test_other_event_types_are_not_recorded(self, load_page):
        win, session = load_page("<body><div>hover</div></body>")
        div = win.document.query_selector("div")
        div.add_event_listener("mouseover", lambda e: None)

        assert get_identity(div) is None
        assert session.registry.tracked_elements() == []

    def test_listener_still_registered_and_dispatched(self, load_page):
        win, _ = load_page('<body><button id="btn">Go</button></body>')
        button = win.document.get_element_by_id("btn")
        seen = []
        button.add_event_listener("click", lambda e: seen.append(e.type))
        button.add_event_listener("mouseover", lambda e: seen.append(e.type))

        button.dispatch_event("click")
        button.dispatch_event("mouseover")
        assert seen == ["click", "mouseover"]

    def test_repeated_registration_records_once(self, load_page):
        win, session = load_page('<body><button id="btn">Go</button></body>')
        button = win.document.get_element_by_id("btn")
        button.add_event_listener("click", lambda e: None)
        button.add_event_listener("click", lambda e: None)

        assert session.registry.issued_count == 1
        assert session.registry.lookup("27d").event_types == ["click"]

    def test_removal_does_not_retract(self, load_page):
        win, session = load_page('<body><button id="btn">Go</button></body>')
        button = win.document.get_element_by_id("btn")

        def handler(event):
            pass

        button.add_event_listener("click", handler)
        button.remove_event_listener("click", handler)

        assert button.get_event_listeners("click") == []
        assert session.registry.lookup("27d").event_types == ["click"]

    def test_elements_built_before_init_are_not_tracked(self):
        win = Window()
        win.document.append_child(win.document.create_element("button"))
        session = sdom.init_hooks(win)

        button = win.document.query_selector("button")
        button.add_event_listener("click", lambda e: None)
        assert session.registry.tracked_elements() == []

    def test_registration_without_session_fails(self, window):
        sdom.init_hooks(window)
        button = window.document.create_element("button")
        sdom.cleanup(window)

        with pytest.raises(sdom.SessionNotInitializedError):
            button.add_event_listener("click", lambda e: None)

    def test_non_hooked_registration_without_session_is_allowed(self, window):
        sdom.init_hooks(window)
        div = window.document.create_element("div")
        sdom.cleanup(window)

        div.add_event_listener("mouseover", lambda e: None)
        assert len(div.get_event_listeners("mouseover")) == 1

    def test_sessions_are_isolated(self, load_page):
        first_win, first = load_page('<body><button id="a">A</button></body>')
        second_win, second = load_page('<body><button id="b">B</button></body>')

        first_win.document.get_element_by_id("a").add_event_listener("click", lambda e: None)

        assert len(first.registry.tracked_elements()) == 1
        assert second.registry.tracked_elements() == []


class TestStandaloneLifecycle:
    def test_registrations_reach_the_installing_lifecycle(self, lifecycle):
        win = Window()
        session = lifecycle.init_hooks(win)
        parse_into(win.document, '<body><button id="btn">Go</button></body>')

        button = win.document.get_element_by_id("btn")
        button.add_event_listener("click", lambda e: None)

        assert [r.element for r in session.registry.tracked_elements()] == [button]
        assert get_container().session_lifecycle.get(win) is None

    def test_two_lifecycles_stay_separate(self, lifecycle):
        other = SessionLifecycle()
        first_win, second_win = Window(), Window()
        first = lifecycle.init_hooks(first_win)
        second = other.init_hooks(second_win)
        parse_into(first_win.document, "<body><b>1</b></body>")
        parse_into(second_win.document, "<body><i>2</i></body>")

        first_win.document.query_selector("b").add_event_listener("click", lambda e: None)
        second_win.document.query_selector("i").add_event_listener("click", lambda e: None)

        assert first_win.element_class is not second_win.element_class
        assert first.registry.tracked_elements()[0].element.tag_name == "B"
        assert second.registry.tracked_elements()[0].element.tag_name == "I"

    def test_container_reset_keeps_live_sessions(self, window):
        session = sdom.init_hooks(window)
        parse_into(window.document, '<body><button id="btn">Go</button></body>')
        reset_container()

        window.document.get_element_by_id("btn").add_event_listener("click", lambda e: None)

        assert session.registry.lookup("27d").event_types == ["click"]
