"""Tests for decoding reports posted by the bootstrap script."""

import json

import pytest

from sdom.domains.rehydration import (
    InvalidRehydrationEvent,
    RehydrationEvent,
    UnknownIdentityError,
)
from sdom.domains.session import SessionClosedError


class TestDecode:
    def test_from_json_text(self):
        event = RehydrationEvent.decode('{"id": "27d", "eventType": "click"}')
        assert event.sdom_id == "27d"
        assert event.event_type == "click"

    def test_from_bytes(self):
        event = RehydrationEvent.decode(b'{"id": "1u-1", "eventType": "click"}')
        assert event.sdom_id == "1u-1"

    def test_from_mapping_by_field_name(self):
        event = RehydrationEvent.decode({"sdom_id": "27d", "event_type": "click"})
        assert event.sdom_id == "27d"

    def test_event_type_is_normalized(self):
        event = RehydrationEvent.decode({"id": " 27d ", "eventType": " CLICK "})
        assert event.sdom_id == "27d"
        assert event.event_type == "click"

    def test_extra_fields_ignored(self):
        payload = json.dumps({"id": "27d", "eventType": "click", "ts": 123})
        assert RehydrationEvent.decode(payload).sdom_id == "27d"

    def test_frozen(self):
        event = RehydrationEvent.decode({"id": "27d", "eventType": "click"})
        with pytest.raises(Exception):
            event.sdom_id = "other"


class TestDecodeErrors:
    def test_not_json(self):
        with pytest.raises(InvalidRehydrationEvent, match="not JSON"):
            RehydrationEvent.decode("{id: 27d")

    def test_not_an_object(self):
        with pytest.raises(InvalidRehydrationEvent, match="JSON object"):
            RehydrationEvent.decode("[1, 2]")

    def test_unhooked_event_type(self):
        with pytest.raises(InvalidRehydrationEvent) as exc_info:
            RehydrationEvent.decode({"id": "27d", "eventType": "mouseover"})
        assert exc_info.value.errors

    @pytest.mark.parametrize("identity", ["", "27D", '27d"]', "a b"])
    def test_invalid_identity(self, identity):
        with pytest.raises(InvalidRehydrationEvent):
            RehydrationEvent.decode({"id": identity, "eventType": "click"})

    def test_missing_fields(self):
        with pytest.raises(InvalidRehydrationEvent):
            RehydrationEvent.decode({})


class TestResolveEvent:
    def test_resolves_tracked_element(self, load_page):
        win, session = load_page('<body><button id="btn">Go</button></body>')
        button = win.document.get_element_by_id("btn")
        button.add_event_listener("click", lambda e: None)

        record = session.resolve_event('{"id": "27d", "eventType": "click"}')
        assert record.element is button

    def test_accepts_decoded_event(self, load_page):
        win, session = load_page('<body><button id="btn">Go</button></body>')
        win.document.get_element_by_id("btn").add_event_listener("click", lambda e: None)
        event = RehydrationEvent(sdom_id="27d", event_type="click")
        assert session.resolve_event(event).identity == "27d"

    def test_unknown_identity(self, session):
        with pytest.raises(UnknownIdentityError) as exc_info:
            session.resolve_event({"id": "zz", "eventType": "click"})
        assert exc_info.value.sdom_id == "zz"
        assert "zz" in str(exc_info.value)

    def test_identity_without_recorded_event(self, load_page):
        win, session = load_page('<body><button id="btn">Go</button></body>')
        session.ensure_identity(win.document.get_element_by_id("btn"))
        with pytest.raises(UnknownIdentityError):
            session.resolve_event({"id": "27d", "eventType": "click"})

    def test_closed_session(self, session):
        session.close()
        with pytest.raises(SessionClosedError):
            session.resolve_event({"id": "27d", "eventType": "click"})
