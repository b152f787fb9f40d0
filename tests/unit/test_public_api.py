"""End-to-end behavior of the public entry points during one server pass."""

import sdom
from sdom.dom import Window, parse_into
from sdom.domains.interception import EventTrackingMixin


def _noop(event):
    pass


def _server_pass(markup):
    """Run the entry points in the order a rendering environment would."""
    window = Window(location_href="https://example.com/page")
    session = sdom.init_hooks(window)
    parse_into(window.document, markup)
    return window, session


class TestIdempotentIdentity:
    def test_same_string_and_unchanged_count(self):
        window, session = _server_pass('<body><button id="btn">Go</button></body>')
        button = window.document.get_element_by_id("btn")

        first = sdom.ensure_identity(window, button)
        count = session.registry.issued_count
        second = sdom.ensure_identity(window, button)

        assert first == second
        assert session.registry.issued_count == count


class TestNoCrossSessionLeakage:
    def test_reinit_after_cleanup_starts_empty(self):
        window, session = _server_pass('<body><button id="btn">Go</button></body>')
        window.document.get_element_by_id("btn").add_event_listener("click", _noop)
        assert session.registry.tracked_elements()

        sdom.cleanup(window)
        fresh = sdom.init_hooks(window)

        assert fresh is not session
        assert fresh.registry.tracked_elements() == []
        assert fresh.registry.issued_count == 0


class TestHookInstallOnce:
    def test_single_side_effect_per_registration(self):
        window = Window()
        sdom.init_hooks(window)
        sdom.init_hooks(window)
        session = sdom.init_hooks(window)
        parse_into(window.document, "<body><div></div></body>")

        div = window.document.query_selector("div")
        div.add_event_listener("click", _noop)

        assert type(div).__mro__.count(EventTrackingMixin) == 1
        assert session.registry.issued_count == 1
        assert len(div.get_event_listeners("click")) == 1


class TestScriptContexts:
    def test_default_context(self):
        window, _ = _server_pass("<body><script>x</script></body>")
        script = window.document.query_selector("script")
        assert sdom.script_pre_execution(script) is False

    def test_unknown_context(self, caplog):
        window, _ = _server_pass('<body><script context="bogus">x</script></body>')
        script = window.document.query_selector("script")
        assert sdom.script_pre_execution(script) is False
        assert script.get_attribute("context") == "client-only"
        assert "bogus" in caplog.text

    def test_server_only_stripped(self):
        window, _ = _server_pass('<body><script context="server-only">x</script></body>')
        script = window.document.query_selector("script")
        assert sdom.script_pre_execution(script)
        sdom.script_post_execution(script, "x")
        sdom.document_pre_serialize(window.document)
        assert script not in window.document.query_selector_all("script")

    def test_server_normalized(self):
        window, _ = _server_pass('<body><script context="server">x</script></body>')
        script = window.document.query_selector("script")
        assert sdom.script_pre_execution(script)
        sdom.script_post_execution(script, "x")
        sdom.document_pre_serialize(window.document)
        markup = window.document.serialize()
        sdom.document_post_serialize(window.document)
        assert "<script>x</script>" in markup


class TestTrackedEventRoundTrip:
    def test_click_bound_and_mouseover_ignored(self):
        window, _ = _server_pass(
            '<body><button id="btn">Go</button><div id="hover">Hi</div></body>'
        )
        window.document.get_element_by_id("btn").add_event_listener("click", _noop)
        window.document.get_element_by_id("hover").add_event_listener("mouseover", _noop)

        plan = sdom.document_pre_serialize(window.document)
        markup = window.document.serialize()

        assert 'document.getElementById("btn")' in markup
        assert 'addEventListener("click"' in markup
        assert "hover" not in markup.split("data-sdom-bootstrap")[1]
        assert plan.binding_count == 1
        assert not window.document.get_element_by_id("hover").has_attribute("data-sdom-id")


class TestEmptyRegistrySerialization:
    def test_only_helper_boilerplate(self):
        window, _ = _server_pass('<body><div id="hover">Hi</div></body>')
        window.document.get_element_by_id("hover").add_event_listener("mouseover", _noop)

        plan = sdom.document_pre_serialize(window.document)
        script = window.document.query_selector("script[data-sdom-bootstrap]")

        assert plan.is_empty
        assert "sdomReport" in script.text_content
        assert "addEventListener" not in script.text_content
        assert "getElementById" not in script.text_content
        assert "querySelector" not in script.text_content
