"""Pytest configuration for the sdom test suite."""

from __future__ import annotations

from typing import Callable, Tuple

import pytest

import sdom
from sdom.container import reset_container
from sdom.dom import Window, parse_into
from sdom.domains.session import RehydrationSession


@pytest.fixture(autouse=True)
def fresh_container(monkeypatch: pytest.MonkeyPatch):
    """Give every test its own service container and a clean environment."""
    for name in (
        "SDOM_REPORT_URL",
        "SDOM_LOG_LEVEL",
        "SDOM_PYTHON_SCRIPT_TYPES",
        "SDOM_EXECUTE_SERVER_SCRIPTS",
    ):
        monkeypatch.delenv(name, raising=False)
    # Skip .env discovery so a developer's local file cannot leak into tests
    monkeypatch.setattr("sdom.config._ENV_LOADED", True)
    reset_container()
    yield
    reset_container()


@pytest.fixture
def window() -> Window:
    return Window(location_href="https://example.com/page")


@pytest.fixture
def session(window: Window) -> RehydrationSession:
    return sdom.init_hooks(window)


@pytest.fixture
def load_page() -> Callable[[str], Tuple[Window, RehydrationSession]]:
    """Create a hooked environment and parse markup into it."""

    def _load(markup: str) -> Tuple[Window, RehydrationSession]:
        win = Window(location_href="https://example.com/page")
        sess = sdom.init_hooks(win)
        parse_into(win.document, markup)
        return win, sess

    return _load
