"""Reference DOM environment.

A small, dependency-free document model used as the environment the
rehydration hooks operate on. Any object tree satisfying the contracts
in ``sdom.domains.shared.contracts`` can be used instead.
"""

from sdom.dom.nodes import (
    Comment,
    Document,
    Element,
    Event,
    Node,
    Text,
    Window,
)
from sdom.dom.parser import parse_html, parse_into

__all__ = [
    "Comment",
    "Document",
    "Element",
    "Event",
    "Node",
    "Text",
    "Window",
    "parse_html",
    "parse_into",
]
