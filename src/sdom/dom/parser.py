"""HTML parsing into the reference DOM using ``html.parser``."""

from __future__ import annotations

from html.parser import HTMLParser
from typing import List, Optional, Tuple

from sdom.dom.nodes import VOID_ELEMENTS, Document, Element, Node, Window

# Start tags that implicitly close an open element of the same name
_SELF_NESTING_FORBIDDEN = frozenset({"p", "li", "option", "tr", "td", "th", "dt", "dd"})


class TreeBuilder(HTMLParser):
    """Builds a node tree inside an existing document.

    Elements are created through ``document.create_element`` so they are
    instances of the environment's element capability.
    """

    def __init__(self, document: Document) -> None:
        super().__init__(convert_charrefs=True)
        self.document = document
        self._stack: List[Node] = [document]

    @property
    def _current(self) -> Node:
        return self._stack[-1]

    def handle_decl(self, decl: str) -> None:
        if decl.lower().startswith("doctype"):
            self.document.doctype = decl

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        if tag in _SELF_NESTING_FORBIDDEN:
            current = self._current
            if isinstance(current, Element) and current.local_name == tag:
                self._stack.pop()
        element = self.document.create_element(tag)
        for name, value in attrs:
            element.set_attribute(name, value if value is not None else "")
        self._current.append_child(element)
        if tag not in VOID_ELEMENTS:
            self._stack.append(element)

    def handle_startendtag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        self.handle_starttag(tag, attrs)
        if tag not in VOID_ELEMENTS:
            self._stack.pop()

    def handle_endtag(self, tag: str) -> None:
        # Close up to the nearest matching open element; ignore stray end tags
        for index in range(len(self._stack) - 1, 0, -1):
            node = self._stack[index]
            if isinstance(node, Element) and node.local_name == tag:
                del self._stack[index:]
                return

    def handle_data(self, data: str) -> None:
        self._current.append_child(self.document.create_text_node(data))

    def handle_comment(self, data: str) -> None:
        self._current.append_child(self.document.create_comment(data))


def parse_into(document: Document, markup: str) -> Document:
    """Parse markup and append the resulting nodes to ``document``."""
    builder = TreeBuilder(document)
    builder.feed(markup)
    builder.close()
    return document


def parse_html(markup: str, window: Optional[Window] = None) -> Document:
    """Parse markup into a new window's document (or the given window's).

    Args:
        markup: HTML source text
        window: Environment whose document receives the nodes. A fresh
            ``Window`` is created when omitted.

    Returns:
        The populated document
    """
    if window is None:
        window = Window()
    return parse_into(window.document, markup)
