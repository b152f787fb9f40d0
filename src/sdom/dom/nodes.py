"""Node types of the reference DOM environment.

A deliberately small DOM: enough tree, attribute, listener and
serialization behavior for server-side rendering passes. Method names
follow Python conventions (``add_event_listener``, ``get_attribute``)
while ``tag_name`` mirrors the browser's upper-cased HTML tag name.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Type

from sdom.dom.selectors import SelectorGroup

# Elements that never have children or an end tag
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

# Elements whose text content is serialized without escaping
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

Listener = Callable[["Event"], object]


@dataclass
class Event:
    """Minimal event object handed to listeners by ``dispatch_event``."""
    type: str
    target: Optional["Element"] = None
    current_target: Optional["Element"] = None


class Node:
    """Base tree node."""

    def __init__(self, owner_document: Optional["Document"] = None) -> None:
        self.owner_document = owner_document
        self.parent_node: Optional[Node] = None
        self.child_nodes: List[Node] = []

    @property
    def parent_element(self) -> Optional["Element"]:
        parent = self.parent_node
        return parent if isinstance(parent, Element) else None

    @property
    def children(self) -> List["Element"]:
        return [node for node in self.child_nodes if isinstance(node, Element)]

    @property
    def is_connected(self) -> bool:
        """True when the node is attached to its owner document's tree."""
        node: Optional[Node] = self
        while node is not None:
            if isinstance(node, Document):
                return True
            node = node.parent_node
        return False

    @property
    def text_content(self) -> str:
        return "".join(node.text_content for node in self.child_nodes)

    @text_content.setter
    def text_content(self, value: str) -> None:
        for node in list(self.child_nodes):
            node.parent_node = None
        self.child_nodes = []
        if value:
            self.append_child(Text(value, self.owner_document))

    def append_child(self, node: "Node") -> "Node":
        if node.parent_node is not None:
            node.parent_node.remove_child(node)
        node.parent_node = self
        self.child_nodes.append(node)
        return node

    def remove_child(self, node: "Node") -> "Node":
        if node not in self.child_nodes:
            raise ValueError("The node to be removed is not a child of this node")
        self.child_nodes.remove(node)
        node.parent_node = None
        return node

    def iter_elements(self) -> Iterator["Element"]:
        """Yield descendant elements in document order."""
        for node in self.child_nodes:
            if isinstance(node, Element):
                yield node
                yield from node.iter_elements()

    def get_elements_by_tag_name(self, name: str) -> List["Element"]:
        name = name.lower()
        return [
            element for element in self.iter_elements()
            if name == "*" or element.local_name == name
        ]

    def query_selector_all(self, selector: str) -> List["Element"]:
        group = SelectorGroup.parse(selector)
        return [element for element in self.iter_elements() if group.matches(element)]

    def query_selector(self, selector: str) -> Optional["Element"]:
        group = SelectorGroup.parse(selector)
        for element in self.iter_elements():
            if group.matches(element):
                return element
        return None

    def serialize(self) -> str:
        return "".join(node.serialize() for node in self.child_nodes)


class Text(Node):
    """Character data node."""

    def __init__(self, data: str, owner_document: Optional["Document"] = None) -> None:
        super().__init__(owner_document)
        self.data = data

    @property
    def text_content(self) -> str:
        return self.data

    @text_content.setter
    def text_content(self, value: str) -> None:
        self.data = value

    def serialize(self) -> str:
        parent = self.parent_element
        if parent is not None and parent.local_name in RAW_TEXT_ELEMENTS:
            return self.data
        return html.escape(self.data, quote=False)


class Comment(Node):
    """Comment node; contributes nothing to text content."""

    def __init__(self, data: str, owner_document: Optional["Document"] = None) -> None:
        super().__init__(owner_document)
        self.data = data

    @property
    def text_content(self) -> str:
        return ""

    @text_content.setter
    def text_content(self, value: str) -> None:
        self.data = value

    def serialize(self) -> str:
        return f"<!--{self.data}-->"


class Element(Node):
    """HTML element with attributes and event listeners.

    This class is the environment's element capability: documents create
    elements through ``Window.element_class`` so a tracking subclass can
    be selected at environment setup time.
    """

    def __init__(self, local_name: str, owner_document: Optional["Document"] = None) -> None:
        super().__init__(owner_document)
        self.local_name = local_name.lower()
        self.attributes: Dict[str, str] = {}
        self._listeners: Dict[str, List[tuple]] = {}

    @property
    def tag_name(self) -> str:
        return self.local_name.upper()

    @property
    def id(self) -> str:
        return self.attributes.get("id", "")

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name.lower())

    def set_attribute(self, name: str, value: object) -> None:
        self.attributes[name.lower()] = str(value)

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name.lower(), None)

    def has_attribute(self, name: str) -> bool:
        return name.lower() in self.attributes

    def remove(self) -> None:
        if self.parent_node is not None:
            self.parent_node.remove_child(self)

    def add_event_listener(
        self,
        event_type: str,
        listener: Listener,
        use_capture: bool = False,
    ) -> None:
        entries = self._listeners.setdefault(event_type, [])
        # Same (listener, capture) pair registers only once, as in the DOM
        if (listener, use_capture) not in entries:
            entries.append((listener, use_capture))

    def remove_event_listener(
        self,
        event_type: str,
        listener: Listener,
        use_capture: bool = False,
    ) -> None:
        entries = self._listeners.get(event_type, [])
        if (listener, use_capture) in entries:
            entries.remove((listener, use_capture))

    def get_event_listeners(self, event_type: str) -> List[Listener]:
        return [listener for listener, _ in self._listeners.get(event_type, [])]

    def dispatch_event(self, event: "Event | str") -> bool:
        """Invoke listeners registered on this element for the event type."""
        if isinstance(event, str):
            event = Event(type=event)
        if event.target is None:
            event.target = self
        event.current_target = self
        for listener in self.get_event_listeners(event.type):
            listener(event)
        return True

    def serialize(self) -> str:
        attrs = "".join(
            f' {name}="{html.escape(value, quote=True)}"'
            for name, value in self.attributes.items()
        )
        if self.local_name in VOID_ELEMENTS:
            return f"<{self.local_name}{attrs}>"
        inner = super().serialize()
        return f"<{self.local_name}{attrs}>{inner}</{self.local_name}>"

    @property
    def outer_html(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.local_name} attrs={len(self.attributes)}>"


class Document(Node):
    """Document node; root of the element tree."""

    def __init__(self, default_view: Optional["Window"] = None) -> None:
        super().__init__(None)
        self.default_view = default_view
        self.doctype: Optional[str] = None

    @property
    def element_class(self) -> Type[Element]:
        if self.default_view is not None:
            return self.default_view.element_class
        return Element

    @property
    def document_element(self) -> Optional[Element]:
        children = self.children
        return children[0] if children else None

    @property
    def head(self) -> Optional[Element]:
        found = self.get_elements_by_tag_name("head")
        return found[0] if found else None

    @property
    def body(self) -> Optional[Element]:
        found = self.get_elements_by_tag_name("body")
        return found[0] if found else None

    def create_element(self, local_name: str) -> Element:
        return self.element_class(local_name, self)

    def create_text_node(self, data: str) -> Text:
        return Text(data, self)

    def create_comment(self, data: str) -> Comment:
        return Comment(data, self)

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        for element in self.iter_elements():
            if element.get_attribute("id") == element_id:
                return element
        return None

    def serialize(self) -> str:
        prefix = f"<!{self.doctype}>" if self.doctype else ""
        return prefix + super().serialize()


class Window:
    """Environment object: owns the document and the element capability."""

    def __init__(
        self,
        element_class: Type[Element] = Element,
        location_href: str = "about:blank",
    ) -> None:
        self.element_class = element_class
        self.location_href = location_href
        self.document = Document(default_view=self)

    def __repr__(self) -> str:
        return f"Window(location_href={self.location_href!r})"
