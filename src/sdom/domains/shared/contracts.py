"""Environment contracts consumed by the rehydration core.

The DOM implementation is an external collaborator. These protocols are
the anti-corruption layer: the core never imports a concrete DOM, it only
relies on the capabilities listed here. ``sdom.dom`` satisfies them.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class ElementLike(Protocol):
    """Element capability required by the identity and script contexts."""

    tag_name: str
    attributes: Dict[str, str]
    text_content: str
    parent_node: Any
    owner_document: Any

    @property
    def parent_element(self) -> Optional["ElementLike"]: ...

    @property
    def children(self) -> List["ElementLike"]: ...

    def get_attribute(self, name: str) -> Optional[str]: ...
    def set_attribute(self, name: str, value: object) -> None: ...
    def remove_attribute(self, name: str) -> None: ...

    def add_event_listener(
        self, event_type: str, listener: Callable[..., Any], use_capture: bool = False
    ) -> None: ...

    def remove_event_listener(
        self, event_type: str, listener: Callable[..., Any], use_capture: bool = False
    ) -> None: ...


@runtime_checkable
class DocumentLike(Protocol):
    """Document capability required by the serialization rehydrator."""

    default_view: Any

    @property
    def body(self) -> Optional[ElementLike]: ...

    def create_element(self, local_name: str) -> ElementLike: ...
    def get_elements_by_tag_name(self, name: str) -> List[ElementLike]: ...
    def query_selector_all(self, selector: str) -> List[ElementLike]: ...


@runtime_checkable
class EnvironmentLike(Protocol):
    """Environment (window) owning a document and the element capability."""

    element_class: type
    document: Any
    location_href: str
