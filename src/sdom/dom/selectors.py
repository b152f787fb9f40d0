"""Simple CSS selector matching for the reference DOM.

Supports comma-separated compound selectors made of an optional type
selector (``div``, ``*``), ``#id``, ``.class`` and attribute selectors
(``[attr]``, ``[attr="value"]``, ``[attr='value']``, ``[attr=value]``).
Combinators are not supported.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    from sdom.dom.nodes import Element

_TYPE_PATTERN = re.compile(r"^(\*|[a-zA-Z][a-zA-Z0-9-]*)")
_PART_PATTERN = re.compile(
    r"""
    \#(?P<id>[\w-]+)
    | \.(?P<cls>[\w-]+)
    | \[\s*(?P<attr>[\w:-]+)\s*
        (?:=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<bare>[\w-]+))\s*)?
      \]
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class CompoundSelector:
    """One compound selector such as ``script[context="server"]``."""
    tag: Optional[str] = None
    element_id: Optional[str] = None
    classes: Tuple[str, ...] = ()
    attributes: Tuple[Tuple[str, Optional[str]], ...] = ()

    @classmethod
    def parse(cls, text: str) -> "CompoundSelector":
        text = text.strip()
        if not text:
            raise ValueError("Empty selector")
        tag = None
        pos = 0
        match = _TYPE_PATTERN.match(text)
        if match:
            tag = None if match.group(1) == "*" else match.group(1).lower()
            pos = match.end()
        element_id = None
        classes = []
        attributes = []
        while pos < len(text):
            part = _PART_PATTERN.match(text, pos)
            if part is None:
                raise ValueError(f"Unsupported selector syntax: '{text}'")
            if part.group("id"):
                element_id = part.group("id")
            elif part.group("cls"):
                classes.append(part.group("cls"))
            else:
                value = part.group("dq")
                if value is None:
                    value = part.group("sq")
                if value is None:
                    value = part.group("bare")
                attributes.append((part.group("attr").lower(), value))
            pos = part.end()
        return cls(
            tag=tag,
            element_id=element_id,
            classes=tuple(classes),
            attributes=tuple(attributes),
        )

    def matches(self, element: "Element") -> bool:
        if self.tag is not None and element.local_name != self.tag:
            return False
        if self.element_id is not None and element.get_attribute("id") != self.element_id:
            return False
        if self.classes:
            present = (element.get_attribute("class") or "").split()
            if any(name not in present for name in self.classes):
                return False
        for name, value in self.attributes:
            actual = element.get_attribute(name)
            if actual is None:
                return False
            if value is not None and actual != value:
                return False
        return True


@dataclass(frozen=True)
class SelectorGroup:
    """Comma-separated list of compound selectors."""
    selectors: Tuple[CompoundSelector, ...] = field(default_factory=tuple)

    @staticmethod
    @lru_cache(maxsize=256)
    def parse(text: str) -> "SelectorGroup":
        return SelectorGroup(
            selectors=tuple(CompoundSelector.parse(part) for part in text.split(","))
        )

    def matches(self, element: "Element") -> bool:
        return any(selector.matches(element) for selector in self.selectors)
