"""Value Objects for the Identity Context.

The structural fingerprint captures the element properties an identity
is derived from. It is computed once, when an element first needs an
identity; later lookups read the persisted attribute instead.
"""

from __future__ import annotations

from dataclasses import dataclass

from sdom.domains.shared import ElementLike


@dataclass(frozen=True)
class StructuralFingerprint:
    """Structural position and shape of an element.

    Attributes:
        depth: Number of ancestor elements
        tag_name: The element's tag name as reported by the DOM
        text_length: Length of the element's text content
        child_count: Number of child elements
        attribute_count: Number of attributes
    """
    depth: int
    tag_name: str
    text_length: int
    child_count: int
    attribute_count: int

    @classmethod
    def of(cls, element: ElementLike) -> "StructuralFingerprint":
        """Capture the fingerprint of an element.

        Args:
            element: Element to inspect

        Returns:
            A new StructuralFingerprint
        """
        depth = 0
        parent = element.parent_element
        while parent is not None:
            depth += 1
            parent = parent.parent_element

        return cls(
            depth=depth,
            tag_name=element.tag_name,
            text_length=len(element.text_content or ""),
            child_count=len(element.children),
            attribute_count=len(element.attributes),
        )

    @property
    def tag_code_sum(self) -> int:
        return sum(ord(char) for char in self.tag_name)

    def seed(self, issued_count: int) -> int:
        """Compute the numeric identity seed.

        The product of the shape factors plus the depth is right-shifted
        by the number of identities already issued in the session. The
        shift spreads otherwise identical siblings apart but does not
        guarantee uniqueness.

        Args:
            issued_count: Identities issued so far in the session

        Returns:
            Non-negative integer seed
        """
        value = (
            self.tag_code_sum
            * (self.text_length + 1)
            * (self.child_count + 1)
            * (self.attribute_count + 1)
        ) + self.depth
        return value >> issued_count
