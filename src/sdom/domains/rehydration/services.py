"""Rehydration Domain Services.

The SerializationRehydrator runs immediately before a document is turned
into markup. It purges server-only material and injects the bootstrap
script that re-registers recorded events in the browser.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Optional

from sdom.domains.identity import IdentityRegistry
from sdom.domains.rehydration.templates import BootstrapTemplate
from sdom.domains.rehydration.value_objects import (
    BootstrapEntry,
    BootstrapPlan,
    ElementLookup,
)
from sdom.domains.script_context import ScriptContextClassifier, remove_element
from sdom.domains.shared import BOOTSTRAP_ATTRIBUTE, DocumentLike

logger = logging.getLogger(__name__)


def count_element_ids(document: Optional[DocumentLike]) -> Counter:
    """Count how many elements of the document carry each ``id`` value."""
    if document is None:
        return Counter()
    return Counter(
        element.get_attribute("id")
        for element in document.get_elements_by_tag_name("*")
        if element.get_attribute("id")
    )


@dataclass
class BootstrapPlanner:
    """Builds the bootstrap plan from a session's identity registry."""

    def plan(
        self, registry: IdentityRegistry, document: Optional[DocumentLike] = None
    ) -> BootstrapPlan:
        """Collect every live tracked element that recorded an event.

        Elements without recorded events, and elements no longer part of
        the document, produce no entry.

        Args:
            registry: The session's identity registry
            document: Document the elements belong to. Taken from the
                tracked elements' ``owner_document`` when omitted.

        Returns:
            BootstrapPlan in identity issue order
        """
        records = [r for r in registry.tracked_elements() if r.has_events()]
        if document is None and records:
            document = getattr(records[0].element, "owner_document", None)
        id_counts = count_element_ids(document)

        entries = []
        for record in records:
            if not record.is_live():
                logger.debug(f"Skipping detached element {record.identity}")
                continue
            element_id = record.element.get_attribute("id")
            id_is_unique = not element_id or id_counts[element_id] <= 1
            if not id_is_unique:
                logger.debug(
                    f"Element id '{element_id}' is shared, "
                    f"locating {record.identity} by identity"
                )
            entries.append(
                BootstrapEntry(
                    sdom_id=record.sdom_id,
                    lookup=ElementLookup.for_element(
                        record.element, record.sdom_id, id_is_unique=id_is_unique
                    ),
                    event_types=tuple(record.event_types),
                )
            )
        return BootstrapPlan(entries=tuple(entries))


@dataclass
class SerializationRehydrator:
    """Prepares a document for serialization.

    Attributes:
        classifier: Applies the script context policy
        planner: Turns the registry into a bootstrap plan
        template: Renders the plan into script text
    """
    classifier: ScriptContextClassifier = field(default_factory=ScriptContextClassifier)
    planner: BootstrapPlanner = field(default_factory=BootstrapPlanner)
    template: BootstrapTemplate = field(default_factory=BootstrapTemplate)

    def pre_serialize(self, document: DocumentLike, registry: IdentityRegistry) -> BootstrapPlan:
        """Strip server-only scripts and inject the bootstrap script.

        Args:
            document: The document about to be serialized
            registry: The session's identity registry

        Returns:
            The plan the injected script was generated from
        """
        self.sanitize_scripts(document)
        plan = self.planner.plan(registry, document)

        script = self._replace_bootstrap_script(document)
        script.text_content = self.template.render(plan)

        logger.debug(
            f"Injected bootstrap script: {len(plan.entries)} element(s), "
            f"{plan.binding_count} binding(s)"
        )
        return plan

    def post_serialize(self, document: DocumentLike) -> None:
        """Extension point invoked after the document was serialized."""
        logger.debug("Document serialized")

    def sanitize_scripts(self, document: DocumentLike) -> None:
        """Apply the after-execution policy to every script in the document.

        Covers scripts that were added after the execution pass and would
        otherwise reach the client with a server marker.
        """
        for script in list(document.get_elements_by_tag_name("script")):
            if script.get_attribute(BOOTSTRAP_ATTRIBUTE) is not None:
                continue
            self.classifier.post_execution(script, script.text_content)

    def _replace_bootstrap_script(self, document: Any) -> Any:
        for stale in document.query_selector_all(f"script[{BOOTSTRAP_ATTRIBUTE}]"):
            remove_element(stale)

        script = document.create_element("script")
        script.set_attribute(BOOTSTRAP_ATTRIBUTE, "")
        container: Optional[Any] = document.body
        if container is None:
            container = getattr(document, "document_element", None) or document
        container.append_child(script)
        return script
