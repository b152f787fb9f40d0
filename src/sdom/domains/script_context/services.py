"""Script Context Domain Services.

The classifier gates server-side execution of script elements and
decides what happens to them afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from sdom.domains.script_context.value_objects import ScriptContext
from sdom.domains.shared import CONTEXT_ATTRIBUTE, ElementLike

logger = logging.getLogger(__name__)


def remove_element(element: Any) -> None:
    """Remove an element from its document.

    Uses the element's own ``remove()`` when the DOM offers it and falls
    back to removal through the parent otherwise.
    """
    remove = getattr(element, "remove", None)
    if callable(remove):
        remove()
        return
    parent = getattr(element, "parent_element", None) or getattr(element, "parent_node", None)
    if parent is not None:
        parent.remove_child(element)


@dataclass
class ScriptContextClassifier:
    """Classifies script elements by their declared execution context."""

    def context_of(self, script: ElementLike) -> Optional[ScriptContext]:
        """Read the script's context without normalizing it.

        Returns:
            The ScriptContext, or None when the attribute holds an unknown value
        """
        return ScriptContext.parse(script.get_attribute(CONTEXT_ATTRIBUTE))

    def pre_execution(self, script: ElementLike) -> bool:
        """Decide whether a script runs during the server pass.

        Unknown context values are rewritten to ``client-only`` so an
        unclassified script never runs on the server.

        Args:
            script: The script element about to be executed

        Returns:
            True if the script should execute now
        """
        raw = script.get_attribute(CONTEXT_ATTRIBUTE)
        context = ScriptContext.parse(raw)
        if context is None:
            logger.warning(
                f"Unknown script context '{raw}' "
                f"defaulting to '{ScriptContext.CLIENT_ONLY.value}'"
            )
            script.set_attribute(CONTEXT_ATTRIBUTE, ScriptContext.CLIENT_ONLY.value)
            return False
        return context.runs_on_server

    def post_execution(self, script: ElementLike, source: Optional[str] = None) -> None:
        """Apply the after-execution policy to a script that ran.

        ``server`` scripts lose their context marker and stay in the
        markup; ``server-only`` scripts are removed from the document.

        Args:
            script: The script element that executed
            source: Source text that was executed
        """
        context = self.context_of(script)
        if context is ScriptContext.SERVER:
            script.remove_attribute(CONTEXT_ATTRIBUTE)
        elif context is ScriptContext.SERVER_ONLY:
            remove_element(script)
            logger.debug(
                f"Removed server-only script ({len(source or '')} chars of source)"
            )
