"""Script Context - Execution context classification of script elements.

This bounded context manages:
- Parsing the ``context`` attribute (server, server-only, client-only)
- Gating server-side execution of script elements
- Normalizing or removing scripts after they ran
"""

from sdom.domains.script_context.services import (
    ScriptContextClassifier,
    remove_element,
)
from sdom.domains.script_context.value_objects import (
    ScriptContext,
)

__all__ = [
    "ScriptContext",
    "ScriptContextClassifier",
    "remove_element",
]
