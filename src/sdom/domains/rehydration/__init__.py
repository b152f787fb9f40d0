"""Rehydration Context - Bootstrap script generation at serialization time.

This bounded context manages:
- Purging server-only scripts before markup is produced
- Planning client-side lookups and event bindings for tracked elements
- Rendering and injecting the self-contained bootstrap script
- Decoding the reports the bootstrap script posts back
"""

# Value Objects
from sdom.domains.rehydration.value_objects import (
    BootstrapEntry,
    BootstrapPlan,
    ElementLookup,
    InvalidRehydrationEvent,
    LookupStrategy,
    RehydrationEvent,
    UnknownIdentityError,
)

# Templates
from sdom.domains.rehydration.templates import (
    BootstrapTemplate,
    ScriptTemplate,
    js_literal,
)

# Services
from sdom.domains.rehydration.services import (
    BootstrapPlanner,
    SerializationRehydrator,
)

__all__ = [
    # Value Objects
    "BootstrapEntry",
    "BootstrapPlan",
    "ElementLookup",
    "InvalidRehydrationEvent",
    "LookupStrategy",
    "RehydrationEvent",
    "UnknownIdentityError",
    # Templates
    "BootstrapTemplate",
    "ScriptTemplate",
    "js_literal",
    # Services
    "BootstrapPlanner",
    "SerializationRehydrator",
]
