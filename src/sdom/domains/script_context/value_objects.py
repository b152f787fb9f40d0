"""Value Objects for the Script Context.

A script element declares where it is meant to run through its
``context`` attribute.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ScriptContext(Enum):
    """Execution context of a script element.

    - SERVER: run during the server pass, then kept in the markup
    - SERVER_ONLY: run during the server pass, then removed from the markup
    - CLIENT_ONLY: never run on the server (the default)
    """
    SERVER = "server"
    SERVER_ONLY = "server-only"
    CLIENT_ONLY = "client-only"

    @classmethod
    def default(cls) -> "ScriptContext":
        return cls.CLIENT_ONLY

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ScriptContext"]:
        """Map an attribute value to a context.

        Args:
            value: Raw attribute value; ``None`` or empty means the default

        Returns:
            The matching ScriptContext, or None for an unrecognized value
        """
        if not value:
            return cls.default()
        for context in cls:
            if context.value == value:
                return context
        return None

    @property
    def runs_on_server(self) -> bool:
        return self in (ScriptContext.SERVER, ScriptContext.SERVER_ONLY)
