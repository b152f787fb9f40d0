"""Value Objects for the Rehydration Context.

The bootstrap script is generated from a BootstrapPlan: an ordered list
of entries, each naming how the browser finds one element and which
event types to re-register on it. Keeping the plan separate from the
rendered text makes the generation testable without parsing JavaScript.

Reports sent back by the bootstrap script are decoded into
RehydrationEvent models.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sdom.domains.shared import HookedEventType, SdomError, SdomId


class LookupStrategy(Enum):
    """How the browser resolves a tracked element."""
    ELEMENT_ID = "id"
    SDOM_ID = "sdom-id"


@dataclass(frozen=True)
class ElementLookup:
    """Client-side lookup of one element.

    Elements with their own ``id`` are found with ``getElementById``
    when that ``id`` is unique in the document; all others through their
    persisted identity attribute.
    """
    strategy: LookupStrategy
    value: str

    @classmethod
    def by_id(cls, element_id: str) -> "ElementLookup":
        if not element_id:
            raise ValueError("Element id cannot be empty")
        return cls(strategy=LookupStrategy.ELEMENT_ID, value=element_id)

    @classmethod
    def by_identity(cls, sdom_id: SdomId) -> "ElementLookup":
        return cls(strategy=LookupStrategy.SDOM_ID, value=sdom_id.selector)

    @classmethod
    def for_element(
        cls, element: Any, sdom_id: SdomId, id_is_unique: bool = True
    ) -> "ElementLookup":
        """Pick the lookup for a tracked element.

        Args:
            element: The tracked element
            sdom_id: Its persisted identity
            id_is_unique: Whether no other element in the document shares
                the element's ``id``. ``getElementById`` only ever finds the
                first of several, so shared ids use the identity selector.
        """
        element_id = element.get_attribute("id")
        if element_id and id_is_unique:
            return cls.by_id(element_id)
        return cls.by_identity(sdom_id)


@dataclass(frozen=True)
class BootstrapEntry:
    """One tracked element and the events to re-register on it."""
    sdom_id: SdomId
    lookup: ElementLookup
    event_types: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.event_types:
            raise ValueError(f"Bootstrap entry {self.sdom_id} has no event types")


@dataclass(frozen=True)
class BootstrapPlan:
    """Ordered rehydration instructions for one document."""
    entries: Tuple[BootstrapEntry, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def binding_count(self) -> int:
        return sum(len(entry.event_types) for entry in self.entries)

    def identities(self) -> List[str]:
        return [entry.sdom_id.value for entry in self.entries]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entries": [
                {
                    "id": entry.sdom_id.value,
                    "lookup": {
                        "strategy": entry.lookup.strategy.value,
                        "value": entry.lookup.value,
                    },
                    "event_types": list(entry.event_types),
                }
                for entry in self.entries
            ],
        }


class InvalidRehydrationEvent(SdomError):
    """Raised when a report payload from the browser cannot be decoded."""

    def __init__(self, message: str, errors: Any = None) -> None:
        self.errors = errors
        super().__init__(message)


class UnknownIdentityError(SdomError, KeyError):
    """Raised when a report names an identity the session does not track."""

    def __init__(self, sdom_id: str, event_type: str) -> None:
        self.sdom_id = sdom_id
        self.event_type = event_type
        super().__init__(
            f"No tracked element '{sdom_id}' with a '{event_type}' binding in this session"
        )

    def __str__(self) -> str:
        return str(self.args[0])


class RehydrationEvent(BaseModel):
    """Report posted by the bootstrap script when a tracked event fires."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    sdom_id: str = Field(..., alias="id", description="Identity of the element that fired")
    event_type: HookedEventType = Field(
        ..., alias="eventType", description="Hooked event type that fired"
    )

    @field_validator("sdom_id")
    @classmethod
    def _check_identity(cls, value: str) -> str:
        value = value.strip()
        if not SdomId.is_valid(value):
            raise ValueError(f"Invalid identity '{value}'")
        return value

    @classmethod
    def decode(cls, payload: Union[str, bytes, Dict[str, Any]]) -> "RehydrationEvent":
        """Decode a report from a JSON body or an already parsed mapping.

        Raises:
            InvalidRehydrationEvent: If the payload is not valid JSON or
                does not describe a hooked event on a valid identity
        """
        if isinstance(payload, (str, bytes)):
            try:
                payload = json.loads(payload)
            except ValueError as e:
                raise InvalidRehydrationEvent(f"Report body is not JSON: {e}") from e
        if not isinstance(payload, dict):
            raise InvalidRehydrationEvent(
                f"Report body must be a JSON object, got {type(payload).__name__}"
            )
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise InvalidRehydrationEvent(
                f"Invalid rehydration report: {e.error_count()} error(s)",
                errors=e.errors(),
            ) from e
