"""
Domain event base class.
"""
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Dict
from uuid import UUID, uuid4

from .clock import utcnow

ENVELOPE_FIELDS = ('event_id', 'occurred_at')


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """
    Base class for domain events.

    Events are recorded on an aggregate while it changes and drained once
    the change is stored.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=utcnow)

    @property
    def event_type(self) -> str:
        return self.__class__.__name__

    def payload(self) -> Dict[str, Any]:
        """Event-specific fields, without id and timestamp."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in ENVELOPE_FIELDS
        }
