"""
Customer Domain Events
"""

from dataclasses import dataclass
from datetime import datetime

from app.core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class CustomerCreated(DomainEvent):
    """
    Raised when a new customer is created.

    The customer has no ID at creation time; repositories fill in
    aggregate_id when they publish the event after the first save.
    """

    email: str
    name: str
    created_at: datetime
