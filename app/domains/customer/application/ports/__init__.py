"""
Customer Application Ports

Interface definitions (ports) for the Customer domain.
Uses Protocol for structural typing.
"""

from typing import Protocol, runtime_checkable

from app.core.domain.events import DomainEvent
from app.core.domain.value_objects import Email
from app.domains.customer.domain.entities.customer import Customer
from app.domains.customer.domain.value_objects.customer_status import CustomerStatus


@runtime_checkable
class IDomainEventPublisher(Protocol):
    """Receives the events pulled from an aggregate after it was saved."""

    async def publish_all(self, events: list[DomainEvent]) -> None:
        """Publish events in order"""
        ...


@runtime_checkable
class ICustomerRepository(Protocol):
    """
    Interface for customer repository.

    save() assigns an id on first save, enforces optimistic concurrency on
    updates and publishes the customer's pending events once the write has
    succeeded. Nothing is published when the write fails.
    """

    async def save(self, customer: Customer) -> Customer:
        """Insert or update a customer and publish its pending events"""
        ...

    async def find_by_id(self, customer_id: str) -> Customer | None:
        """Get customer by ID"""
        ...

    async def find_by_email(self, email: Email | str) -> Customer | None:
        """Get customer by (normalized) email"""
        ...

    async def exists_by_email(self, email: Email | str) -> bool:
        """Check whether a customer uses this email"""
        ...

    async def find_by_status(self, status: CustomerStatus) -> list[Customer]:
        """Get customers with the given status"""
        ...

    async def find_all_active(self) -> list[Customer]:
        """Get ACTIVE customers with a positive credit limit"""
        ...

    async def find_all(self) -> list[Customer]:
        """Get every customer"""
        ...

    async def count_by_status(self, status: CustomerStatus) -> int:
        """Count customers with the given status"""
        ...

    async def delete_by_id(self, customer_id: str) -> bool:
        """Delete a customer; True if one was deleted"""
        ...

    async def find_high_credit_utilization(self, threshold_percent: float) -> list[Customer]:
        """Get ACTIVE customers whose credit utilization is >= threshold_percent"""
        ...


__all__ = [
    "ICustomerRepository",
    "IDomainEventPublisher",
]
