"""
In-Memory Customer Repository

Dictionary-backed implementation of ICustomerRepository for tests, local
runs and small data sets. It follows the same save contract as the
SQLAlchemy repository: UUID ids, version checks, unique emails and
publish-after-write.
"""

import logging
from dataclasses import replace

from app.core.domain import (
    ConcurrencyException,
    DuplicateEntityException,
    Email,
    EntityNotFoundException,
    domain_event_publisher,
    generate_uuid_str,
)
from app.domains.customer.application.ports import ICustomerRepository, IDomainEventPublisher
from app.domains.customer.domain.entities.customer import Customer
from app.domains.customer.domain.value_objects import CustomerStatus, utilization_threshold

logger = logging.getLogger(__name__)


def _copy(customer: Customer) -> Customer:
    """Detached copy of a customer's durable state (no pending events)."""
    return Customer.reconstitute(
        id=customer.id,
        name=customer.name,
        email=customer.email,
        address=customer.address,
        credit_limit=customer.credit_limit,
        available_credit=customer.available_credit,
        status=customer.status,
        created_at=customer.created_at,
        updated_at=customer.updated_at,
        version=customer.version,
    )


class InMemoryCustomerRepository(ICustomerRepository):
    """
    In-memory customer repository.

    Stored customers are copies, so mutating a loaded customer has no effect
    until it is saved again.
    """

    def __init__(self, event_publisher: IDomainEventPublisher | None = None):
        self._customers: dict[str, Customer] = {}
        self.event_publisher = event_publisher or domain_event_publisher

    async def save(self, customer: Customer) -> Customer:
        """Insert or update a customer and publish its pending events."""
        email = customer.email.value
        owner = next((c.id for c in self._customers.values() if c.email.value == email), None)
        if owner is not None and owner != customer.id:
            logger.warning(f"Duplicate customer email: {email}")
            raise DuplicateEntityException("Customer", "email", email)

        if customer.id is None:
            new_id = generate_uuid_str()
            stored = _copy(customer)
            stored.id = new_id
            stored.version = 1
            self._customers[new_id] = stored
            customer.id = new_id
            customer.version = 1
            logger.info(f"Customer created: {new_id} ({email})")
        else:
            current = self._customers.get(customer.id)
            if current is None:
                raise EntityNotFoundException("Customer", customer.id)
            if current.version != customer.version:
                logger.warning(
                    f"Concurrent modification of customer {customer.id}: "
                    f"expected v{customer.version}, found v{current.version}"
                )
                raise ConcurrencyException("Customer", customer.id, customer.version, current.version)

            customer.increment_version()
            self._customers[customer.id] = _copy(customer)

        events = [e if e.aggregate_id else replace(e, aggregate_id=customer.id) for e in customer.pull_events()]
        if events:
            await self.event_publisher.publish_all(events)
        return customer

    async def find_by_id(self, customer_id: str) -> Customer | None:
        customer = self._customers.get(customer_id)
        return _copy(customer) if customer else None

    async def find_by_email(self, email: Email | str) -> Customer | None:
        value = email.value if isinstance(email, Email) else email.strip().lower()
        for customer in self._customers.values():
            if customer.email.value == value:
                return _copy(customer)
        return None

    async def exists_by_email(self, email: Email | str) -> bool:
        return await self.find_by_email(email) is not None

    async def find_by_status(self, status: CustomerStatus) -> list[Customer]:
        return self._sorted(c for c in self._customers.values() if c.status == status)

    async def find_all_active(self) -> list[Customer]:
        return self._sorted(
            c for c in self._customers.values() if c.status == CustomerStatus.ACTIVE and not c.credit_limit.is_zero()
        )

    async def find_all(self) -> list[Customer]:
        return self._sorted(self._customers.values())

    async def count_by_status(self, status: CustomerStatus) -> int:
        return sum(1 for c in self._customers.values() if c.status == status)

    async def delete_by_id(self, customer_id: str) -> bool:
        deleted = self._customers.pop(customer_id, None) is not None
        if deleted:
            logger.info(f"Customer deleted: {customer_id}")
        return deleted

    async def find_high_credit_utilization(self, threshold_percent: float) -> list[Customer]:
        """ACTIVE customers filtered by their own utilization percentage."""
        threshold = utilization_threshold(threshold_percent)
        active = await self.find_by_status(CustomerStatus.ACTIVE)
        return [c for c in active if c.credit_utilization_percentage >= threshold]

    @staticmethod
    def _sorted(customers) -> list[Customer]:
        return [_copy(c) for c in sorted(customers, key=lambda c: c.created_at, reverse=True)]
