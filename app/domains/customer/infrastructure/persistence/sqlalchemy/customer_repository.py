"""
Customer Repository Implementation

SQLAlchemy implementation of ICustomerRepository.
"""

import logging
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain import (
    Address,
    ConcurrencyException,
    DuplicateEntityException,
    Email,
    EntityNotFoundException,
    Money,
    domain_event_publisher,
    generate_uuid_str,
)
from app.domains.customer.application.ports import ICustomerRepository, IDomainEventPublisher
from app.domains.customer.domain.entities.customer import Customer
from app.domains.customer.domain.value_objects import CustomerStatus, utilization_threshold

from .models import CustomerModel

logger = logging.getLogger(__name__)


class SQLAlchemyCustomerRepository(ICustomerRepository):
    """
    SQLAlchemy implementation of customer repository.

    Every save runs in its own transaction: insert or version-checked update,
    commit, then publish the events the aggregate recorded. A failed write is
    rolled back and publishes nothing, so the events stay pending.
    """

    def __init__(self, session: AsyncSession, event_publisher: IDomainEventPublisher | None = None):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
            event_publisher: Receives events after a successful save
        """
        self.session = session
        self.event_publisher = event_publisher or domain_event_publisher

    # Writes

    async def save(self, customer: Customer) -> Customer:
        """Insert or update a customer and publish its pending events."""
        if customer.id is None:
            await self._insert(customer)
        else:
            await self._update(customer)

        # Events recorded before the first save carry no aggregate id yet
        events = [e if e.aggregate_id else replace(e, aggregate_id=customer.id) for e in customer.pull_events()]
        if events:
            await self.event_publisher.publish_all(events)
        return customer

    async def _insert(self, customer: Customer) -> None:
        new_id = generate_uuid_str()
        model = CustomerModel(id=new_id, version=1, **self._to_values(customer))
        self.session.add(model)

        await self._commit(customer)

        customer.id = new_id
        customer.version = 1
        logger.info(f"Customer created: {new_id} ({customer.email})")

    async def _update(self, customer: Customer) -> None:
        expected = customer.version
        stmt = (
            update(CustomerModel)
            .where(CustomerModel.id == customer.id, CustomerModel.version == expected)
            .values(version=expected + 1, **self._to_values(customer))
            .execution_options(synchronize_session=False)
        )

        try:
            result = await self.session.execute(stmt)
        except Exception:
            await self.session.rollback()
            raise

        if result.rowcount == 0:
            await self.session.rollback()
            actual = await self.session.scalar(select(CustomerModel.version).where(CustomerModel.id == customer.id))
            if actual is None:
                raise EntityNotFoundException("Customer", customer.id)
            logger.warning(f"Concurrent modification of customer {customer.id}: expected v{expected}, found v{actual}")
            raise ConcurrencyException("Customer", customer.id, expected, actual)

        await self._commit(customer)

        customer.version = expected + 1
        logger.debug(f"Customer updated: {customer.id} (v{customer.version})")

    async def _commit(self, customer: Customer) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if _is_duplicate_email(e):
                logger.warning(f"Duplicate customer email: {customer.email}")
                raise DuplicateEntityException("Customer", "email", str(customer.email)) from e
            logger.error(f"Integrity error saving customer {customer.email}: {e}")
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error saving customer {customer.email}: {e}")
            raise

    async def delete_by_id(self, customer_id: str) -> bool:
        """Delete a customer; True if one was deleted."""
        try:
            result = await self.session.execute(
                delete(CustomerModel)
                .where(CustomerModel.id == customer_id)
                .execution_options(synchronize_session=False)
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Customer deleted: {customer_id}")
        return deleted

    # Reads

    async def find_by_id(self, customer_id: str) -> Customer | None:
        """Find customer by ID."""
        model = await self._first(select(CustomerModel).where(CustomerModel.id == customer_id))
        return self._to_entity(model) if model else None

    async def find_by_email(self, email: Email | str) -> Customer | None:
        """Find customer by (normalized) email."""
        model = await self._first(select(CustomerModel).where(CustomerModel.email == self._normalize_email(email)))
        return self._to_entity(model) if model else None

    async def exists_by_email(self, email: Email | str) -> bool:
        """Check whether a customer uses this email."""
        found = await self.session.scalar(
            select(CustomerModel.id).where(CustomerModel.email == self._normalize_email(email)).limit(1)
        )
        return found is not None

    async def find_by_status(self, status: CustomerStatus) -> list[Customer]:
        """Find customers with the given status, newest first."""
        return await self._all(
            select(CustomerModel).where(CustomerModel.status == status).order_by(CustomerModel.created_at.desc())
        )

    async def find_all_active(self) -> list[Customer]:
        """Find ACTIVE customers with a positive credit limit."""
        return await self._all(
            select(CustomerModel)
            .where(CustomerModel.status == CustomerStatus.ACTIVE, CustomerModel.credit_limit_amount > 0)
            .order_by(CustomerModel.created_at.desc())
        )

    async def find_all(self) -> list[Customer]:
        """Find every customer, newest first."""
        return await self._all(select(CustomerModel).order_by(CustomerModel.created_at.desc()))

    async def count_by_status(self, status: CustomerStatus) -> int:
        """Count customers with the given status."""
        count = await self.session.scalar(
            select(func.count()).select_from(CustomerModel).where(CustomerModel.status == status)
        )
        return count or 0

    async def find_high_credit_utilization(self, threshold_percent: float) -> list[Customer]:
        """
        Find ACTIVE customers whose utilization is >= threshold_percent.

        Utilization is compared in the database as
        (limit - available) * 100 >= limit * threshold. Customers with a zero
        limit have 0% utilization, which only meets a threshold <= 0.

        Raises:
            ValidationException: threshold_percent is not a finite number
        """
        threshold = utilization_threshold(threshold_percent)
        stmt = select(CustomerModel).where(CustomerModel.status == CustomerStatus.ACTIVE)

        if threshold > 0:
            used = CustomerModel.credit_limit_amount - CustomerModel.available_credit_amount
            stmt = stmt.where(
                CustomerModel.credit_limit_amount > 0,
                used * 100 >= CustomerModel.credit_limit_amount * threshold,
            )

        return await self._all(stmt.order_by(CustomerModel.created_at.desc()))

    # Query helpers

    async def _first(self, stmt) -> CustomerModel | None:
        result = await self.session.execute(stmt.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def _all(self, stmt) -> list[Customer]:
        result = await self.session.execute(stmt.execution_options(populate_existing=True))
        return [self._to_entity(model) for model in result.scalars().all()]

    @staticmethod
    def _normalize_email(email: Email | str) -> str:
        if isinstance(email, Email):
            return email.value
        return email.strip().lower()

    # Mapping methods

    def _to_entity(self, model: CustomerModel) -> Customer:
        """Convert model to a Customer aggregate (no events recorded)."""
        return Customer.reconstitute(
            id=model.id,
            name=model.name,
            email=Email(model.email),
            address=Address(
                street=model.street,
                city=model.city,
                state=model.state,
                postal_code=model.postal_code,
                country=model.country,
            ),
            credit_limit=Money.of(model.credit_limit_amount, model.currency),
            available_credit=Money.of(model.available_credit_amount, model.currency),
            status=model.status,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
            version=model.version,
        )

    def _to_values(self, customer: Customer) -> dict[str, Any]:
        """Column values for a customer's durable state."""
        address = customer.address
        return {
            "name": customer.name,
            "email": customer.email.value,
            "street": address.street,
            "city": address.city,
            "state": address.state,
            "postal_code": address.postal_code,
            "country": address.country,
            "credit_limit_amount": customer.credit_limit.amount,
            "available_credit_amount": customer.available_credit.amount,
            "currency": customer.credit_limit.currency,
            "status": customer.status,
            "created_at": customer.created_at,
            "updated_at": customer.updated_at,
        }


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _is_duplicate_email(error: IntegrityError) -> bool:
    # PostgreSQL names the index; SQLite names the column
    message = str(error.orig).lower()
    if "unique constraint" not in message and "duplicate key" not in message:
        return False
    return "uq_customers_email" in message or "customers.email" in message
