"""
Customer Domain Container.

Single Responsibility: Wire all customer domain dependencies.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain.events import DomainEventPublisher, domain_event_publisher
from app.domains.customer.application.ports import ICustomerRepository
from app.domains.customer.application.use_cases import (
    AdjustCreditLimitUseCase,
    ChangeCustomerStatusUseCase,
    CreateCustomerUseCase,
    GetCustomerUseCase,
    GetHighUtilizationCustomersUseCase,
    RestoreCreditUseCase,
    UseCreditUseCase,
)
from app.domains.customer.infrastructure.events import register_customer_event_handlers
from app.domains.customer.infrastructure.persistence.sqlalchemy import SQLAlchemyCustomerRepository
from app.domains.customer.infrastructure.repositories import InMemoryCustomerRepository

logger = logging.getLogger(__name__)


class CustomerContainer:
    """
    Customer domain container.

    Single Responsibility: Create customer repositories and use cases.

    Use cases are built around one repository. Pass an AsyncSession to get
    the SQLAlchemy repository; without one the container keeps a single
    in-memory repository.
    """

    def __init__(self, event_publisher: DomainEventPublisher | None = None):
        """
        Initialize customer container.

        Args:
            event_publisher: Publisher for customer events (process-wide one by default)
        """
        self.event_publisher = register_customer_event_handlers(event_publisher or domain_event_publisher)
        self._in_memory_repository: InMemoryCustomerRepository | None = None
        logger.info("CustomerContainer initialized")

    # ==================== REPOSITORIES ====================

    def create_customer_repository(self, db: AsyncSession | None = None) -> ICustomerRepository:
        """Create Customer Repository (SQLAlchemy when a session is given)."""
        if db is not None:
            return SQLAlchemyCustomerRepository(session=db, event_publisher=self.event_publisher)
        if self._in_memory_repository is None:
            self._in_memory_repository = InMemoryCustomerRepository(event_publisher=self.event_publisher)
        return self._in_memory_repository

    # ==================== USE CASES ====================

    def create_create_customer_use_case(self, db: AsyncSession | None = None) -> CreateCustomerUseCase:
        return CreateCustomerUseCase(customer_repository=self.create_customer_repository(db))

    def create_use_credit_use_case(self, db: AsyncSession | None = None) -> UseCreditUseCase:
        return UseCreditUseCase(customer_repository=self.create_customer_repository(db))

    def create_restore_credit_use_case(self, db: AsyncSession | None = None) -> RestoreCreditUseCase:
        return RestoreCreditUseCase(customer_repository=self.create_customer_repository(db))

    def create_adjust_credit_limit_use_case(self, db: AsyncSession | None = None) -> AdjustCreditLimitUseCase:
        return AdjustCreditLimitUseCase(customer_repository=self.create_customer_repository(db))

    def create_change_status_use_case(self, db: AsyncSession | None = None) -> ChangeCustomerStatusUseCase:
        return ChangeCustomerStatusUseCase(customer_repository=self.create_customer_repository(db))

    def create_get_customer_use_case(self, db: AsyncSession | None = None) -> GetCustomerUseCase:
        return GetCustomerUseCase(customer_repository=self.create_customer_repository(db))

    def create_high_utilization_use_case(self, db: AsyncSession | None = None) -> GetHighUtilizationCustomersUseCase:
        """Create GetHighUtilizationCustomersUseCase with dependencies."""
        return GetHighUtilizationCustomersUseCase(customer_repository=self.create_customer_repository(db))
