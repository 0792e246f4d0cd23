"""
Customer Domain SQLAlchemy Models

Database model for Customer aggregate persistence.
Uses SQLAlchemy 2.0 style with Mapped[] type annotations.

Money is stored as an unscaled NUMERIC amount column per value plus one
shared currency column. Pending domain events are never persisted.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Enum as SQLEnum, Index, Integer, Numeric, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.domain.value_objects import DEFAULT_COUNTRY, DEFAULT_CURRENCY
from app.domains.customer.domain.value_objects.customer_status import CustomerStatus
from app.models.db.base import Base


class CustomerModel(Base):
    """SQLAlchemy model for the Customer aggregate."""

    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    # Identity data
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)

    # Address
    street: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str | None] = mapped_column(String(255), nullable=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    postal_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    country: Mapped[str] = mapped_column(String(100), nullable=False, default=DEFAULT_COUNTRY)

    # Credit account
    credit_limit_amount: Mapped[Decimal] = mapped_column(Numeric(), nullable=False, default=0)
    available_credit_amount: Mapped[Decimal] = mapped_column(Numeric(), nullable=False, default=0)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default=DEFAULT_CURRENCY)
    status: Mapped[CustomerStatus] = mapped_column(
        SQLEnum(CustomerStatus, name="customer_status"),
        default=CustomerStatus.ACTIVE,
        nullable=False,
    )

    # Optimistic concurrency
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("uq_customers_email", "email", unique=True),
        Index("idx_customers_status", "status"),
        Index("idx_customers_created_at", text("created_at DESC")),
        Index("idx_customers_status_created_at", "status", "created_at"),
        Index("idx_customers_credit_limit", "credit_limit_amount"),
    )

    def __repr__(self) -> str:
        return f"<CustomerModel(id='{self.id}', email='{self.email}', status={self.status})>"
