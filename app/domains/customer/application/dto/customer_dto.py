"""
Customer Data Transfer Objects

Flat pydantic representations of the Customer aggregate used at the
application boundary. Pending domain events are never part of a DTO.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.domain.value_objects import DEFAULT_COUNTRY, Address, Email, Money
from app.domains.customer.domain.entities.customer import Customer
from app.domains.customer.domain.value_objects.customer_status import CustomerStatus


class CustomerCreateDTO(BaseModel):
    """Input for creating a customer. Required address parts are enforced here."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=320)
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str | None = None
    postal_code: str = Field(..., min_length=1)
    country: str | None = None
    credit_limit: Decimal = Field(..., ge=0)
    currency: str | None = Field(None, min_length=3, max_length=3)

    @field_validator("name", "street", "city", "postal_code")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    def to_address(self) -> Address:
        return Address(
            street=self.street,
            city=self.city,
            state=self.state,
            postal_code=self.postal_code,
            country=self.country,
        )


class CustomerDTO(BaseModel):
    """Flat customer record."""

    model_config = ConfigDict(use_enum_values=True)

    id: str | None = None
    name: str
    email: str
    street: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str = DEFAULT_COUNTRY
    credit_limit: Decimal
    available_credit: Decimal
    used_credit: Decimal = Decimal("0")
    currency: str = "USD"
    status: CustomerStatus = CustomerStatus.ACTIVE
    created_at: datetime | None = None
    updated_at: datetime | None = None
    version: int = 0

    @classmethod
    def from_entity(cls, customer: Customer) -> "CustomerDTO":
        """Map an aggregate to its flat representation."""
        address = customer.address
        return cls(
            id=customer.id,
            name=customer.name,
            email=str(customer.email),
            street=address.street,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            country=address.country,
            credit_limit=customer.credit_limit.amount,
            available_credit=customer.available_credit.amount,
            used_credit=customer.used_credit.amount,
            currency=customer.credit_limit.currency,
            status=customer.status,
            created_at=customer.created_at,
            updated_at=customer.updated_at,
            version=customer.version,
        )

    def to_entity(self) -> Customer:
        """Rebuild the aggregate from a flat record (no events are recorded)."""
        return Customer.reconstitute(
            id=self.id,
            name=self.name,
            email=Email(self.email),
            address=Address(
                street=self.street,
                city=self.city,
                state=self.state,
                postal_code=self.postal_code,
                country=self.country,
            ),
            credit_limit=Money.of(self.credit_limit, self.currency),
            available_credit=Money.of(self.available_credit, self.currency),
            status=CustomerStatus(self.status),
            created_at=self.created_at,
            updated_at=self.updated_at,
            version=self.version,
        )
