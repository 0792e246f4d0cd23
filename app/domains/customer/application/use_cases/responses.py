"""
Customer Use Case Responses
"""

from dataclasses import dataclass, field

from app.core.domain.exceptions import DomainException
from app.domains.customer.application.dto.customer_dto import CustomerDTO


@dataclass
class CustomerResponse:
    """Result of a use case that returns a single customer"""

    success: bool
    customer: CustomerDTO | None = None
    error: str | None = None
    error_code: str | None = None
    error_details: dict = field(default_factory=dict)

    @classmethod
    def ok(cls, customer: CustomerDTO) -> "CustomerResponse":
        return cls(success=True, customer=customer)

    @classmethod
    def failure(cls, exc: DomainException) -> "CustomerResponse":
        return cls(success=False, error=exc.message, error_code=exc.code, error_details=exc.details)


@dataclass
class CustomerListResponse:
    """Result of a use case that returns several customers"""

    customers: list[CustomerDTO]
    total: int
