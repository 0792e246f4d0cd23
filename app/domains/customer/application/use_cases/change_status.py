"""
Change Customer Status Use Case
"""

from dataclasses import dataclass

from app.domains.customer.domain.value_objects.customer_status import CustomerStatus

from .manage_credit import CustomerCommandUseCase
from .responses import CustomerResponse


@dataclass
class ChangeCustomerStatusRequest:
    """Request for moving a customer to another status"""

    customer_id: str
    status: CustomerStatus | str


class ChangeCustomerStatusUseCase(CustomerCommandUseCase):
    """
    Activate, deactivate or suspend a customer.

    Unknown status strings come back as a VALIDATION_ERROR response.
    """

    operation = "change_status"

    async def execute(self, request: ChangeCustomerStatusRequest) -> CustomerResponse:
        return await self._apply(
            request.customer_id,
            lambda customer: customer.set_status(request.status),
        )
