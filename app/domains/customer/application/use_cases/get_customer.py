"""
Get Customer Use Case
"""

from dataclasses import dataclass

from app.core.domain import DomainException, EntityNotFoundException, ValidationException
from app.core.shared.logger import get_service_logger
from app.domains.customer.application.dto.customer_dto import CustomerDTO
from app.domains.customer.application.ports import ICustomerRepository

from .responses import CustomerResponse

logger = get_service_logger("get_customer")


@dataclass
class GetCustomerRequest:
    """Look a customer up by id or by email (id wins when both are given)"""

    customer_id: str | None = None
    email: str | None = None


class GetCustomerUseCase:
    """Use case for reading a single customer."""

    def __init__(self, customer_repository: ICustomerRepository):
        self.customer_repo = customer_repository

    async def execute(self, request: GetCustomerRequest) -> CustomerResponse:
        try:
            if request.customer_id:
                customer = await self.customer_repo.find_by_id(request.customer_id)
                lookup = request.customer_id
            elif request.email:
                customer = await self.customer_repo.find_by_email(request.email)
                lookup = request.email
            else:
                raise ValidationException("customer_id or email is required")

            if customer is None:
                raise EntityNotFoundException("Customer", lookup)

            return CustomerResponse.ok(CustomerDTO.from_entity(customer))

        except DomainException as e:
            logger.debug(f"Customer lookup failed: {e.message}")
            return CustomerResponse.failure(e)
