"""
Credit Management Use Cases

Each use case follows the load -> mutate -> save sequence on a single
Customer. Domain errors become failed responses; everything else propagates.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Literal

from app.core.domain import DomainException, EntityNotFoundException, Money
from app.core.shared.logger import get_service_logger
from app.domains.customer.application.dto.customer_dto import CustomerDTO
from app.domains.customer.application.ports import ICustomerRepository
from app.domains.customer.domain.entities.customer import Customer

from .responses import CustomerResponse

logger = get_service_logger("manage_credit")


@dataclass
class CreditOperationRequest:
    """Request carrying an amount for a credit operation"""

    customer_id: str
    amount: Decimal | int | str
    currency: str | None = None  # Defaults to the customer's currency


@dataclass
class AdjustCreditLimitRequest(CreditOperationRequest):
    """Request for raising or lowering a credit limit"""

    direction: Literal["increase", "decrease"] = "increase"


class CustomerCommandUseCase:
    """Shared load -> mutate -> save flow."""

    operation = "customer_command"

    def __init__(self, customer_repository: ICustomerRepository):
        self.customer_repo = customer_repository

    async def _apply(self, customer_id: str, mutate: Callable[[Customer], None]) -> CustomerResponse:
        try:
            customer = await self.customer_repo.find_by_id(customer_id)
            if customer is None:
                raise EntityNotFoundException("Customer", customer_id)

            mutate(customer)
            saved = await self.customer_repo.save(customer)

            logger.info(f"{self.operation} applied", customer_id=customer_id)
            return CustomerResponse.ok(CustomerDTO.from_entity(saved))

        except DomainException as e:
            logger.warning(f"{self.operation} rejected: {e.message}", customer_id=customer_id, error_code=e.code)
            return CustomerResponse.failure(e)

    @staticmethod
    def _money(request: CreditOperationRequest, customer: Customer) -> Money:
        return Money.of(request.amount, request.currency or customer.credit_limit.currency)


class UseCreditUseCase(CustomerCommandUseCase):
    """Spend credit on an ACTIVE customer."""

    operation = "use_credit"

    async def execute(self, request: CreditOperationRequest) -> CustomerResponse:
        return await self._apply(
            request.customer_id,
            lambda customer: customer.use_credit(self._money(request, customer)),
        )


class RestoreCreditUseCase(CustomerCommandUseCase):
    """Give credit back to a customer."""

    operation = "restore_credit"

    async def execute(self, request: CreditOperationRequest) -> CustomerResponse:
        return await self._apply(
            request.customer_id,
            lambda customer: customer.restore_credit(self._money(request, customer)),
        )


class AdjustCreditLimitUseCase(CustomerCommandUseCase):
    """Raise or lower a customer's credit limit."""

    operation = "adjust_credit_limit"

    async def execute(self, request: AdjustCreditLimitRequest) -> CustomerResponse:
        def mutate(customer: Customer) -> None:
            amount = self._money(request, customer)
            if request.direction == "decrease":
                customer.decrease_credit_limit(amount)
            else:
                customer.increase_credit_limit(amount)

        return await self._apply(request.customer_id, mutate)
