"""
Create Customer Use Case

Validates the flat input, builds the value objects and saves a new Customer.
"""

from app.config.settings import get_settings
from app.core.domain import DomainException, DuplicateEntityException, Email, Money
from app.core.shared.logger import get_service_logger
from app.domains.customer.application.dto.customer_dto import CustomerCreateDTO, CustomerDTO
from app.domains.customer.application.ports import ICustomerRepository
from app.domains.customer.domain.entities.customer import Customer

from .responses import CustomerResponse

logger = get_service_logger("create_customer")


class CreateCustomerUseCase:
    """
    Use case for creating a customer.

    Rejects an email that is already registered before touching the
    aggregate; the repository's unique constraint still guards the race.
    """

    def __init__(self, customer_repository: ICustomerRepository, default_currency: str | None = None):
        """
        Initialize use case.

        Args:
            customer_repository: Repository for customer persistence
            default_currency: Currency used when the request has none
        """
        self.customer_repo = customer_repository
        self.default_currency = default_currency or get_settings().DEFAULT_CURRENCY

    async def execute(self, request: CustomerCreateDTO) -> CustomerResponse:
        """
        Execute use case.

        Args:
            request: Validated creation input

        Returns:
            Response with the created customer or the domain error
        """
        try:
            email = Email(request.email)
            if await self.customer_repo.exists_by_email(email):
                raise DuplicateEntityException("Customer", "email", str(email))

            customer = Customer.create(
                name=request.name,
                email=email,
                address=request.to_address(),
                credit_limit=Money.of(request.credit_limit, request.currency or self.default_currency),
            )
            saved = await self.customer_repo.save(customer)

            logger.info("Customer created", customer_id=saved.id, email=str(saved.email))
            return CustomerResponse.ok(CustomerDTO.from_entity(saved))

        except DomainException as e:
            logger.warning(f"Customer creation rejected: {e.message}", error_code=e.code)
            return CustomerResponse.failure(e)
