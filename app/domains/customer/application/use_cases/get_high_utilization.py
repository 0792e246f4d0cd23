"""
Get High Utilization Customers Use Case

Lists ACTIVE customers whose credit utilization is at or above a threshold.
"""

from dataclasses import dataclass

from app.config.settings import get_settings
from app.core.shared.logger import get_service_logger
from app.domains.customer.application.dto.customer_dto import CustomerDTO
from app.domains.customer.application.ports import ICustomerRepository

from .responses import CustomerListResponse

logger = get_service_logger("get_high_utilization")


@dataclass
class GetHighUtilizationRequest:
    """Threshold in percent; None uses HIGH_UTILIZATION_THRESHOLD"""

    threshold_percent: float | None = None


class GetHighUtilizationCustomersUseCase:
    """Use case for the credit utilization report."""

    def __init__(self, customer_repository: ICustomerRepository):
        self.customer_repo = customer_repository

    async def execute(self, request: GetHighUtilizationRequest | None = None) -> CustomerListResponse:
        threshold = request.threshold_percent if request else None
        if threshold is None:
            threshold = get_settings().HIGH_UTILIZATION_THRESHOLD

        customers = await self.customer_repo.find_high_credit_utilization(threshold)
        logger.info(f"Found {len(customers)} customers at or above {threshold}% utilization")

        return CustomerListResponse(
            customers=[CustomerDTO.from_entity(c) for c in customers],
            total=len(customers),
        )
