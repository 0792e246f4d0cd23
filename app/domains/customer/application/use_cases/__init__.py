"""
Customer Use Cases
"""

from .change_status import ChangeCustomerStatusRequest, ChangeCustomerStatusUseCase
from .create_customer import CreateCustomerUseCase
from .get_customer import GetCustomerRequest, GetCustomerUseCase
from .get_high_utilization import GetHighUtilizationCustomersUseCase, GetHighUtilizationRequest
from .manage_credit import (
    AdjustCreditLimitRequest,
    AdjustCreditLimitUseCase,
    CreditOperationRequest,
    RestoreCreditUseCase,
    UseCreditUseCase,
)
from .responses import CustomerListResponse, CustomerResponse

__all__ = [
    "AdjustCreditLimitRequest",
    "AdjustCreditLimitUseCase",
    "ChangeCustomerStatusRequest",
    "ChangeCustomerStatusUseCase",
    "CreateCustomerUseCase",
    "CreditOperationRequest",
    "CustomerListResponse",
    "CustomerResponse",
    "GetCustomerRequest",
    "GetCustomerUseCase",
    "GetHighUtilizationCustomersUseCase",
    "GetHighUtilizationRequest",
    "RestoreCreditUseCase",
    "UseCreditUseCase",
]
