"""
Customer Domain Layer

Contains the Customer aggregate, its status value object, events and
domain-specific exceptions.
"""

from .entities import Customer
from .events import CustomerCreated
from .exceptions import (
    BelowUsedAmountException,
    BelowZeroException,
    InactiveAccountException,
    InsufficientCreditException,
    OverRestorationException,
)
from .value_objects import CustomerStatus

__all__ = [
    # Entities
    "Customer",
    # Value Objects
    "CustomerStatus",
    # Events
    "CustomerCreated",
    # Exceptions
    "InactiveAccountException",
    "InsufficientCreditException",
    "OverRestorationException",
    "BelowUsedAmountException",
    "BelowZeroException",
]
