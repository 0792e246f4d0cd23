"""
Customer Infrastructure - SQLAlchemy Persistence
"""

from .customer_repository import SQLAlchemyCustomerRepository
from .models import CustomerModel

__all__ = [
    "CustomerModel",
    "SQLAlchemyCustomerRepository",
]
