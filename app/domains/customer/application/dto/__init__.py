"""
Customer Application DTOs
"""

from .customer_dto import CustomerCreateDTO, CustomerDTO

__all__ = [
    "CustomerCreateDTO",
    "CustomerDTO",
]
