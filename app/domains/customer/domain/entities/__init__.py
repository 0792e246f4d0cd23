"""
Customer Domain Entities
"""

from .customer import Customer

__all__ = ["Customer"]
