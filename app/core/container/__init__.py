"""
Dependency Injection Container

Wires repositories and use cases for the customer bounded context.
"""

from .customer import CustomerContainer

__all__ = ["CustomerContainer"]
