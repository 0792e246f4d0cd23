"""
Domain Layer - Core DDD building blocks

This module provides base classes for Domain-Driven Design:
- Entities: Objects with identity and lifecycle
- Value Objects: Immutable objects compared by value
- Events: Domain events for communication
- Exceptions: Domain-specific error handling
"""

from app.core.domain.entities import (
    AggregateRoot,
    Entity,
    generate_uuid_str,
    utc_now,
)
from app.core.domain.events import (
    DomainEvent,
    DomainEventPublisher,
    domain_event_publisher,
    event_handler,
)
from app.core.domain.exceptions import (
    BusinessRuleViolationException,
    ConcurrencyException,
    CurrencyMismatchException,
    DomainException,
    DuplicateEntityException,
    EntityNotFoundException,
    InvalidAmountException,
    InvalidCurrencyException,
    InvalidEmailFormatException,
    InvalidNameException,
    InvalidOperationException,
    InvalidQuantityException,
    NegativeResultException,
    ValidationException,
)
from app.core.domain.value_objects import (
    DEFAULT_COUNTRY,
    DEFAULT_CURRENCY,
    Address,
    Email,
    Money,
    StatusEnum,
    ValueObject,
)

__all__ = [
    # Entities
    "Entity",
    "AggregateRoot",
    "generate_uuid_str",
    "utc_now",
    # Value Objects
    "ValueObject",
    "Money",
    "Email",
    "Address",
    "StatusEnum",
    "DEFAULT_CURRENCY",
    "DEFAULT_COUNTRY",
    # Events
    "DomainEvent",
    "DomainEventPublisher",
    "domain_event_publisher",
    "event_handler",
    # Exceptions
    "DomainException",
    "ValidationException",
    "InvalidAmountException",
    "InvalidCurrencyException",
    "CurrencyMismatchException",
    "NegativeResultException",
    "InvalidQuantityException",
    "InvalidEmailFormatException",
    "InvalidNameException",
    "InvalidOperationException",
    "BusinessRuleViolationException",
    "EntityNotFoundException",
    "ConcurrencyException",
    "DuplicateEntityException",
]
