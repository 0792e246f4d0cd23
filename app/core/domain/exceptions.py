"""
Domain Exceptions for Domain-Driven Design

These exceptions represent business rule violations and domain-specific errors.
They should be caught and translated to transport-level errors by the caller.

Kinds:
- ValidationException: malformed input, detected before any state mutation
- InvalidOperationException: operation not allowed in the current state
- BusinessRuleViolationException: rule violated, recoverable with a different amount
- Persistence errors: not found, duplicate, concurrency conflict
"""

from typing import Any


class DomainException(Exception):
    """
    Base exception for all domain-related errors.

    Provides a standardized way to communicate business rule violations.
    """

    def __init__(self, message: str, code: str | None = None, details: dict[str, Any] | None = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "INSUFFICIENT_CREDIT")
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__.upper()
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# ============================================================================
# Validation errors
# ============================================================================


class ValidationException(DomainException):
    """
    Raised when domain validation fails.

    Use for invalid entity states, value object creation failures, etc.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
        code: str | None = None,
    ):
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, code or "VALIDATION_ERROR", details)
        self.field = field


class InvalidAmountException(ValidationException):
    """Raised when a monetary amount cannot be parsed, is negative, or is not allowed."""

    def __init__(self, amount: Any, reason: str | None = None):
        self.amount = amount
        msg = reason or f"Invalid amount: {amount!r}"
        super().__init__(msg, field="amount", details={"amount": str(amount)}, code="INVALID_AMOUNT")


class InvalidCurrencyException(ValidationException):
    """Raised when a currency is not a 3-letter code."""

    def __init__(self, currency: Any):
        self.currency = currency
        super().__init__(
            f"Currency must be a 3-letter ISO code, got: {currency!r}",
            field="currency",
            details={"currency": str(currency)},
            code="INVALID_CURRENCY",
        )


class CurrencyMismatchException(ValidationException):
    """Raised when two Money values with different currencies are combined."""

    def __init__(self, operation: str, left: str, right: str):
        self.operation = operation
        self.left = left
        self.right = right
        super().__init__(
            f"Cannot {operation} different currencies: {left} and {right}",
            details={"operation": operation, "left": left, "right": right},
            code="CURRENCY_MISMATCH",
        )


class NegativeResultException(ValidationException):
    """Raised when a subtraction would produce a negative amount."""

    def __init__(self, minuend: Any, subtrahend: Any):
        super().__init__(
            f"Subtraction would result in negative amount: {minuend} - {subtrahend}",
            details={"minuend": str(minuend), "subtrahend": str(subtrahend)},
            code="NEGATIVE_RESULT",
        )


class InvalidQuantityException(ValidationException):
    """Raised when a multiplier is negative or not an integer."""

    def __init__(self, quantity: Any):
        self.quantity = quantity
        super().__init__(
            f"Quantity must be a non-negative integer, got: {quantity!r}",
            field="quantity",
            details={"quantity": str(quantity)},
            code="INVALID_QUANTITY",
        )


class InvalidEmailFormatException(ValidationException):
    """Raised when an email address is missing, blank or malformed."""

    def __init__(self, value: Any, reason: str | None = None):
        self.value = value
        super().__init__(
            reason or f"Invalid email format: {value!r}",
            field="email",
            details={"value": str(value)},
            code="INVALID_EMAIL_FORMAT",
        )


class InvalidNameException(ValidationException):
    """Raised when a name is missing or blank."""

    def __init__(self, value: Any = None):
        super().__init__("Name must not be blank", field="name", details={"value": str(value)}, code="INVALID_NAME")


# ============================================================================
# State errors
# ============================================================================


class InvalidOperationException(DomainException):
    """Raised when an operation is not valid in the current state."""

    def __init__(self, operation: str, current_state: str, message: str | None = None, code: str | None = None):
        self.operation = operation
        self.current_state = current_state
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        super().__init__(
            msg,
            code or "INVALID_OPERATION",
            {"operation": operation, "current_state": current_state},
        )


# ============================================================================
# Business rule violations
# ============================================================================


class BusinessRuleViolationException(DomainException):
    """
    Raised when a business rule is violated.

    Use for invariant violations, precondition failures, etc.
    """

    def __init__(
        self,
        rule: str,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        code: str | None = None,
    ):
        self.rule = rule
        msg = message or f"Business rule violated: {rule}"
        details = details or {}
        details["rule"] = rule
        super().__init__(msg, code or "BUSINESS_RULE_VIOLATION", details)


# ============================================================================
# Persistence errors
# ============================================================================


class EntityNotFoundException(DomainException):
    """
    Raised when an entity is not found.
    """

    def __init__(
        self,
        entity_type: str,
        entity_id: Any,
        message: str | None = None,
    ):
        self.entity_type = entity_type
        self.entity_id = entity_id
        msg = message or f"{entity_type} with ID {entity_id} not found"
        super().__init__(
            msg,
            "ENTITY_NOT_FOUND",
            {"entity_type": entity_type, "entity_id": str(entity_id)},
        )


class ConcurrencyException(DomainException):
    """Raised when there's a concurrency conflict (optimistic locking)."""

    def __init__(self, entity_type: str, entity_id: Any, expected_version: int, actual_version: int):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Concurrency conflict for {entity_type} {entity_id}. "
            f"Expected version {expected_version}, but found {actual_version}",
            "CONCURRENCY_CONFLICT",
            {
                "entity_type": entity_type,
                "entity_id": str(entity_id),
                "expected_version": expected_version,
                "actual_version": actual_version,
            },
        )


class DuplicateEntityException(DomainException):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: Any):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(
            f"{entity_type} with {field}='{value}' already exists",
            "DUPLICATE_ENTITY",
            {
                "entity_type": entity_type,
                "field": field,
                "value": str(value),
            },
        )
