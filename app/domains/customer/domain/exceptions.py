"""
Customer Domain Exceptions

State errors and business-rule violations raised by the Customer aggregate.
Validation errors (amounts, currencies, email, name) live in app.core.domain.
"""

from app.core.domain.exceptions import BusinessRuleViolationException, InvalidOperationException
from app.core.domain.value_objects import Money


class InactiveAccountException(InvalidOperationException):
    """Raised when credit is used on a customer that is not ACTIVE."""

    def __init__(self, operation: str, current_state: str):
        super().__init__(
            operation=operation,
            current_state=current_state,
            message=f"Cannot {operation.replace('_', ' ')} for {current_state} customer",
            code="INACTIVE_ACCOUNT",
        )


class InsufficientCreditException(BusinessRuleViolationException):
    """Raised when the requested amount exceeds the available credit."""

    def __init__(self, requested: Money, available: Money):
        self.requested = requested
        self.available = available
        super().__init__(
            rule="Amount must not exceed available credit",
            message=f"Insufficient credit. Available: {available.format()}, Requested: {requested.format()}",
            details={"requested": str(requested.amount), "available": str(available.amount)},
            code="INSUFFICIENT_CREDIT",
        )


class OverRestorationException(BusinessRuleViolationException):
    """Raised when restored credit would exceed the credit limit."""

    def __init__(self, credit_limit: Money, available: Money, restore: Money):
        super().__init__(
            rule="Available credit must not exceed credit limit",
            message=(
                f"Cannot restore more credit than limit. Limit: {credit_limit.format()}, "
                f"Current: {available.format()}, Restore: {restore.format()}"
            ),
            details={
                "credit_limit": str(credit_limit.amount),
                "available_credit": str(available.amount),
                "restore": str(restore.amount),
            },
            code="OVER_RESTORATION",
        )


class BelowUsedAmountException(BusinessRuleViolationException):
    """Raised when a limit decrease would leave the limit below the used credit."""

    def __init__(self, new_limit: Money, used: Money):
        super().__init__(
            rule="Credit limit must not be below used credit",
            message=f"Cannot reduce limit below current usage: {used.format()} (new limit {new_limit.format()})",
            details={"new_limit": str(new_limit.amount), "used_credit": str(used.amount)},
            code="BELOW_USED_AMOUNT",
        )


class BelowZeroException(BusinessRuleViolationException):
    """Raised when a limit decrease is larger than the limit itself."""

    def __init__(self, credit_limit: Money, decrease: Money):
        super().__init__(
            rule="Credit limit must not be negative",
            message=f"Cannot decrease credit limit below zero. Limit: {credit_limit.format()}",
            details={"credit_limit": str(credit_limit.amount), "decrease": str(decrease.amount)},
            code="BELOW_ZERO",
        )
