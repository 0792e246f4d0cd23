"""
Customer Status Value Object
"""

from app.core.domain.value_objects import StatusEnum


class CustomerStatus(StatusEnum):
    """Lifecycle status of a customer account."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"

    def is_active(self) -> bool:
        return self == CustomerStatus.ACTIVE

    def can_use_credit(self) -> bool:
        """Only active accounts may spend credit."""
        return self == CustomerStatus.ACTIVE
