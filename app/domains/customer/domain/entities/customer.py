"""
Customer Entity

Aggregate root for a customer and its credit account.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from app.core.domain import (
    AggregateRoot,
    Address,
    CurrencyMismatchException,
    Email,
    InvalidAmountException,
    InvalidNameException,
    Money,
    ValidationException,
    utc_now,
)

from ..events import CustomerCreated
from ..exceptions import (
    BelowUsedAmountException,
    BelowZeroException,
    InactiveAccountException,
    InsufficientCreditException,
    OverRestorationException,
)
from ..value_objects.customer_status import CustomerStatus


def _require(value: Any, expected: type, field_name: str) -> None:
    if not isinstance(value, expected):
        raise ValidationException(f"{field_name} must be a {expected.__name__}", field=field_name)


class Customer(AggregateRoot[str]):
    """
    Customer aggregate root.

    Owns the customer's identity data (name, email, address) and its credit
    account (credit limit, available credit, status). Credit state changes
    only through the methods below; every failed operation leaves the
    aggregate untouched.

    Invariants:
    - 0 <= available_credit <= credit_limit, both in the same currency
    - used_credit = credit_limit - available_credit
    - credit can only be used while the customer is ACTIVE

    New customers are built with Customer.create(); persisted ones are
    rebuilt with Customer.reconstitute().

    Example:
        ```python
        customer = Customer.create(
            "Ana",
            Email("ana@example.com"),
            Address.of("1 Main St", "Springfield", "IL", "62701"),
            Money.of(1000),
        )
        customer.use_credit(Money.of(300))
        customer.credit_utilization_percentage  # 30.0
        ```
    """

    def __init__(
        self,
        *,
        name: str,
        email: Email,
        address: Address,
        credit_limit: Money,
        available_credit: Money,
        status: CustomerStatus = CustomerStatus.ACTIVE,
        id: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        version: int = 0,
    ):
        _require(email, Email, "email")
        _require(address, Address, "address")
        _require(credit_limit, Money, "credit_limit")
        _require(available_credit, Money, "available_credit")
        _require(status, CustomerStatus, "status")
        if credit_limit.currency != available_credit.currency:
            raise CurrencyMismatchException("combine", credit_limit.currency, available_credit.currency)
        if available_credit.is_greater_than(credit_limit):
            raise ValidationException(
                "Available credit must not exceed credit limit",
                field="available_credit",
                details={"credit_limit": str(credit_limit.amount), "available_credit": str(available_credit.amount)},
            )

        now = utc_now()
        super().__init__(
            id=id,
            created_at=created_at or now,
            updated_at=updated_at or created_at or now,
            version=version,
        )
        self._name = name
        self._email = email
        self._address = address
        self._credit_limit = credit_limit
        self._available_credit = available_credit
        self._status = status

    # Factories

    @classmethod
    def create(cls, name: str, email: Email, address: Address, credit_limit: Money) -> "Customer":
        """
        Create a new ACTIVE customer with all of its credit available.

        Records a CustomerCreated event.
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidNameException(name)

        created_at = utc_now()
        customer = cls(
            name=name.strip(),
            email=email,
            address=address,
            credit_limit=credit_limit,
            available_credit=credit_limit,
            status=CustomerStatus.ACTIVE,
            created_at=created_at,
            updated_at=created_at,
        )
        customer._record_event(
            CustomerCreated(
                email=str(customer.email),
                name=customer.name,
                created_at=created_at,
            )
        )
        return customer

    @classmethod
    def reconstitute(
        cls,
        *,
        id: str | None,
        name: str,
        email: Email,
        address: Address,
        credit_limit: Money,
        available_credit: Money,
        status: CustomerStatus,
        created_at: datetime | None,
        updated_at: datetime | None,
        version: int = 0,
    ) -> "Customer":
        """Rebuild a persisted customer. Records no events."""
        return cls(
            id=id,
            name=name,
            email=email,
            address=address,
            credit_limit=credit_limit,
            available_credit=available_credit,
            status=status,
            created_at=created_at,
            updated_at=updated_at,
            version=version,
        )

    # Properties

    @property
    def name(self) -> str:
        return self._name

    @property
    def email(self) -> Email:
        return self._email

    @property
    def address(self) -> Address:
        return self._address

    @property
    def credit_limit(self) -> Money:
        return self._credit_limit

    @property
    def available_credit(self) -> Money:
        return self._available_credit

    @property
    def status(self) -> CustomerStatus:
        return self._status

    @property
    def is_active(self) -> bool:
        return self._status == CustomerStatus.ACTIVE

    @property
    def used_credit(self) -> Money:
        """Credit limit minus available credit."""
        return self._credit_limit.subtract(self._available_credit)

    @property
    def credit_utilization_percentage(self) -> float:
        """Used credit as a percentage of the limit; 0.0 when the limit is zero."""
        if self._credit_limit.is_zero():
            return 0.0
        ratio = self.used_credit.amount / self._credit_limit.amount * Decimal("100")
        return float(ratio)

    # Credit Operations

    def use_credit(self, amount: Money) -> None:
        """
        Use credit for a purchase.

        Raises:
            InactiveAccountException: customer is not ACTIVE
            InsufficientCreditException: amount exceeds available credit
        """
        _require(amount, Money, "amount")
        if not self._status.can_use_credit():
            raise InactiveAccountException("use_credit", self._status.value)

        if amount.is_greater_than(self._available_credit):
            raise InsufficientCreditException(amount, self._available_credit)

        self._available_credit = self._available_credit.subtract(amount)
        self.touch()

    def restore_credit(self, amount: Money) -> None:
        """
        Give credit back (e.g. after a returned purchase).

        Raises:
            OverRestorationException: available credit would exceed the limit
        """
        _require(amount, Money, "amount")
        new_available = self._available_credit.add(amount)

        if new_available.is_greater_than(self._credit_limit):
            raise OverRestorationException(self._credit_limit, self._available_credit, amount)

        self._available_credit = new_available
        self.touch()

    # Credit Limit Management

    def increase_credit_limit(self, amount: Money) -> None:
        """Raise both the credit limit and the available credit by `amount`."""
        _require(amount, Money, "amount")
        if amount.is_zero():
            raise InvalidAmountException(amount.amount, "Increase must be greater than zero")

        new_limit = self._credit_limit.add(amount)
        new_available = self._available_credit.add(amount)

        self._credit_limit = new_limit
        self._available_credit = new_available
        self.touch()

    def decrease_credit_limit(self, amount: Money) -> None:
        """
        Lower the credit limit by `amount`, keeping the used credit unchanged.

        The new limit may equal the used credit, leaving nothing available.

        Raises:
            BelowZeroException: amount is larger than the current limit
            BelowUsedAmountException: new limit would be below the used credit
        """
        _require(amount, Money, "amount")
        if amount.is_greater_than(self._credit_limit):
            raise BelowZeroException(self._credit_limit, amount)

        new_limit = self._credit_limit.subtract(amount)
        used = self.used_credit
        if not new_limit.is_greater_than_or_equal(used):
            raise BelowUsedAmountException(new_limit, used)

        self._credit_limit = new_limit
        self._available_credit = new_limit.subtract(used)
        self.touch()

    # Status

    def set_status(self, new_status: CustomerStatus | str) -> None:
        """Change the status. Setting the current status is a no-op."""
        if isinstance(new_status, str) and not isinstance(new_status, CustomerStatus):
            try:
                new_status = CustomerStatus.from_string(new_status)
            except ValueError as e:
                raise ValidationException(str(e), field="status") from e
        _require(new_status, CustomerStatus, "status")

        if self._status == new_status:
            return

        self._status = new_status
        self.touch()

    def activate(self) -> None:
        self.set_status(CustomerStatus.ACTIVE)

    def deactivate(self) -> None:
        self.set_status(CustomerStatus.INACTIVE)

    def suspend(self) -> None:
        self.set_status(CustomerStatus.SUSPENDED)

    # Queries

    def can_purchase(self, amount: Money) -> bool:
        """True if the customer is ACTIVE and `amount` fits in the available credit."""
        if not isinstance(amount, Money) or not self.is_active:
            return False
        try:
            return not amount.is_greater_than(self._available_credit)
        except CurrencyMismatchException:
            return False

    # Identity

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Customer):
            return False
        if self.id is not None and other.id is not None:
            return self.id == other.id
        return self._email == other._email

    def __hash__(self) -> int:
        # Changes once the customer is persisted and gets an id
        if self.id is not None:
            return hash((self.id, self._email))
        return hash(self._email)

    def __repr__(self) -> str:
        return (
            f"Customer(id={self.id!r}, name={self._name!r}, email={self._email.value!r}, "
            f"status={self._status.value}, available_credit={self._available_credit.format()}, "
            f"credit_limit={self._credit_limit.format()})"
        )

    # Serialization

    def to_summary_dict(self) -> dict[str, Any]:
        """Durable fields as a flat dictionary (pending events excluded)."""
        return {
            "id": self.id,
            "name": self._name,
            "email": str(self._email),
            "status": self._status.value,
            "credit_limit": float(self._credit_limit.amount),
            "available_credit": float(self._available_credit.amount),
            "used_credit": float(self.used_credit.amount),
            "currency": self._credit_limit.currency,
            "utilization_percentage": self.credit_utilization_percentage,
        }
