"""
Base Value Object Classes for Domain-Driven Design

Value Objects are immutable domain primitives that have no identity.
They are compared by their values, not by reference.
"""

import re
from abc import ABC
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Self

from app.core.domain.exceptions import (
    CurrencyMismatchException,
    InvalidAmountException,
    InvalidCurrencyException,
    InvalidEmailFormatException,
    InvalidQuantityException,
    NegativeResultException,
)

DEFAULT_CURRENCY = "USD"
DEFAULT_COUNTRY = "United States"


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for all value objects.

    Value objects are:
    - Immutable (frozen=True)
    - Compared by value (dataclass equality)
    - Have no identity
    """

    def __post_init__(self):
        """Override to add validation logic."""
        self._validate()

    def _validate(self) -> None:
        """Validate the value object. Override in subclasses."""
        pass


def _parse_amount(value: Any) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise InvalidAmountException(value)
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, (int, float)):
        parsed = Decimal(str(value))
    elif isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation as e:
            raise InvalidAmountException(value) from e
    else:
        raise InvalidAmountException(value)

    if not parsed.is_finite():
        raise InvalidAmountException(value, "Amount must be a finite number")
    if parsed < 0:
        raise InvalidAmountException(value, f"Amount must be non-negative, got: {value}")
    return parsed


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object for financial calculations.

    Represents a non-negative amount with currency. Every operation returns a
    new Money; binary operations require both operands in the same currency.

    Example:
        ```python
        limit = Money.of("1000", "USD")
        remaining = limit.subtract(Money.of(300))  # USD 700.00
        limit.is_greater_than_or_equal(remaining)  # True
        ```
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def _validate(self) -> None:
        """Validate money constraints."""
        object.__setattr__(self, "amount", _parse_amount(self.amount))
        if not isinstance(self.currency, str):
            raise InvalidCurrencyException(self.currency)
        currency = self.currency.strip().upper()
        if len(currency) != 3 or not currency.isalpha():
            raise InvalidCurrencyException(self.currency)
        object.__setattr__(self, "currency", currency)

    @classmethod
    def of(cls, amount: Decimal | int | float | str, currency: str = DEFAULT_CURRENCY) -> "Money":
        """Create Money from a number or numeric string."""
        return cls(amount=amount, currency=currency)

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> "Money":
        """Create a zero Money value."""
        return cls(amount=Decimal("0"), currency=currency)

    def _ensure_same_currency(self, other: "Money", operation: str) -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchException(operation, self.currency, other.currency)

    def add(self, other: "Money") -> "Money":
        """Add two Money values (must be same currency)."""
        self._ensure_same_currency(other, "add")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def subtract(self, other: "Money") -> "Money":
        """Subtract Money (must be same currency, result must not be negative)."""
        self._ensure_same_currency(other, "subtract")
        result = self.amount - other.amount
        if result < 0:
            raise NegativeResultException(self.amount, other.amount)
        return Money(amount=result, currency=self.currency)

    def multiply(self, quantity: int) -> "Money":
        """Multiply by a non-negative integer quantity."""
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            raise InvalidQuantityException(quantity)
        return Money(amount=self.amount * quantity, currency=self.currency)

    def is_greater_than(self, other: "Money") -> bool:
        """Check if amount is strictly greater than other."""
        self._ensure_same_currency(other, "compare")
        return self.amount > other.amount

    def is_greater_than_or_equal(self, other: "Money") -> bool:
        """Check if amount is greater than or equal to other."""
        self._ensure_same_currency(other, "compare")
        return self.amount >= other.amount

    def is_zero(self) -> bool:
        """Check if amount is zero."""
        return self.amount == Decimal("0")

    def format(self) -> str:
        """Format for display: 'USD 100.00'."""
        return f"{self.currency} {self.amount.quantize(Decimal('0.01'), ROUND_HALF_UP)}"

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Money(amount={self.amount}, currency='{self.currency}')"


# Simplified address grammar: local@domain.tld, no whitespace
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")


@dataclass(frozen=True)
class Email(ValueObject):
    """
    Email address value object.

    Validates and normalizes email addresses (trimmed, lower-cased).
    """

    value: str

    def _validate(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidEmailFormatException(self.value, "Email must not be null")
        trimmed = self.value.strip()
        if not trimmed:
            raise InvalidEmailFormatException(self.value, "Email must not be blank")
        if not EMAIL_PATTERN.match(trimmed):
            raise InvalidEmailFormatException(trimmed)
        object.__setattr__(self, "value", trimmed.lower())

    @classmethod
    def of(cls, value: str) -> "Email":
        return cls(value=value)

    def get_domain(self) -> str:
        """Get email domain: 'user@example.com' -> 'example.com'."""
        return self.value.split("@", 1)[1]

    def get_local_part(self) -> str:
        """Get local part: 'user@example.com' -> 'user'."""
        return self.value.split("@", 1)[0]

    def belongs_to_domain(self, domain: str) -> bool:
        """Check if the email domain equals `domain`, ignoring case."""
        if not domain:
            return False
        return self.get_domain() == domain.strip().lower()

    def __str__(self) -> str:
        return self.value


def _clean(value: str | None) -> str | None:
    return value.strip() if value is not None else None


@dataclass(frozen=True)
class Address(ValueObject):
    """
    Physical address value object.

    Fields are trimmed; a blank state becomes None and a blank country falls
    back to DEFAULT_COUNTRY. Required-ness of street/city/postal code is
    enforced at the API boundary, not here.
    """

    street: str | None
    city: str | None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = DEFAULT_COUNTRY

    def _validate(self) -> None:
        object.__setattr__(self, "street", _clean(self.street))
        object.__setattr__(self, "city", _clean(self.city))
        object.__setattr__(self, "state", _clean(self.state) or None)
        object.__setattr__(self, "postal_code", _clean(self.postal_code))
        object.__setattr__(self, "country", _clean(self.country) or DEFAULT_COUNTRY)

    @classmethod
    def of(cls, street: str | None, city: str | None, state: str | None, postal_code: str | None) -> "Address":
        """Create an address in the default country."""
        return cls(street=street, city=city, state=state, postal_code=postal_code, country=DEFAULT_COUNTRY)

    def format(self) -> str:
        """Single-line address: '123 Main St, Springfield, IL 62701, United States'."""
        head = ", ".join(p for p in (self.street, self.city, self.state) if p)
        if self.postal_code:
            head = f"{head} {self.postal_code}" if head else self.postal_code
        return f"{head}, {self.country}" if head else self.country

    def is_in_country(self, country: str | None) -> bool:
        """Case-insensitive country check."""
        if country is None:
            return False
        return self.country.casefold() == country.strip().casefold()

    def __str__(self) -> str:
        return self.format()


class StatusEnum(str, Enum):
    """
    Base class for status enums.

    Provides common functionality for all status value objects.
    """

    @classmethod
    def values(cls) -> list[str]:
        """Get all possible values."""
        return [e.value for e in cls]

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create from string value (case-insensitive)."""
        for member in cls:
            if member.value.lower() == value.lower():
                return member
        raise ValueError(f"Invalid {cls.__name__}: {value}")
