"""
Integration tests for the SQLAlchemy customer repository.

Runs against an in-memory SQLite database (aiosqlite) by default; set
TEST_DATABASE_URL to run against PostgreSQL.
"""

from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.core.domain import (
    Address,
    ConcurrencyException,
    DuplicateEntityException,
    Email,
    EntityNotFoundException,
    Money,
    ValidationException,
)
from app.domains.customer.domain import Customer, CustomerCreated, CustomerStatus
from app.domains.customer.infrastructure.persistence.sqlalchemy import (
    CustomerModel,
    SQLAlchemyCustomerRepository,
)


# ============================================================================
# FIXTURES
# ============================================================================


@pytest_asyncio.fixture
async def repository(db_session, event_publisher) -> SQLAlchemyCustomerRepository:
    return SQLAlchemyCustomerRepository(db_session, event_publisher=event_publisher)


async def save_with_utilization(repository, make_customer, email, used, status=CustomerStatus.ACTIVE) -> Customer:
    customer = make_customer(email=email, credit_limit=1000)
    if used:
        customer.use_credit(Money.of(used))
    customer.set_status(status)
    return await repository.save(customer)


# ============================================================================
# Save
# ============================================================================


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
async def test_insert_and_load_round_trip(repository, sample_customer):
    """Test that every durable field survives a save/load cycle."""
    # Arrange
    sample_customer.use_credit(Money.of("250.50"))

    # Act
    saved = await repository.save(sample_customer)
    loaded = await repository.find_by_id(saved.id)

    # Assert
    assert loaded is not None
    assert loaded is not saved
    assert loaded.id == saved.id
    assert loaded.version == 1
    assert loaded.name == "Homer Simpson"
    assert loaded.email == Email("homer@example.com")
    assert loaded.address == sample_customer.address
    assert loaded.credit_limit == Money.of(1000)
    assert loaded.available_credit == Money.of("749.50")
    assert loaded.status == CustomerStatus.ACTIVE
    assert loaded.created_at == sample_customer.created_at
    assert loaded.updated_at == sample_customer.updated_at
    assert loaded.pull_events() == []


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
async def test_email_is_stored_normalized(repository, db_session, make_customer):
    await repository.save(make_customer(email="Mixed.Case@Example.COM"))

    stored = await db_session.scalar(select(CustomerModel.email))

    assert stored == "mixed.case@example.com"


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
async def test_save_publishes_after_commit(repository, event_publisher, sample_customer):
    await repository.save(sample_customer)

    assert len(event_publisher.published) == 1
    event = event_publisher.published[0]
    assert isinstance(event, CustomerCreated)
    assert event.aggregate_id == sample_customer.id
    assert sample_customer.get_domain_events() == []


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
async def test_update_persists_changes_and_bumps_version(repository, sample_customer):
    await repository.save(sample_customer)
    loaded = await repository.find_by_id(sample_customer.id)

    loaded.use_credit(Money.of(300))
    loaded.suspend()
    await repository.save(loaded)

    reloaded = await repository.find_by_id(sample_customer.id)
    assert reloaded.version == 2
    assert reloaded.available_credit == Money.of(700)
    assert reloaded.status == CustomerStatus.SUSPENDED


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
async def test_stale_update_raises_concurrency(repository, sample_customer):
    """Two writers load v1; the second save loses."""
    await repository.save(sample_customer)
    first = await repository.find_by_id(sample_customer.id)
    second = await repository.find_by_id(sample_customer.id)

    first.use_credit(Money.of(100))
    await repository.save(first)
    second.use_credit(Money.of(200))

    with pytest.raises(ConcurrencyException) as exc_info:
        await repository.save(second)

    assert exc_info.value.expected_version == 1
    assert exc_info.value.actual_version == 2
    assert second.version == 1

    reloaded = await repository.find_by_id(sample_customer.id)
    assert reloaded.available_credit == Money.of(900)


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
async def test_update_of_deleted_customer_raises_not_found(repository, sample_customer):
    await repository.save(sample_customer)
    loaded = await repository.find_by_id(sample_customer.id)
    await repository.delete_by_id(sample_customer.id)

    loaded.use_credit(Money.of(1))

    with pytest.raises(EntityNotFoundException):
        await repository.save(loaded)


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
async def test_duplicate_email_publishes_nothing(repository, event_publisher, make_customer):
    """A failed write keeps the events pending on the aggregate."""
    await repository.save(make_customer(email="dup@example.com"))
    duplicate = make_customer(email="DUP@example.com", name="Other")

    with pytest.raises(DuplicateEntityException) as exc_info:
        await repository.save(duplicate)

    assert exc_info.value.field == "email"
    assert duplicate.id is None
    assert len(duplicate.get_domain_events()) == 1
    assert len(event_publisher.published) == 1

    # Session is usable after the rollback
    assert await repository.count_by_status(CustomerStatus.ACTIVE) == 1


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
async def test_other_integrity_errors_propagate_unchanged(
    repository, db_session, event_publisher, make_customer, monkeypatch
):
    """A primary key clash is a store error, not a duplicate email."""
    existing = await repository.save(make_customer(email="first@example.com"))
    db_session.expunge_all()
    monkeypatch.setattr(
        "app.domains.customer.infrastructure.persistence.sqlalchemy.customer_repository.generate_uuid_str",
        lambda: existing.id,
    )
    clashing = make_customer(email="second@example.com")

    with pytest.raises(IntegrityError):
        await repository.save(clashing)

    assert clashing.id is None
    assert len(clashing.get_domain_events()) == 1
    assert len(event_publisher.published) == 1
    assert await repository.exists_by_email("second@example.com") is False


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
async def test_save_with_empty_address(repository, event_publisher):
    """Street, city and postal code are optional at the aggregate level."""
    customer = Customer.create("Ana", Email("ana@example.com"), Address(None, None, None, None), Money.of(1000))

    await repository.save(customer)
    loaded = await repository.find_by_id(customer.id)

    assert loaded.address == customer.address
    assert loaded.address.street is None
    assert loaded.address.city is None
    assert loaded.address.postal_code is None
    assert loaded.address.country == customer.address.country
    assert len(event_publisher.published) == 1


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
async def test_amounts_keep_full_precision(repository, make_customer):
    customer = make_customer(email="precise@example.com", credit_limit="1000.123456")
    customer.use_credit(Money.of("0.1"))

    await repository.save(customer)
    loaded = await repository.find_by_id(customer.id)

    assert loaded.credit_limit == customer.credit_limit
    assert loaded.available_credit == Money.of("1000.023456")
    assert loaded.used_credit == Money.of("0.1")


# ============================================================================
# Queries
# ============================================================================


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_by_email(repository, sample_customer):
    await repository.save(sample_customer)

    assert (await repository.find_by_email(" HOMER@Example.com ")) == sample_customer
    assert (await repository.find_by_email(Email("homer@example.com"))) == sample_customer
    assert await repository.find_by_email("nobody@example.com") is None
    assert await repository.exists_by_email("homer@example.com") is True
    assert await repository.exists_by_email("nobody@example.com") is False


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
async def test_status_queries(repository, make_customer):
    await save_with_utilization(repository, make_customer, "a@example.com", 0)
    await save_with_utilization(repository, make_customer, "b@example.com", 0, CustomerStatus.INACTIVE)
    await save_with_utilization(repository, make_customer, "c@example.com", 0, CustomerStatus.INACTIVE)

    inactive = await repository.find_by_status(CustomerStatus.INACTIVE)

    assert {c.email.value for c in inactive} == {"b@example.com", "c@example.com"}
    assert await repository.count_by_status(CustomerStatus.INACTIVE) == 2
    assert await repository.count_by_status(CustomerStatus.SUSPENDED) == 0
    assert len(await repository.find_all()) == 3


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_all_active_requires_positive_limit(repository, make_customer):
    await repository.save(make_customer(email="funded@example.com", credit_limit=100))
    await repository.save(make_customer(email="zero@example.com", credit_limit=0))
    await save_with_utilization(repository, make_customer, "off@example.com", 0, CustomerStatus.SUSPENDED)

    active = await repository.find_all_active()

    assert [c.email.value for c in active] == ["funded@example.com"]


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
async def test_delete_by_id(repository, sample_customer):
    await repository.save(sample_customer)

    assert await repository.delete_by_id(sample_customer.id) is True
    assert await repository.delete_by_id(sample_customer.id) is False
    assert await repository.find_by_id(sample_customer.id) is None


# ============================================================================
# High Credit Utilization
# ============================================================================


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
async def test_high_utilization_returns_only_active_above_threshold(repository, make_customer):
    """5% and 30% ACTIVE plus 80% INACTIVE at 25% returns only the 30% one."""
    await save_with_utilization(repository, make_customer, "five@example.com", 50)
    await save_with_utilization(repository, make_customer, "thirty@example.com", 300)
    await save_with_utilization(repository, make_customer, "eighty@example.com", 800, CustomerStatus.INACTIVE)

    result = await repository.find_high_credit_utilization(25.0)

    assert [c.email.value for c in result] == ["thirty@example.com"]
    assert result[0].credit_utilization_percentage == 30.0


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
async def test_high_utilization_threshold_is_inclusive(repository, make_customer):
    await save_with_utilization(repository, make_customer, "thirty@example.com", 300)

    assert len(await repository.find_high_credit_utilization(30.0)) == 1
    assert len(await repository.find_high_credit_utilization(30.01)) == 0


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
async def test_high_utilization_zero_limit(repository, make_customer):
    """Zero-limit customers sit at 0% and only meet a threshold of 0."""
    zero = await repository.save(make_customer(email="zero@example.com", credit_limit=0))

    assert await repository.find_high_credit_utilization(0.0) == [zero]
    assert await repository.find_high_credit_utilization(0.01) == []


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
async def test_amounts_keep_cents(repository, make_customer):
    customer = make_customer(email="cents@example.com", credit_limit="1234.56")
    customer.use_credit(Money.of("0.56"))

    await repository.save(customer)
    loaded = await repository.find_by_id(customer.id)

    assert loaded.credit_limit.amount == Decimal("1234.56")
    assert loaded.available_credit.amount == Decimal("1234.00")


@pytest.mark.integration
@pytest.mark.repository
@pytest.mark.asyncio
@pytest.mark.parametrize("threshold", [float("nan"), float("inf"), float("-inf")])
async def test_high_utilization_rejects_non_finite_threshold(repository, sample_customer, threshold):
    await repository.save(sample_customer)

    with pytest.raises(ValidationException) as exc_info:
        await repository.find_high_credit_utilization(threshold)

    assert exc_info.value.field == "threshold_percent"
