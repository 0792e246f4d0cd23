"""
Unit tests for the in-memory customer repository.
"""

import pytest

from app.core.domain import (
    ConcurrencyException,
    DuplicateEntityException,
    Email,
    EntityNotFoundException,
    Money,
    ValidationException,
)
from app.domains.customer.application.ports import ICustomerRepository
from app.domains.customer.domain import Customer, CustomerCreated, CustomerStatus
from app.domains.customer.infrastructure.repositories import InMemoryCustomerRepository


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def repository(event_publisher) -> InMemoryCustomerRepository:
    return InMemoryCustomerRepository(event_publisher=event_publisher)


async def save_with_utilization(repository, make_customer, email, used, status=CustomerStatus.ACTIVE):
    customer = make_customer(email=email, credit_limit=1000)
    if used:
        customer.use_credit(Money.of(used))
    customer.set_status(status)
    return await repository.save(customer)


# ============================================================================
# Save
# ============================================================================


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_first_save_assigns_id_and_version(repository, sample_customer):
    saved = await repository.save(sample_customer)

    assert saved is sample_customer
    assert saved.id is not None
    assert len(saved.id) == 36
    assert saved.version == 1


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_save_publishes_events_once(repository, event_publisher, sample_customer):
    """Events are published after the write and drained from the aggregate."""
    await repository.save(sample_customer)

    assert len(event_publisher.published) == 1
    event = event_publisher.published[0]
    assert isinstance(event, CustomerCreated)
    assert event.aggregate_id == sample_customer.id
    assert sample_customer.get_domain_events() == []

    await repository.save(sample_customer)

    assert len(event_publisher.published) == 1


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_update_increments_version(repository, sample_customer):
    await repository.save(sample_customer)
    loaded = await repository.find_by_id(sample_customer.id)

    loaded.use_credit(Money.of(100))
    await repository.save(loaded)

    reloaded = await repository.find_by_id(sample_customer.id)
    assert reloaded.version == 2
    assert reloaded.available_credit == Money.of(900)


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_loaded_copies_are_detached(repository, sample_customer):
    await repository.save(sample_customer)
    loaded = await repository.find_by_id(sample_customer.id)

    loaded.use_credit(Money.of(100))

    reloaded = await repository.find_by_id(sample_customer.id)
    assert reloaded.available_credit == Money.of(1000)


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_stale_version_raises_concurrency(repository, sample_customer):
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
    reloaded = await repository.find_by_id(sample_customer.id)
    assert reloaded.available_credit == Money.of(900)


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_duplicate_email_rejected_and_events_kept(repository, event_publisher, make_customer):
    await repository.save(make_customer(email="dup@example.com"))
    duplicate = make_customer(email="DUP@example.com", name="Other")

    with pytest.raises(DuplicateEntityException):
        await repository.save(duplicate)

    assert duplicate.id is None
    assert len(duplicate.get_domain_events()) == 1
    assert len(event_publisher.published) == 1


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_save_unknown_id_raises_not_found(repository, sample_customer):
    sample_customer.id = "does-not-exist"

    with pytest.raises(EntityNotFoundException):
        await repository.save(sample_customer)


# ============================================================================
# Queries
# ============================================================================


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_by_email_normalizes(repository, sample_customer):
    await repository.save(sample_customer)

    assert (await repository.find_by_email("  HOMER@example.com ")) == sample_customer
    assert (await repository.find_by_email(Email("homer@example.com"))) == sample_customer
    assert await repository.exists_by_email("homer@EXAMPLE.com") is True
    assert await repository.exists_by_email("marge@example.com") is False
    assert await repository.find_by_email("marge@example.com") is None


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_status_queries(repository, make_customer):
    await save_with_utilization(repository, make_customer, "a@example.com", 0)
    await save_with_utilization(repository, make_customer, "b@example.com", 0, CustomerStatus.SUSPENDED)
    await save_with_utilization(repository, make_customer, "c@example.com", 0, CustomerStatus.SUSPENDED)

    suspended = await repository.find_by_status(CustomerStatus.SUSPENDED)

    assert {c.email.value for c in suspended} == {"b@example.com", "c@example.com"}
    assert await repository.count_by_status(CustomerStatus.SUSPENDED) == 2
    assert await repository.count_by_status(CustomerStatus.INACTIVE) == 0
    assert len(await repository.find_all()) == 3


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_all_active_skips_zero_limit(repository, make_customer):
    await repository.save(make_customer(email="funded@example.com", credit_limit=100))
    await repository.save(make_customer(email="zero@example.com", credit_limit=0))

    active = await repository.find_all_active()

    assert [c.email.value for c in active] == ["funded@example.com"]


@pytest.mark.unit
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


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_high_utilization_returns_only_active_above_threshold(repository, make_customer):
    """5% and 30% ACTIVE plus 80% INACTIVE at 25% returns only the 30% one."""
    await save_with_utilization(repository, make_customer, "five@example.com", 50)
    await save_with_utilization(repository, make_customer, "thirty@example.com", 300)
    await save_with_utilization(repository, make_customer, "eighty@example.com", 800, CustomerStatus.INACTIVE)

    result = await repository.find_high_credit_utilization(25.0)

    assert [c.email.value for c in result] == ["thirty@example.com"]


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_high_utilization_threshold_is_inclusive(repository, make_customer):
    await save_with_utilization(repository, make_customer, "thirty@example.com", 300)

    assert len(await repository.find_high_credit_utilization(30.0)) == 1
    assert len(await repository.find_high_credit_utilization(30.01)) == 0


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_high_utilization_zero_limit_only_meets_zero_threshold(repository, sample_address):
    zero = Customer.create("Zed", Email("zed@example.com"), sample_address, Money.zero())
    await repository.save(zero)

    assert await repository.find_high_credit_utilization(0.0) == [zero]
    assert await repository.find_high_credit_utilization(0.01) == []


@pytest.mark.unit
@pytest.mark.repository
def test_satisfies_repository_port(repository):
    assert isinstance(repository, ICustomerRepository)


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
@pytest.mark.parametrize("threshold", [float("nan"), float("inf"), float("-inf")])
async def test_high_utilization_rejects_non_finite_threshold(repository, sample_customer, threshold):
    await repository.save(sample_customer)

    with pytest.raises(ValidationException) as exc_info:
        await repository.find_high_credit_utilization(threshold)

    assert exc_info.value.field == "threshold_percent"


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_amounts_keep_full_precision(repository, make_customer):
    customer = make_customer(email="precise@example.com", credit_limit="1000.123456")
    customer.use_credit(Money.of("0.1"))

    await repository.save(customer)
    loaded = await repository.find_by_id(customer.id)

    assert loaded.credit_limit == customer.credit_limit
    assert loaded.available_credit == Money.of("1000.023456")
