"""
Customer Domain Event Handlers
"""

import logging

from app.core.domain.events import DomainEventPublisher, domain_event_publisher
from app.domains.customer.domain.events import CustomerCreated

logger = logging.getLogger(__name__)


async def handle_customer_created(event: CustomerCreated) -> None:
    """Log the welcome for a newly registered customer."""
    logger.info(f"Welcome {event.name}! Customer {event.aggregate_id} registered with email {event.email}")


def register_customer_event_handlers(publisher: DomainEventPublisher | None = None) -> DomainEventPublisher:
    """Subscribe the customer handlers once; returns the publisher used."""
    publisher = publisher or domain_event_publisher
    if handle_customer_created not in publisher.handlers_for(CustomerCreated):
        publisher.subscribe(CustomerCreated, handle_customer_created)
    return publisher
