"""
Customer Infrastructure - Event Handlers
"""

from .customer_event_handlers import handle_customer_created, register_customer_event_handlers

__all__ = [
    "handle_customer_created",
    "register_customer_event_handlers",
]
