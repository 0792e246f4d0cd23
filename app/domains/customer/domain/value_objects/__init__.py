"""
Customer Domain Value Objects
"""

from .customer_status import CustomerStatus
from .utilization import utilization_threshold

__all__ = ["CustomerStatus", "utilization_threshold"]
