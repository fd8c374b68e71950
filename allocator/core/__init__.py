"""
Core allocator functionality.

Contains the allocation algorithm and its data models.
"""

from allocator.core.allocator import PaymentAllocator, allocate, percent_of
from allocator.core.models import AllocationCaps, AllocationResult

__all__ = [
    "PaymentAllocator",
    "allocate",
    "percent_of",
    "AllocationCaps",
    "AllocationResult",
]
