"""
Payment Distributor allocation algorithm.

Standalone package splitting a payment between treasury, team and a
two-tier referral chain, in integer lamports.

Example:
    >>> from allocator import allocate
    >>>
    >>> result = allocate(
    ...     10_000_000_000,
    ...     has_first_referrer=True,
    ...     has_second_referrer=True,
    ...     first_cap=200_000_000,
    ...     second_cap=50_000_000,
    ... )
    >>> print(result.team)
    4750000000
"""

from allocator.constants import (
    DEFAULT_FIRST_REFERRER_CAP,
    DEFAULT_SECOND_REFERRER_CAP,
    LAMPORTS_PER_SOL,
    U64_MAX,
)
from allocator.core.allocator import PaymentAllocator, allocate, percent_of
from allocator.core.models import AllocationCaps, AllocationResult
from allocator.exceptions import ArithmeticOverflowError, DistributionError
from allocator.utils import format_allocation, format_percentage, format_sol


__version__ = "1.0.0"
__all__ = [
    # Core
    "allocate",
    "percent_of",
    "PaymentAllocator",
    # Models
    "AllocationCaps",
    "AllocationResult",
    # Errors
    "ArithmeticOverflowError",
    "DistributionError",
    # Constants
    "LAMPORTS_PER_SOL",
    "DEFAULT_FIRST_REFERRER_CAP",
    "DEFAULT_SECOND_REFERRER_CAP",
    "U64_MAX",
    # Formatters
    "format_sol",
    "format_percentage",
    "format_allocation",
]
