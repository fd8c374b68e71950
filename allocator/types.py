"""
Type definitions for allocator module.

TypedDict shapes used when an allocation is serialized for display
or JSON output.
"""

from typing import TypedDict


class AllocationDict(TypedDict):
    """
    Serialized allocation.

    Attributes:
        gross_amount: Total payment in lamports
        treasury: Treasury share in lamports
        team: Team share (residual) in lamports
        first: First-tier referrer share in lamports
        second: Second-tier referrer share in lamports
    """
    gross_amount: int
    treasury: int
    team: int
    first: int
    second: int
