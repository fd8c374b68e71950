"""
Utility functions for allocator.

Formatting helpers for lamport amounts and allocation breakdowns.
"""

from allocator.utils.formatters import (
    format_allocation,
    format_percentage,
    format_sol,
)

__all__ = [
    "format_sol",
    "format_percentage",
    "format_allocation",
]
