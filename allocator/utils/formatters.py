"""
Formatting utilities for lamport amounts and allocations.

Functions for rendering lamports, shares and full allocation
breakdowns in a readable form for CLI output and logs.
"""

from decimal import Decimal

from allocator.constants import LAMPORTS_PER_SOL
from allocator.core.models import AllocationResult


def format_sol(lamports: int, decimals: int = 9, symbol: str = "SOL") -> str:
    """
    Format a lamport amount as SOL.

    Args:
        lamports: Amount in lamports
        decimals: Digits after the decimal point
        symbol: Currency symbol appended to the value

    Returns:
        Formatted string

    Example:
        >>> format_sol(1_500_000_000)
        '1.500000000 SOL'
        >>> format_sol(50_000_000, decimals=2)
        '0.05 SOL'
    """
    value = Decimal(lamports) / Decimal(LAMPORTS_PER_SOL)
    formatted = f"{value:,.{decimals}f}"
    return f"{formatted} {symbol}" if symbol else formatted


def format_percentage(part: int, whole: int, decimals: int = 2) -> str:
    """
    Format ``part`` as a percentage of ``whole``.

    Example:
        >>> format_percentage(250, 1000)
        '25.00%'
        >>> format_percentage(0, 0)
        '0.00%'
    """
    if whole <= 0:
        return f"{0:.{decimals}f}%"
    value = Decimal(part) * 100 / Decimal(whole)
    return f"{value:.{decimals}f}%"


def format_allocation(result: AllocationResult, decimals: int = 9) -> str:
    """
    Render an allocation as a multi-line breakdown.

    Args:
        result: Allocation to render
        decimals: Digits after the decimal point for SOL values

    Returns:
        One line per party with amount and share of the total
    """
    total = result.total
    rows = [
        ("Treasury", result.treasury),
        ("Team", result.team),
        ("First referrer", result.first),
        ("Second referrer", result.second),
    ]
    width = max(len(label) for label, _ in rows)
    lines = [f"{'Total':<{width}}  {format_sol(total, decimals)}"]
    for label, amount in rows:
        lines.append(
            f"{label:<{width}}  {format_sol(amount, decimals)}"
            f"  ({format_percentage(amount, total)})"
        )
    return "\n".join(lines)
