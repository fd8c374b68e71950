"""
Pure allocation logic for payment distribution.

This module contains standalone calculation logic without any
dependencies on accounts, ledgers, or network code. All arithmetic
is integer-only and works in lamports.
"""

from allocator.constants import (
    FIRST_REFERRER_PERCENT,
    SECOND_REFERRER_PERCENT,
    TREASURY_PERCENT,
    U64_MAX,
    U128_MAX,
)
from allocator.core.models import AllocationCaps, AllocationResult
from allocator.exceptions import ArithmeticOverflowError


def _check_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(f"amount must be an int, got {type(amount).__name__}")
    if amount < 0 or amount > U64_MAX:
        raise ArithmeticOverflowError(
            f"Amount {amount} is outside the u64 range", amount=amount
        )


def percent_of(amount: int, percent: int) -> int:
    """
    Floor of ``amount * percent / 100`` using a 128-bit intermediate.

    The allocation percentages keep the product far inside 128 bits; the
    bound only trips when a caller passes a percentage of about 2**64 or more.

    Args:
        amount: Amount in lamports (u64)
        percent: Integer percentage

    Returns:
        Floored share in lamports

    Raises:
        ArithmeticOverflowError: If the amount or the widened product is out of range

    Example:
        >>> percent_of(1_000_000_000, 20)
        200000000
        >>> percent_of(7, 5)
        0
    """
    _check_amount(amount)
    widened = amount * percent
    if widened > U128_MAX:
        raise ArithmeticOverflowError(
            f"Product {amount} * {percent} overflows the widened type", amount=amount
        )
    return widened // 100


def allocate(
    gross_amount: int,
    has_first_referrer: bool,
    has_second_referrer: bool,
    first_cap: int,
    second_cap: int,
) -> AllocationResult:
    """
    Split a gross amount between treasury, team and up to two referrers.

    Treasury always receives exactly half (floored). Each referrer receives
    its percentage clamped to an absolute cap, or nothing when absent. The
    team receives the residual, which absorbs unclaimed referral shares,
    cap overflow and rounding remainders.

    Args:
        gross_amount: Payment in lamports
        has_first_referrer: Whether a first-tier referrer is present
        has_second_referrer: Whether a second-tier referrer is present
        first_cap: Absolute cap for the first-tier share
        second_cap: Absolute cap for the second-tier share

    Returns:
        AllocationResult whose shares sum to gross_amount

    Raises:
        ArithmeticOverflowError: If gross_amount is not a valid u64 amount

    Example:
        >>> result = allocate(1_000_000_000, True, True, 200_000_000, 50_000_000)
        >>> (result.treasury, result.team, result.first, result.second)
        (500000000, 250000000, 200000000, 50000000)
    """
    _check_amount(gross_amount)

    treasury = percent_of(gross_amount, TREASURY_PERCENT)

    first = 0
    if has_first_referrer:
        first = min(percent_of(gross_amount, FIRST_REFERRER_PERCENT), first_cap)

    second = 0
    if has_second_referrer:
        second = min(percent_of(gross_amount, SECOND_REFERRER_PERCENT), second_cap)

    team = gross_amount - treasury - first - second

    return AllocationResult(treasury=treasury, team=team, first=first, second=second)


class PaymentAllocator:
    """
    Allocator bound to a validated set of referral caps.

    Caps are checked once when the allocator is built, so per-payment
    calls only carry the amount and presence flags.
    """

    def __init__(self, caps: AllocationCaps | None = None) -> None:
        """
        Initialize allocator.

        Args:
            caps: Referral caps (defaults to 0.2 SOL / 0.05 SOL)
        """
        self.caps = caps or AllocationCaps()

    def allocate(
        self,
        gross_amount: int,
        has_first_referrer: bool,
        has_second_referrer: bool,
    ) -> AllocationResult:
        """Allocate using the bound caps."""
        return allocate(
            gross_amount,
            has_first_referrer,
            has_second_referrer,
            self.caps.first_referrer_cap,
            self.caps.second_referrer_cap,
        )

    def max_referral_payout(self, gross_amount: int) -> int:
        """
        Largest amount both referrers can receive together for this payment.

        Example:
            >>> PaymentAllocator().max_referral_payout(10_000_000_000)
            250000000
        """
        result = self.allocate(gross_amount, True, True)
        return result.first + result.second
