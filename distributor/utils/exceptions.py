"""
Exception handling utilities.

Defines categorized exception types for settlement and instruction
building. Every settlement failure carries a stable ``code``.
"""

from allocator.exceptions import ArithmeticOverflowError, DistributionError


class DecodeError(DistributionError):
    """Raised when instruction data cannot be decoded."""

    code = "invalid_instruction_data"


class AccountShapeError(DistributionError):
    """Raised when the account list does not match the expected shape."""

    code = "invalid_account_list"

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class InsufficientBalanceError(DistributionError):
    """Raised when the payer cannot cover the summed transfers."""

    code = "insufficient_funds"

    def __init__(self, message: str, required: int = 0, available: int = 0) -> None:
        super().__init__(message)
        self.required = required
        self.available = available


class ReferralLookupError(DistributionError):
    """Raised by the referral lookup client; never escapes the builder."""

    code = "referral_lookup_failed"


# Fatal for a settlement invocation, no partial effect
SETTLEMENT_ERRORS = (
    DecodeError,
    AccountShapeError,
    InsufficientBalanceError,
    ArithmeticOverflowError,
)


def is_settlement_error(exc: Exception) -> bool:
    """
    Check if exception is a terminal settlement failure.

    Args:
        exc: Exception to check

    Returns:
        True if the invocation must be rejected as a whole
    """
    return isinstance(exc, SETTLEMENT_ERRORS)


def error_code(exc: Exception) -> str:
    """Stable code for a settlement failure, ``"internal_error"`` otherwise."""
    if is_settlement_error(exc):
        return exc.code
    return "internal_error"


__all__ = [
    "DistributionError",
    "DecodeError",
    "AccountShapeError",
    "InsufficientBalanceError",
    "ArithmeticOverflowError",
    "ReferralLookupError",
    "SETTLEMENT_ERRORS",
    "is_settlement_error",
    "error_code",
]
