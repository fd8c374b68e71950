"""Exceptions raised by the allocation algorithm."""


class DistributionError(Exception):
    """Base class for payment distribution failures."""

    code = "distribution_error"


class ArithmeticOverflowError(DistributionError, ArithmeticError):
    """Raised when an amount does not fit the integer width of the allocation path."""

    code = "arithmetic_overflow"

    def __init__(self, message: str, amount: int | None = None) -> None:
        super().__init__(message)
        self.amount = amount
