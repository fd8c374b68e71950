"""Validation and conversion utilities for addresses and SOL amounts."""

from decimal import ROUND_FLOOR, Decimal, InvalidOperation, localcontext

from loguru import logger
from solders.pubkey import Pubkey

from allocator.constants import LAMPORTS_PER_SOL, U64_MAX
from allocator.exceptions import ArithmeticOverflowError
from distributor.config.constants import MAX_REFERRAL_CODE_LENGTH


def validate_solana_address(address: str) -> tuple[bool, str | None]:
    """
    Validate a base58 Solana address.

    Args:
        address: Address to validate

    Returns:
        Tuple of (is_valid, error_message)
        - (True, None) if valid
        - (False, error_message) if invalid

    Examples:
        >>> validate_solana_address("11111111111111111111111111111111")
        (True, None)
        >>> validate_solana_address("")
        (False, 'Address is empty')
    """
    if not address or not isinstance(address, str):
        return False, "Address is empty"

    address = address.strip()

    if not address:
        return False, "Address is empty"

    try:
        Pubkey.from_string(address)
        return True, None
    except ValueError as e:
        logger.debug(f"Address validation failed for {address}: {e}")
        return False, "Invalid address format"


def normalize_pubkey(address: str | Pubkey) -> Pubkey:
    """
    Convert an address to Pubkey.

    Raises:
        ValueError: If invalid address
    """
    if isinstance(address, Pubkey):
        return address

    is_valid, error = validate_solana_address(address)
    if not is_valid:
        raise ValueError(f"{error}: {address!r}")
    return Pubkey.from_string(address.strip())


def sol_to_lamports(amount: Decimal | int | float | str) -> int:
    """
    Convert a SOL amount to lamports, flooring any fractional lamport.

    Flooring guarantees the encoded amount never exceeds what the payer
    asked to pay.

    Args:
        amount: Amount in SOL

    Returns:
        Amount in lamports

    Raises:
        ValueError: If amount is negative, not finite, or not a number
        ArithmeticOverflowError: If the result does not fit u64

    Examples:
        >>> sol_to_lamports(Decimal("1.5"))
        1500000000
        >>> sol_to_lamports("0.0000000019")
        1
    """
    if isinstance(amount, float):
        amount = str(amount)
    try:
        value = Decimal(amount)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Invalid SOL amount: {amount!r}") from e

    if not value.is_finite():
        raise ValueError(f"SOL amount must be finite: {amount!r}")
    if value < 0:
        raise ValueError(f"SOL amount must not be negative: {amount!r}")
    if value > U64_MAX:
        raise ArithmeticOverflowError(
            f"Amount {amount} SOL does not fit in u64 lamports", amount=None
        )

    # Exact scaling: precision covers every digit of the input plus the shift
    with localcontext() as ctx:
        ctx.prec = len(value.as_tuple().digits) + 30
        ctx.rounding = ROUND_FLOOR
        lamports = int((value * LAMPORTS_PER_SOL).to_integral_value())

    if lamports > U64_MAX:
        raise ArithmeticOverflowError(
            f"Amount {amount} SOL does not fit in u64 lamports", amount=lamports
        )
    return lamports


def lamports_to_sol(lamports: int) -> Decimal:
    """
    Convert lamports to SOL.

    Example:
        >>> lamports_to_sol(250_000_000)
        Decimal('0.25')
    """
    return (Decimal(lamports) / Decimal(LAMPORTS_PER_SOL)).normalize()


def validate_referral_code(code: str | None) -> bool:
    """
    Check that a referral code is usable as a URL path segment.

    Args:
        code: Referral code from user input

    Returns:
        True if valid
    """
    if not code or not isinstance(code, str):
        return False

    code = code.strip()
    if not code or len(code) > MAX_REFERRAL_CODE_LENGTH:
        return False

    return all(ch.isalnum() or ch in "-_" for ch in code)
