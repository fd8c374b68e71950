"""
Tests for validation utilities.

Tests address validation, SOL/lamport conversion and masking helpers.
"""

from decimal import Decimal

import pytest
from solders.pubkey import Pubkey

from allocator import U64_MAX, ArithmeticOverflowError
from distributor.utils.exceptions import (
    AccountShapeError,
    DecodeError,
    DistributionError,
    InsufficientBalanceError,
    ReferralLookupError,
    error_code,
    is_settlement_error,
)
from distributor.utils.security import mask_address, mask_referral_code
from distributor.utils.validation import (
    lamports_to_sol,
    normalize_pubkey,
    sol_to_lamports,
    validate_referral_code,
    validate_solana_address,
)


SYSTEM_PROGRAM = "11111111111111111111111111111111"


class TestValidateSolanaAddress:
    """Tests for validate_solana_address."""

    def test_valid(self) -> None:
        assert validate_solana_address(SYSTEM_PROGRAM) == (True, None)

    def test_surrounding_whitespace_allowed(self) -> None:
        is_valid, _ = validate_solana_address(f"  {SYSTEM_PROGRAM} ")
        assert is_valid is True

    @pytest.mark.parametrize("address", ["", "   ", None])
    def test_empty(self, address) -> None:
        assert validate_solana_address(address) == (False, "Address is empty")

    @pytest.mark.parametrize(
        "address",
        [
            "not-a-wallet",
            "0x742d35Cc6634C0532925a3b844Bc9e7595f0bEb0",
            "1111",
            "O0Il" * 11,
        ],
    )
    def test_invalid(self, address: str) -> None:
        is_valid, error = validate_solana_address(address)

        assert is_valid is False
        assert error == "Invalid address format"


class TestNormalizePubkey:
    """Tests for normalize_pubkey."""

    def test_string(self) -> None:
        assert normalize_pubkey(SYSTEM_PROGRAM) == Pubkey.from_string(SYSTEM_PROGRAM)

    def test_pubkey_passthrough(self) -> None:
        key = Pubkey.new_unique()
        assert normalize_pubkey(key) is key

    def test_invalid_raises(self) -> None:
        with pytest.raises(ValueError):
            normalize_pubkey("not-a-wallet")


class TestSolToLamports:
    """Tests for sol_to_lamports."""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (Decimal("1.5"), 1_500_000_000),
            ("1", 1_000_000_000),
            (10, 10_000_000_000),
            (0.1, 100_000_000),
            ("0", 0),
            ("0.000000001", 1),
            ("0.0000000019", 1),
            ("0.0000000009", 0),
            ("18446744073.709551615", U64_MAX),
        ],
    )
    def test_conversion(self, amount, expected: int) -> None:
        assert sol_to_lamports(amount) == expected

    @pytest.mark.parametrize("amount", ["abc", "", "-1", "-0.000000001", "NaN", "Infinity", None])
    def test_invalid(self, amount) -> None:
        with pytest.raises(ValueError):
            sol_to_lamports(amount)

    @pytest.mark.parametrize("amount", ["18446744073.709551616", "1e30"])
    def test_overflow(self, amount: str) -> None:
        with pytest.raises(ArithmeticOverflowError):
            sol_to_lamports(amount)

    def test_lamports_to_sol(self) -> None:
        assert lamports_to_sol(250_000_000) == Decimal("0.25")
        assert lamports_to_sol(1) == Decimal("0.000000001")


class TestValidateReferralCode:
    """Tests for validate_referral_code."""

    @pytest.mark.parametrize("code", ["SIMO-ABCDEF", "abc_123", "X"])
    def test_valid(self, code: str) -> None:
        assert validate_referral_code(code) is True

    @pytest.mark.parametrize("code", [None, "", "   ", "a/b", "code with space", "A" * 129])
    def test_invalid(self, code) -> None:
        assert validate_referral_code(code) is False


class TestMasking:
    """Tests for log masking helpers."""

    def test_mask_address(self) -> None:
        assert mask_address(SYSTEM_PROGRAM) == "1111...1111"
        assert mask_address(Pubkey.from_string(SYSTEM_PROGRAM)) == "1111...1111"

    @pytest.mark.parametrize("address", [None, "", "short"])
    def test_mask_address_short(self, address) -> None:
        assert mask_address(address) == "***"

    def test_mask_referral_code(self) -> None:
        assert mask_referral_code("SIMO-ABCDEF") == "SI...EF"
        assert mask_referral_code("abcd") == "***"
        assert mask_referral_code(None) == "***"


class TestErrorCodes:
    """Tests for settlement error classification."""

    @pytest.mark.parametrize(
        "exc,code",
        [
            (DecodeError("x"), "invalid_instruction_data"),
            (AccountShapeError("x"), "invalid_account_list"),
            (InsufficientBalanceError("x"), "insufficient_funds"),
            (ArithmeticOverflowError("x"), "arithmetic_overflow"),
        ],
    )
    def test_settlement_errors(self, exc: Exception, code: str) -> None:
        assert is_settlement_error(exc) is True
        assert error_code(exc) == code

    def test_lookup_error_is_not_settlement_error(self) -> None:
        assert is_settlement_error(ReferralLookupError("x")) is False
        assert error_code(RuntimeError("x")) == "internal_error"

    @pytest.mark.parametrize(
        "exc_type",
        [
            DecodeError,
            AccountShapeError,
            InsufficientBalanceError,
            ArithmeticOverflowError,
            ReferralLookupError,
        ],
    )
    def test_single_error_root(self, exc_type: type) -> None:
        assert issubclass(exc_type, DistributionError)

    def test_overflow_caught_as_distribution_error(self) -> None:
        with pytest.raises(DistributionError) as exc_info:
            sol_to_lamports("1e30")

        assert isinstance(exc_info.value, ArithmeticError)
