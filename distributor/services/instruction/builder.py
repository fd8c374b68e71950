"""
Instruction builder.

Client-side assembly of payment distribution instructions: converts the
SOL amount, resolves referrers, encodes the payload and lays out the
account list for the settlement engine.
"""

from decimal import Decimal

from loguru import logger
from solders.instruction import Instruction
from solders.pubkey import Pubkey

from allocator import PaymentAllocator
from distributor.models.distribution import (
    BuildResult,
    DistributionConfig,
    PaymentRequest,
    ReferrerPair,
)
from distributor.services.instruction.accounts import build_account_metas
from distributor.services.instruction.codec import encode_payment_request
from distributor.services.referral.lookup_client import ReferralLookup
from distributor.services.referral.resolver import resolve_referrers
from distributor.utils.security import mask_address
from distributor.utils.validation import normalize_pubkey, sol_to_lamports


def build_instruction(
    config: DistributionConfig,
    payer: Pubkey,
    request: PaymentRequest,
    referrers: ReferrerPair,
) -> Instruction:
    """
    Encode a request and its account list into an instruction.

    Args:
        config: Distribution configuration
        payer: Paying wallet
        request: Payment request (flags must match ``referrers``)
        referrers: Referral chain used for the account slots

    Returns:
        Instruction addressed to the configured program

    Raises:
        ValueError: If the request flags disagree with the referrer pair
    """
    if (request.has_first_referrer, request.has_second_referrer) != (
        referrers.has_first,
        referrers.has_second,
    ):
        raise ValueError("Referrer flags do not match the referrer addresses")

    data = encode_payment_request(request)
    accounts = build_account_metas(payer, config, referrers)
    logger.debug(f"Encoded payment instruction data: {data.hex()}")
    return Instruction(config.program_id, data, accounts)


def _optional_pubkey(address: str | Pubkey | None) -> Pubkey | None:
    if address is None or (isinstance(address, str) and not address.strip()):
        return None
    return normalize_pubkey(address)


def create_payment_distribution_instruction(
    config: DistributionConfig,
    payer: str | Pubkey,
    amount: Decimal | int | float | str,
    first_referrer: str | Pubkey | None = None,
    second_referrer: str | Pubkey | None = None,
) -> Instruction:
    """
    Build an instruction for already known referrer wallets.

    Args:
        config: Distribution configuration
        payer: Paying wallet
        amount: Amount in SOL (floored to whole lamports)
        first_referrer: First-tier referrer wallet, if any
        second_referrer: Second-tier referrer wallet, if any

    Returns:
        Instruction ready to be added to a transaction

    Raises:
        ValueError: If an address or the amount is invalid
        ArithmeticOverflowError: If the amount does not fit u64 lamports
    """
    payer_key = normalize_pubkey(payer)
    referrers = ReferrerPair(
        first=_optional_pubkey(first_referrer),
        second=_optional_pubkey(second_referrer),
    )
    request = PaymentRequest(
        gross_amount=sol_to_lamports(amount),
        has_first_referrer=referrers.has_first,
        has_second_referrer=referrers.has_second,
    )
    return build_instruction(config, payer_key, request, referrers)


class InstructionBuilder:
    """
    Builds payment distribution instructions from a referral code.

    Referral resolution never fails a build: lookup problems only remove
    referrers and are reported through ``BuildResult.warnings``.
    """

    def __init__(
        self,
        config: DistributionConfig,
        lookup: ReferralLookup,
        lookup_timeout: float | None = None,
    ) -> None:
        """
        Initialize instruction builder.

        Args:
            config: Distribution configuration
            lookup: Referral lookup implementation
            lookup_timeout: Per-lookup timeout in seconds
        """
        self.config = config
        self.lookup = lookup
        self.lookup_timeout = lookup_timeout
        self.allocator = PaymentAllocator(config.caps)

    async def build(
        self,
        amount: Decimal | int | float | str,
        payer: str | Pubkey,
        referral_code: str | None = None,
    ) -> BuildResult:
        """
        Build an instruction for a payment.

        Args:
            amount: Amount in SOL
            payer: Paying wallet
            referral_code: Optional referral code

        Returns:
            BuildResult with the instruction, decoded request, referrers,
            expected allocation and lookup warnings

        Raises:
            ValueError: If the payer address or the amount is invalid
            ArithmeticOverflowError: If the amount does not fit u64 lamports
        """
        payer_key = normalize_pubkey(payer)
        lamports = sol_to_lamports(amount)

        resolved = await resolve_referrers(self.lookup, referral_code, self.lookup_timeout)
        referrers = resolved.referrers

        request = PaymentRequest(
            gross_amount=lamports,
            has_first_referrer=referrers.has_first,
            has_second_referrer=referrers.has_second,
        )
        instruction = build_instruction(self.config, payer_key, request, referrers)
        allocation = self.allocator.allocate(
            request.gross_amount,
            request.has_first_referrer,
            request.has_second_referrer,
        )

        logger.info(
            f"Built payment instruction: {lamports} lamports from {mask_address(payer_key)}, "
            f"{referrers.count} referrer(s), {len(resolved.warnings)} warning(s)"
        )

        return BuildResult(
            instruction=instruction,
            request=request,
            referrers=referrers,
            allocation=allocation,
            warnings=list(resolved.warnings),
        )

    async def build_instructions(
        self,
        amount: Decimal | int | float | str,
        payer: str | Pubkey,
        referral_code: str | None = None,
    ) -> list[Instruction]:
        """Build and return the instruction as a one-element list."""
        result = await self.build(amount, payer, referral_code)
        return [result.instruction]
