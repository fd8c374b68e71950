"""
Settlement engine.

Decodes a payment instruction, validates its account list, computes the
allocation and applies the resulting transfers in one atomic ledger block.
Each invocation is independent: decode -> validate -> allocate ->
transfer -> commit or abort, with no internal retry.
"""

from collections.abc import Sequence

from loguru import logger
from solders.instruction import Instruction
from solders.pubkey import Pubkey

from allocator import AllocationResult, PaymentAllocator
from distributor.models.distribution import (
    AccountInfo,
    AccountRole,
    DistributionConfig,
    SettlementAccounts,
    SettlementReceipt,
    Transfer,
)
from distributor.services.instruction.accounts import (
    account_infos_from_metas,
    parse_account_list,
)
from distributor.services.instruction.codec import decode_payment_request
from distributor.services.settlement.ledger import Ledger
from distributor.utils.exceptions import (
    SETTLEMENT_ERRORS,
    AccountShapeError,
    InsufficientBalanceError,
)
from distributor.utils.security import mask_address


def plan_transfers(
    accounts: SettlementAccounts,
    allocation: AllocationResult,
) -> list[Transfer]:
    """
    Turn an allocation into payer transfers.

    Zero amounts and absent referrers produce no transfer, so a referrer
    slot holding the payer placeholder is never debited or credited.

    Args:
        accounts: Validated account view
        allocation: Computed allocation

    Returns:
        Transfers in account-list order
    """
    candidates: list[tuple[AccountRole, Pubkey | None, int]] = [
        (AccountRole.TREASURY, accounts.treasury, allocation.treasury),
        (AccountRole.TEAM, accounts.team, allocation.team),
        (AccountRole.FIRST_REFERRER, accounts.referrers.first, allocation.first),
        (AccountRole.SECOND_REFERRER, accounts.referrers.second, allocation.second),
    ]
    return [
        Transfer(role=role, destination=destination, lamports=lamports)
        for role, destination, lamports in candidates
        if destination is not None and lamports > 0
    ]


class SettlementEngine:
    """
    Executes payment distribution instructions against a ledger.

    Holds no state between invocations beyond its immutable configuration.
    """

    def __init__(self, config: DistributionConfig, ledger: Ledger) -> None:
        """
        Initialize settlement engine.

        Args:
            config: Distribution configuration (program id, wallets, caps)
            ledger: Host ledger performing native transfers
        """
        self.config = config
        self.ledger = ledger
        self.allocator = PaymentAllocator(config.caps)

    def process_instruction(
        self,
        program_id: Pubkey,
        accounts: Sequence[AccountInfo],
        instruction_data: bytes,
    ) -> SettlementReceipt:
        """
        Settle one payment instruction.

        Args:
            program_id: Program the instruction is addressed to
            accounts: Account entries in instruction order
            instruction_data: Raw 10-byte payload

        Returns:
            SettlementReceipt describing the committed transfers

        Raises:
            DecodeError: Payload is not exactly 10 bytes
            AccountShapeError: Account list does not match the expected shape
            ArithmeticOverflowError: Amount does not fit the allocation path, or a
                credited balance would exceed u64
            InsufficientBalanceError: Payer cannot cover the transfers
        """
        try:
            receipt = self._settle(program_id, accounts, instruction_data)
        except SETTLEMENT_ERRORS as e:
            logger.error(f"Settlement rejected [{e.code}]: {e}")
            raise

        logger.info(
            f"Settlement committed: {receipt.request.gross_amount} lamports from "
            f"{mask_address(receipt.payer)} in {len(receipt.transfers)} transfers"
        )
        return receipt

    def execute(
        self,
        instruction: Instruction,
        signers: set[Pubkey],
    ) -> SettlementReceipt:
        """
        Settle a built instruction, treating ``signers`` as the transaction signatures.

        Args:
            instruction: Instruction produced by the builder
            signers: Keys that signed the enclosing transaction

        Returns:
            SettlementReceipt
        """
        accounts = account_infos_from_metas(instruction.accounts, signers)
        return self.process_instruction(
            instruction.program_id,
            accounts,
            bytes(instruction.data),
        )

    def _settle(
        self,
        program_id: Pubkey,
        accounts: Sequence[AccountInfo],
        instruction_data: bytes,
    ) -> SettlementReceipt:
        if program_id != self.config.program_id:
            raise AccountShapeError(
                f"Instruction addressed to {program_id}, expected {self.config.program_id}"
            )

        request = decode_payment_request(instruction_data)
        settlement_accounts = parse_account_list(accounts, request, self.config)

        allocation = self.allocator.allocate(
            request.gross_amount,
            request.has_first_referrer,
            request.has_second_referrer,
        )
        transfers = plan_transfers(settlement_accounts, allocation)
        payer = settlement_accounts.payer

        with self.ledger.atomic() as ledger:
            required = sum(t.lamports for t in transfers)
            available = ledger.balance(payer)
            if required > available:
                raise InsufficientBalanceError(
                    f"Payer holds {available} lamports, settlement needs {required}",
                    required=required,
                    available=available,
                )
            for transfer in transfers:
                ledger.transfer(payer, transfer.destination, transfer.lamports)

        return SettlementReceipt(
            payer=payer,
            request=request,
            allocation=allocation,
            transfers=transfers,
        )
