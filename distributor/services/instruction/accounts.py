"""
Account list encoding and decoding.

The settlement account list always has six entries in a fixed order.
An absent referrer is encoded by repeating the payer address in its
slot. This module is the only place that convention is known: callers
on both sides work with ReferrerPair, where an absent referrer is None.
"""

from collections.abc import Sequence

from solders.instruction import AccountMeta
from solders.pubkey import Pubkey

from distributor.config.constants import (
    ACCOUNT_COUNT,
    FIRST_REFERRER_INDEX,
    NATIVE_SYSTEM_PROGRAM_ID,
    PAYER_INDEX,
    SECOND_REFERRER_INDEX,
    SYSTEM_PROGRAM_INDEX,
    TEAM_INDEX,
    TREASURY_INDEX,
)
from distributor.models.distribution import (
    AccountInfo,
    DistributionConfig,
    PaymentRequest,
    ReferrerPair,
    SettlementAccounts,
)
from distributor.utils.exceptions import AccountShapeError


def _slot(referrer: Pubkey | None, payer: Pubkey) -> Pubkey:
    return payer if referrer is None else referrer


def build_account_metas(
    payer: Pubkey,
    config: DistributionConfig,
    referrers: ReferrerPair,
) -> list[AccountMeta]:
    """
    Assemble the 6-entry account list for a settlement instruction.

    Both referrer slots are writable whether or not a referrer is present,
    so the list shape never depends on the referral chain.

    Args:
        payer: Paying wallet (signer)
        config: Distribution configuration
        referrers: Resolved referral chain

    Returns:
        Account metas in settlement order
    """
    return [
        AccountMeta(pubkey=payer, is_signer=True, is_writable=True),
        AccountMeta(pubkey=config.treasury_wallet, is_signer=False, is_writable=True),
        AccountMeta(pubkey=config.team_wallet, is_signer=False, is_writable=True),
        AccountMeta(pubkey=_slot(referrers.first, payer), is_signer=False, is_writable=True),
        AccountMeta(pubkey=_slot(referrers.second, payer), is_signer=False, is_writable=True),
        AccountMeta(pubkey=NATIVE_SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
    ]


def _require_writable(account: AccountInfo, index: int, name: str) -> None:
    if not account.is_writable:
        raise AccountShapeError(f"{name} account must be writable", index=index)


def parse_account_list(
    accounts: Sequence[AccountInfo],
    request: PaymentRequest,
    config: DistributionConfig,
) -> SettlementAccounts:
    """
    Validate the positional account list and decode it into a typed view.

    Referrer slot addresses are taken as given; whether a slot holds a real
    referrer is decided by the request flags alone.

    Args:
        accounts: Account entries in instruction order
        request: Decoded payment request
        config: Distribution configuration

    Returns:
        SettlementAccounts with absent referrers as None

    Raises:
        AccountShapeError: If the list has the wrong length, the payer is not
            a writable signer, treasury/team differ from configuration, a slot
            that receives funds is read-only, or the last entry is not the
            system program
    """
    if len(accounts) != ACCOUNT_COUNT:
        raise AccountShapeError(
            f"Expected exactly {ACCOUNT_COUNT} accounts, got {len(accounts)}"
        )

    payer = accounts[PAYER_INDEX]
    treasury = accounts[TREASURY_INDEX]
    team = accounts[TEAM_INDEX]
    first_slot = accounts[FIRST_REFERRER_INDEX]
    second_slot = accounts[SECOND_REFERRER_INDEX]
    system_program = accounts[SYSTEM_PROGRAM_INDEX]

    if not payer.is_signer:
        raise AccountShapeError("Payer account must sign the transaction", index=PAYER_INDEX)
    _require_writable(payer, PAYER_INDEX, "Payer")

    if treasury.key != config.treasury_wallet:
        raise AccountShapeError(
            "Treasury account does not match the configured treasury wallet",
            index=TREASURY_INDEX,
        )
    if team.key != config.team_wallet:
        raise AccountShapeError(
            "Team account does not match the configured team wallet",
            index=TEAM_INDEX,
        )

    _require_writable(treasury, TREASURY_INDEX, "Treasury")
    _require_writable(team, TEAM_INDEX, "Team")
    _require_writable(first_slot, FIRST_REFERRER_INDEX, "First referrer")
    _require_writable(second_slot, SECOND_REFERRER_INDEX, "Second referrer")

    if system_program.key != NATIVE_SYSTEM_PROGRAM_ID:
        raise AccountShapeError(
            "Last account must be the system program", index=SYSTEM_PROGRAM_INDEX
        )

    referrers = ReferrerPair(
        first=first_slot.key if request.has_first_referrer else None,
        second=second_slot.key if request.has_second_referrer else None,
    )

    return SettlementAccounts(
        payer=payer.key,
        treasury=treasury.key,
        team=team.key,
        referrers=referrers,
        system_program=system_program.key,
    )


def account_infos_from_metas(
    metas: Sequence[AccountMeta],
    signers: set[Pubkey] | None = None,
) -> list[AccountInfo]:
    """
    Convert instruction account metas into engine account entries.

    A meta marked as signer only counts as signed when its key is in
    ``signers``; with ``signers=None`` the meta flag is trusted.
    """
    infos = []
    for meta in metas:
        is_signer = meta.is_signer
        if signers is not None:
            is_signer = is_signer and meta.pubkey in signers
        infos.append(
            AccountInfo(key=meta.pubkey, is_signer=is_signer, is_writable=meta.is_writable)
        )
    return infos
