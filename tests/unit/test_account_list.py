"""Tests for account list encoding and validation."""

from dataclasses import replace

import pytest
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID

from distributor.models.distribution import AccountInfo, PaymentRequest, ReferrerPair
from distributor.services.instruction.accounts import (
    account_infos_from_metas,
    build_account_metas,
    parse_account_list,
)
from distributor.utils.exceptions import AccountShapeError


def _request(first: bool = False, second: bool = False) -> PaymentRequest:
    return PaymentRequest(
        gross_amount=1_000_000_000,
        has_first_referrer=first,
        has_second_referrer=second,
    )


class TestBuildAccountMetas:
    """Tests for build_account_metas."""

    def test_full_chain(self, config, payer, first_referrer, second_referrer) -> None:
        metas = build_account_metas(
            payer, config, ReferrerPair(first=first_referrer, second=second_referrer)
        )

        assert [m.pubkey for m in metas] == [
            payer,
            config.treasury_wallet,
            config.team_wallet,
            first_referrer,
            second_referrer,
            SYSTEM_PROGRAM_ID,
        ]

    def test_absent_referrers_use_payer_placeholder(self, config, payer) -> None:
        metas = build_account_metas(payer, config, ReferrerPair())

        assert len(metas) == 6
        assert metas[3].pubkey == payer
        assert metas[4].pubkey == payer

    def test_flags(self, config, payer) -> None:
        """Payer signs; everything but the system program is writable."""
        metas = build_account_metas(payer, config, ReferrerPair())

        assert [m.is_signer for m in metas] == [True, False, False, False, False, False]
        assert [m.is_writable for m in metas] == [True, True, True, True, True, False]


class TestParseAccountList:
    """Tests for parse_account_list."""

    @pytest.fixture
    def accounts(self, config, payer, first_referrer, second_referrer) -> list[AccountInfo]:
        metas = build_account_metas(
            payer, config, ReferrerPair(first=first_referrer, second=second_referrer)
        )
        return account_infos_from_metas(metas)

    def test_valid_list(self, accounts, config, payer, first_referrer, second_referrer) -> None:
        parsed = parse_account_list(accounts, _request(True, True), config)

        assert parsed.payer == payer
        assert parsed.treasury == config.treasury_wallet
        assert parsed.team == config.team_wallet
        assert parsed.referrers == ReferrerPair(first=first_referrer, second=second_referrer)
        assert parsed.system_program == SYSTEM_PROGRAM_ID

    def test_flags_decide_referrer_presence(self, accounts, config, first_referrer) -> None:
        """A false flag yields None whatever address sits in the slot."""
        parsed = parse_account_list(accounts, _request(True, False), config)

        assert parsed.referrers.first == first_referrer
        assert parsed.referrers.second is None
        assert parsed.referrers.count == 1

    def test_placeholder_slots_decode_to_none(self, config, payer) -> None:
        accounts = account_infos_from_metas(build_account_metas(payer, config, ReferrerPair()))

        parsed = parse_account_list(accounts, _request(), config)

        assert parsed.referrers == ReferrerPair()

    @pytest.mark.parametrize("count", [0, 5, 7])
    def test_wrong_length(self, accounts, config, count: int) -> None:
        entries = (accounts * 2)[:count]

        with pytest.raises(AccountShapeError) as exc_info:
            parse_account_list(entries, _request(), config)

        assert exc_info.value.code == "invalid_account_list"

    def test_payer_must_sign(self, accounts, config) -> None:
        accounts[0] = replace(accounts[0], is_signer=False)

        with pytest.raises(AccountShapeError) as exc_info:
            parse_account_list(accounts, _request(), config)

        assert exc_info.value.index == 0

    def test_payer_must_be_writable(self, accounts, config) -> None:
        accounts[0] = replace(accounts[0], is_writable=False)

        with pytest.raises(AccountShapeError) as exc_info:
            parse_account_list(accounts, _request(), config)

        assert exc_info.value.index == 0

    def test_wrong_treasury(self, accounts, config) -> None:
        accounts[1] = replace(accounts[1], key=Pubkey.new_unique())

        with pytest.raises(AccountShapeError) as exc_info:
            parse_account_list(accounts, _request(), config)

        assert exc_info.value.index == 1

    def test_wrong_team(self, accounts, config) -> None:
        accounts[2] = replace(accounts[2], key=Pubkey.new_unique())

        with pytest.raises(AccountShapeError) as exc_info:
            parse_account_list(accounts, _request(), config)

        assert exc_info.value.index == 2

    def test_swapped_treasury_and_team(self, accounts, config) -> None:
        accounts[1], accounts[2] = accounts[2], accounts[1]

        with pytest.raises(AccountShapeError):
            parse_account_list(accounts, _request(), config)

    @pytest.mark.parametrize("index", [1, 2, 3, 4])
    def test_receiving_slots_must_be_writable(self, accounts, config, index: int) -> None:
        accounts[index] = replace(accounts[index], is_writable=False)

        with pytest.raises(AccountShapeError) as exc_info:
            parse_account_list(accounts, _request(True, True), config)

        assert exc_info.value.index == index

    def test_last_account_must_be_system_program(self, accounts, config) -> None:
        accounts[5] = replace(accounts[5], key=Pubkey.new_unique())

        with pytest.raises(AccountShapeError) as exc_info:
            parse_account_list(accounts, _request(), config)

        assert exc_info.value.index == 5


class TestAccountInfosFromMetas:
    """Tests for account_infos_from_metas."""

    def test_signers_filter(self, config, payer) -> None:
        """A signer meta only counts as signed when its key signed."""
        metas = build_account_metas(payer, config, ReferrerPair())

        signed = account_infos_from_metas(metas, {payer})
        unsigned = account_infos_from_metas(metas, set())

        assert signed[0].is_signer is True
        assert unsigned[0].is_signer is False

    def test_trusts_meta_without_signers(self, config, payer) -> None:
        metas = build_account_metas(payer, config, ReferrerPair())

        infos = account_infos_from_metas(metas)

        assert infos[0].is_signer is True
        assert infos[5].is_writable is False
