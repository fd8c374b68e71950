"""Pytest configuration and shared fixtures for all tests."""

import os
import sys
from pathlib import Path

# Minimal environment so Settings() can load without a .env file
os.environ.setdefault("PROGRAM_ID", "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
os.environ.setdefault("TREASURY_WALLET", "SysvarRent111111111111111111111111111111111")
os.environ.setdefault("TEAM_WALLET", "SysvarC1ock11111111111111111111111111111111")
os.environ.setdefault("REFERRAL_API_BASE_URL", "http://localhost:3000")
os.environ.setdefault("ENVIRONMENT", "test")

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from unittest.mock import AsyncMock

from solders.pubkey import Pubkey

from allocator import LAMPORTS_PER_SOL
from distributor.models.distribution import DistributionConfig
from distributor.services.referral.lookup_client import LookupResult
from distributor.services.settlement import Ledger, SettlementEngine


@pytest.fixture
def program_id() -> Pubkey:
    """Program id of the payment distributor."""
    return Pubkey.new_unique()


@pytest.fixture
def treasury_wallet() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture
def team_wallet() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture
def config(program_id, treasury_wallet, team_wallet) -> DistributionConfig:
    """Distribution config with default caps (0.2 SOL / 0.05 SOL)."""
    return DistributionConfig(
        program_id=program_id,
        treasury_wallet=treasury_wallet,
        team_wallet=team_wallet,
    )


@pytest.fixture
def payer() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture
def first_referrer() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture
def second_referrer() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture
def ledger(payer) -> Ledger:
    """Ledger with the payer holding 100 SOL."""
    return Ledger({payer: 100 * LAMPORTS_PER_SOL})


@pytest.fixture
def engine(config, ledger) -> SettlementEngine:
    return SettlementEngine(config, ledger)


@pytest.fixture
def make_lookup():
    """
    Build a mocked referral lookup from a key -> result mapping.

    Values may be LookupResult instances or exceptions to raise.
    Unknown keys resolve to "not found".
    """

    def _make(mapping: dict):
        async def _lookup(code: str) -> LookupResult:
            result = mapping.get(code)
            if isinstance(result, BaseException):
                raise result
            if result is None:
                return LookupResult(success=False, message="Referrer not found")
            return result

        lookup = AsyncMock()
        lookup.lookup = AsyncMock(side_effect=_lookup)
        return lookup

    return _make
