#!/usr/bin/env python3
"""
Simulate a settlement against an in-memory ledger.

Funds the payer, builds an instruction for known referrer wallets and
runs it through the settlement engine, then prints the resulting
balances. Useful for checking caps and configuration before deploying.

Usage:
    python scripts/simulate_settlement.py --amount 10
    python scripts/simulate_settlement.py --amount 1 --first <PUBKEY> --second <PUBKEY>
    python scripts/simulate_settlement.py --amount 1 --fund 0.5   # insufficient balance

Requires PROGRAM_ID, TREASURY_WALLET and TEAM_WALLET in the environment or .env.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger
from solders.pubkey import Pubkey

from allocator import format_allocation, format_sol
from distributor.config.settings import get_settings
from distributor.initialization import setup_logging
from distributor.services.instruction import create_payment_distribution_instruction
from distributor.services.settlement import Ledger, SettlementEngine
from distributor.utils.exceptions import (
    SETTLEMENT_ERRORS,
    ArithmeticOverflowError,
    error_code,
)
from distributor.utils.validation import sol_to_lamports


def simulate(amount: str, fund: str | None, first: str | None, second: str | None) -> int:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)
    config = settings.to_distribution_config()
    payer = Pubkey.new_unique()

    ledger = Ledger()
    engine = SettlementEngine(config, ledger)

    try:
        ledger.fund(payer, sol_to_lamports(fund if fund is not None else amount))
        instruction = create_payment_distribution_instruction(
            config, payer, amount, first_referrer=first, second_referrer=second
        )
    except (ValueError, ArithmeticOverflowError) as e:
        logger.error(f"Cannot build instruction: {e}")
        return 1

    labels = {
        payer: "Payer",
        config.treasury_wallet: "Treasury",
        config.team_wallet: "Team",
    }
    if first:
        labels.setdefault(Pubkey.from_string(first.strip()), "First referrer")
    if second:
        labels.setdefault(Pubkey.from_string(second.strip()), "Second referrer")

    try:
        receipt = engine.execute(instruction, signers={payer})
    except SETTLEMENT_ERRORS as e:
        print(f"Settlement rejected: {error_code(e)}")
    else:
        print(format_allocation(receipt.allocation))

    print()
    print("Balances:")
    for key, label in labels.items():
        print(f"  {label:<16} {format_sol(ledger.balance(key))}")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Run a payment through the settlement engine in memory"
    )
    parser.add_argument("--amount", required=True, help="Payment amount in SOL")
    parser.add_argument(
        "--fund",
        default=None,
        help="Initial payer balance in SOL (defaults to the payment amount)",
    )
    parser.add_argument("--first", default=None, help="First-tier referrer wallet")
    parser.add_argument("--second", default=None, help="Second-tier referrer wallet")
    args = parser.parse_args()

    sys.exit(simulate(args.amount, args.fund, args.first, args.second))


if __name__ == "__main__":
    main()
