#!/usr/bin/env python3
"""
Build a payment distribution instruction and print it.

Resolves the referral code against the configured referral service,
then prints the encoded payload, the account list and the expected
allocation. Nothing is signed or sent.

Usage:
    python scripts/build_instruction.py --payer <PUBKEY> --amount 1.5
    python scripts/build_instruction.py --payer <PUBKEY> --amount 10 --referral-code SIMO-ABCDEF

Requires PROGRAM_ID, TREASURY_WALLET and TEAM_WALLET in the environment or .env.
"""

import argparse
import asyncio
import base64
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger

from allocator import format_allocation
from distributor.config.settings import get_settings
from distributor.initialization import setup_logging
from distributor.models.distribution import ACCOUNT_ROLES
from distributor.services.instruction import InstructionBuilder
from distributor.services.referral import ReferralLookupClient
from distributor.utils.exceptions import ArithmeticOverflowError


async def build(payer: str, amount: str, code: str | None) -> int:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)
    config = settings.to_distribution_config()

    async with ReferralLookupClient(
        settings.referral_api_base_url,
        timeout=settings.referral_lookup_timeout,
    ) as client:
        builder = InstructionBuilder(
            config,
            client,
            lookup_timeout=settings.referral_lookup_timeout,
        )
        try:
            result = await builder.build(amount, payer, code)
        except (ValueError, ArithmeticOverflowError) as e:
            logger.error(f"Cannot build instruction: {e}")
            return 1

    for warning in result.warnings:
        logger.warning(warning)

    print(f"Program:  {result.instruction.program_id}")
    print(f"Data hex: {result.data.hex()}")
    print(f"Data b64: {base64.b64encode(result.data).decode()}")
    print()
    print("Accounts:")
    for role, meta in zip(ACCOUNT_ROLES, result.instruction.accounts):
        flags = ("signer " if meta.is_signer else "") + ("writable" if meta.is_writable else "readonly")
        print(f"  {role.value:<16} {meta.pubkey}  [{flags}]")
    print()
    print(format_allocation(result.allocation))
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Build a payment distribution instruction"
    )
    parser.add_argument("--payer", required=True, help="Payer wallet (base58)")
    parser.add_argument("--amount", required=True, help="Amount in SOL, e.g. 1.5")
    parser.add_argument("--referral-code", default=None, help="Optional referral code")
    args = parser.parse_args()

    sys.exit(asyncio.run(build(args.payer, args.amount, args.referral_code)))


if __name__ == "__main__":
    main()
