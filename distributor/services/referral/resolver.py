"""
Referral chain resolver.

Resolves a referral code into at most two referrer wallets with two
sequential lookups. Any failure degrades the chain instead of failing:
no first tier means no lookup for the second tier.
"""

import asyncio
from dataclasses import dataclass, field

from loguru import logger
from solders.pubkey import Pubkey

from distributor.models.distribution import ReferrerPair
from distributor.services.referral.lookup_client import ReferralLookup
from distributor.utils.exceptions import ReferralLookupError
from distributor.utils.security import mask_referral_code
from distributor.utils.validation import validate_referral_code, validate_solana_address


@dataclass
class ResolvedReferrers:
    """Referral chain plus the warnings produced while resolving it."""

    referrers: ReferrerPair = field(default_factory=ReferrerPair)
    warnings: list[str] = field(default_factory=list)


async def _lookup_tier(
    lookup: ReferralLookup,
    key: str,
    tier: str,
    timeout: float | None,
    warnings: list[str],
) -> Pubkey | None:
    """Run one lookup; return the wallet or record a warning and return None."""
    try:
        result = await asyncio.wait_for(lookup.lookup(key), timeout)
    except ReferralLookupError as e:
        warning = f"{tier.capitalize()}-tier referrer lookup failed: {e}"
    except TimeoutError:
        warning = f"{tier.capitalize()}-tier referrer lookup timed out"
    except Exception as e:
        warning = f"{tier.capitalize()}-tier referrer lookup failed unexpectedly: {e!r}"
    else:
        if result.success and result.referrer_wallet:
            is_valid, error = validate_solana_address(result.referrer_wallet)
            if is_valid:
                return Pubkey.from_string(result.referrer_wallet.strip())
            warning = f"{tier.capitalize()}-tier referrer wallet rejected: {error}"
        else:
            reason = f": {result.message}" if result.message else ""
            warning = f"{tier.capitalize()}-tier referrer not found{reason}"

    logger.warning(warning)
    warnings.append(warning)
    return None


async def resolve_referrers(
    lookup: ReferralLookup,
    referral_code: str | None,
    timeout: float | None = None,
) -> ResolvedReferrers:
    """
    Resolve a referral code into a first and second tier referrer.

    The first lookup uses the code; the second uses the first-tier wallet
    to find its own referrer. Lookups are never retried. A code that is not
    a valid URL path segment is rejected without any lookup.

    Args:
        lookup: Referral lookup implementation
        referral_code: Code supplied by the payer, if any
        timeout: Per-lookup timeout in seconds (None for no extra limit)

    Returns:
        ResolvedReferrers with 0, 1 or 2 wallets and any warnings
    """
    resolved = ResolvedReferrers()
    code = (referral_code or "").strip()
    if not code:
        return resolved

    if not validate_referral_code(code):
        warning = f"Referral code {mask_referral_code(code)} rejected: invalid format"
        logger.warning(warning)
        resolved.warnings.append(warning)
        return resolved

    first = await _lookup_tier(lookup, code, "first", timeout, resolved.warnings)
    if first is None:
        logger.info(f"No referrers resolved for code {mask_referral_code(code)}")
        return resolved

    second = await _lookup_tier(lookup, str(first), "second", timeout, resolved.warnings)
    resolved.referrers = ReferrerPair(first=first, second=second)

    logger.debug(
        f"Resolved {resolved.referrers.count} referrer(s) for code {mask_referral_code(code)}"
    )
    return resolved
