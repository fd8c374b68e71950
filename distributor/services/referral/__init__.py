"""
Referral resolution package.

- lookup_client: aiohttp client for the referral lookup service
- resolver: two-tier resolution with graceful degradation
"""

from distributor.services.referral.lookup_client import (
    LookupResult,
    ReferralLookup,
    ReferralLookupClient,
    parse_lookup_response,
)
from distributor.services.referral.resolver import ResolvedReferrers, resolve_referrers

__all__ = [
    "LookupResult",
    "ReferralLookup",
    "ReferralLookupClient",
    "ResolvedReferrers",
    "parse_lookup_response",
    "resolve_referrers",
]
