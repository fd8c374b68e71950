"""
Default constants for the payment allocator.

Percentages, absolute referral caps and integer bounds shared by the
allocation algorithm and its callers. All amounts are in lamports.
"""

# 1 SOL = 1_000_000_000 lamports
LAMPORTS_PER_SOL = 10**9

# Share percentages (integer, applied with floor division)
TREASURY_PERCENT = 50
FIRST_REFERRER_PERCENT = 20
SECOND_REFERRER_PERCENT = 5

# Absolute caps for referral payouts
DEFAULT_FIRST_REFERRER_CAP = 200_000_000  # 0.2 SOL
DEFAULT_SECOND_REFERRER_CAP = 50_000_000  # 0.05 SOL

# Amount type is an unsigned 64-bit integer; products use a 128-bit intermediate
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1
