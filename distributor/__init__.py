"""
Payment Distributor.

Client-side instruction builder and settlement engine for splitting a
payment between treasury, team and a two-tier referral chain.
"""

__version__ = "1.0.0"
