"""
Security utilities for masking sensitive data in logs.

Provides functions to safely mask:
- Wallet addresses
- Referral codes
"""

from solders.pubkey import Pubkey


def mask_address(address: str | Pubkey | None) -> str:
    """
    Mask wallet address for logging: 9eTn...jxeT

    Args:
        address: Base58 wallet address or Pubkey to mask

    Returns:
        Masked address showing first 4 and last 4 characters

    Examples:
        >>> mask_address("9eTnS2cYd1mxFvtsm76Hd24Rt5KFdnLQn9zJo9b3jxeT")
        '9eTn...jxeT'
        >>> mask_address(None)
        '***'
        >>> mask_address("short")
        '***'
    """
    if address is None:
        return "***"
    text = str(address)
    if len(text) < 10:
        return "***"
    return f"{text[:4]}...{text[-4:]}"


def mask_referral_code(code: str | None, show_chars: int = 2) -> str:
    """
    Mask referral code (codes are bearer identifiers for a referrer).

    Examples:
        >>> mask_referral_code("SIMO-ABCDEF")
        'SI...EF'
        >>> mask_referral_code("abc")
        '***'
    """
    if not code or len(code) <= show_chars * 2:
        return "***"
    return f"{code[:show_chars]}...{code[-show_chars:]}"
