"""Data models for payment distribution."""

from distributor.models.distribution import (
    ACCOUNT_ROLES,
    AccountInfo,
    AccountRole,
    BuildResult,
    DistributionConfig,
    PaymentRequest,
    ReferrerPair,
    SettlementAccounts,
    SettlementReceipt,
    Transfer,
)

__all__ = [
    "ACCOUNT_ROLES",
    "AccountInfo",
    "AccountRole",
    "BuildResult",
    "DistributionConfig",
    "PaymentRequest",
    "ReferrerPair",
    "SettlementAccounts",
    "SettlementReceipt",
    "Transfer",
]
