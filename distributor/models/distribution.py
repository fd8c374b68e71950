"""
Distribution data models.

Pydantic models for validated configuration and decoded requests,
dataclasses for typed account views and settlement results.
"""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from solders.instruction import Instruction
from solders.pubkey import Pubkey

from allocator import AllocationCaps, AllocationResult
from allocator.constants import (
    DEFAULT_FIRST_REFERRER_CAP,
    DEFAULT_SECOND_REFERRER_CAP,
    U64_MAX,
)
from distributor.utils.validation import normalize_pubkey


class DistributionConfig(BaseModel):
    """Immutable process-wide configuration shared by builder and engine.

    Caps are validated here once; nothing re-checks them per payment.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )

    program_id: Pubkey = Field(..., description="Payment distributor program id")
    treasury_wallet: Pubkey = Field(..., description="Well-known treasury address")
    team_wallet: Pubkey = Field(..., description="Well-known team address")
    first_referrer_cap: int = Field(
        default=DEFAULT_FIRST_REFERRER_CAP,
        ge=0,
        le=U64_MAX,
        description="First-tier referral cap in lamports",
    )
    second_referrer_cap: int = Field(
        default=DEFAULT_SECOND_REFERRER_CAP,
        ge=0,
        le=U64_MAX,
        description="Second-tier referral cap in lamports",
    )

    @field_validator("program_id", "treasury_wallet", "team_wallet", mode="before")
    @classmethod
    def parse_pubkey(cls, v: object) -> Pubkey:
        """Accept base58 strings as well as Pubkey instances."""
        if isinstance(v, (str, Pubkey)):
            return normalize_pubkey(v)
        raise ValueError(f"Expected base58 string or Pubkey, got {type(v).__name__}")

    @property
    def caps(self) -> AllocationCaps:
        return AllocationCaps(
            first_referrer_cap=self.first_referrer_cap,
            second_referrer_cap=self.second_referrer_cap,
        )


class PaymentRequest(BaseModel):
    """Decoded instruction payload. Carries no addresses."""

    model_config = ConfigDict(frozen=True)

    gross_amount: int = Field(..., ge=0, le=U64_MAX, description="Payment in lamports")
    has_first_referrer: bool = False
    has_second_referrer: bool = False


class AccountRole(str, Enum):
    """Positional role of an entry in the settlement account list."""

    PAYER = "payer"
    TREASURY = "treasury"
    TEAM = "team"
    FIRST_REFERRER = "first_referrer"
    SECOND_REFERRER = "second_referrer"
    SYSTEM_PROGRAM = "system_program"


ACCOUNT_ROLES: tuple[AccountRole, ...] = tuple(AccountRole)


@dataclass(frozen=True)
class ReferrerPair:
    """Resolved referral chain: zero, one or two wallets."""

    first: Pubkey | None = None
    second: Pubkey | None = None

    @property
    def has_first(self) -> bool:
        return self.first is not None

    @property
    def has_second(self) -> bool:
        return self.second is not None

    @property
    def count(self) -> int:
        return int(self.has_first) + int(self.has_second)


@dataclass(frozen=True)
class AccountInfo:
    """Account entry as seen by the settlement engine."""

    key: Pubkey
    is_signer: bool = False
    is_writable: bool = False


@dataclass(frozen=True)
class SettlementAccounts:
    """Typed view of the 6-slot account list after validation."""

    payer: Pubkey
    treasury: Pubkey
    team: Pubkey
    referrers: ReferrerPair
    system_program: Pubkey


@dataclass(frozen=True)
class Transfer:
    """Single lamport transfer out of the payer account."""

    role: AccountRole
    destination: Pubkey
    lamports: int


@dataclass
class SettlementReceipt:
    """Result of a committed settlement."""

    payer: Pubkey
    request: PaymentRequest
    allocation: AllocationResult
    transfers: list[Transfer] = field(default_factory=list)

    @property
    def total_transferred(self) -> int:
        return sum(t.lamports for t in self.transfers)


@dataclass
class BuildResult:
    """Instruction produced by the builder together with its inputs."""

    instruction: Instruction
    request: PaymentRequest
    referrers: ReferrerPair
    allocation: AllocationResult
    warnings: list[str] = field(default_factory=list)

    @property
    def data(self) -> bytes:
        return bytes(self.instruction.data)
