"""Pydantic models for allocator."""

from pydantic import BaseModel, ConfigDict, Field

from allocator.constants import (
    DEFAULT_FIRST_REFERRER_CAP,
    DEFAULT_SECOND_REFERRER_CAP,
    U64_MAX,
)
from allocator.types import AllocationDict


class AllocationCaps(BaseModel):
    """Absolute referral caps in lamports.

    Validated once on construction; allocation calls trust these values.
    """

    model_config = ConfigDict(frozen=True)

    first_referrer_cap: int = Field(
        default=DEFAULT_FIRST_REFERRER_CAP,
        ge=0,
        le=U64_MAX,
        description="Maximum lamports paid to the first-tier referrer",
    )
    second_referrer_cap: int = Field(
        default=DEFAULT_SECOND_REFERRER_CAP,
        ge=0,
        le=U64_MAX,
        description="Maximum lamports paid to the second-tier referrer",
    )


class AllocationResult(BaseModel):
    """Exact split of a gross amount.

    ``team`` is the residual, so the four shares always sum to the gross amount.
    """

    model_config = ConfigDict(frozen=True)

    treasury: int = Field(..., ge=0, description="Treasury share (exactly half, floored)")
    team: int = Field(..., ge=0, description="Team share (residual)")
    first: int = Field(default=0, ge=0, description="First-tier referrer share")
    second: int = Field(default=0, ge=0, description="Second-tier referrer share")

    @property
    def total(self) -> int:
        """Sum of all shares."""
        return self.treasury + self.team + self.first + self.second

    def as_dict(self) -> AllocationDict:
        return AllocationDict(
            gross_amount=self.total,
            treasury=self.treasury,
            team=self.team,
            first=self.first,
            second=self.second,
        )
