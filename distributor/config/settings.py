"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
Components never read settings directly: they receive the immutable
DistributionConfig built by ``Settings.to_distribution_config()``.
"""

from functools import lru_cache

from loguru import logger
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from allocator.constants import (
    DEFAULT_FIRST_REFERRER_CAP,
    DEFAULT_SECOND_REFERRER_CAP,
    U64_MAX,
)
from distributor.config.constants import REFERRAL_LOOKUP_TIMEOUT
from distributor.models.distribution import DistributionConfig
from distributor.utils.validation import validate_solana_address


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Program and well-known wallets (base58)
    program_id: str
    treasury_wallet: str
    team_wallet: str

    # Referral caps (lamports)
    first_referrer_cap_lamports: int = Field(
        default=DEFAULT_FIRST_REFERRER_CAP,
        ge=0,
        le=U64_MAX,
        description="Absolute cap for the first-tier referral share (0.2 SOL)",
    )
    second_referrer_cap_lamports: int = Field(
        default=DEFAULT_SECOND_REFERRER_CAP,
        ge=0,
        le=U64_MAX,
        description="Absolute cap for the second-tier referral share (0.05 SOL)",
    )

    # Referral lookup service
    referral_api_base_url: str = "http://localhost:3000"
    referral_lookup_timeout: float = Field(
        default=REFERRAL_LOOKUP_TIMEOUT,
        gt=0,
        description="Timeout for a single referral lookup in seconds",
    )

    # Application
    environment: str = "production"
    debug: bool = False
    log_level: str = "INFO"
    log_file: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("program_id", "treasury_wallet", "team_wallet")
    @classmethod
    def validate_address(cls, v: str) -> str:
        """Validate base58 address format."""
        is_valid, error = validate_solana_address(v)
        if not is_valid:
            raise ValueError(f"{error}: {v!r}")
        return v.strip()

    @field_validator("referral_api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL without trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("REFERRAL_API_BASE_URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize log level name."""
        level = v.strip().upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def validate_wallets(self) -> "Settings":
        """Reject wallet configurations that would misroute funds."""
        if self.treasury_wallet == self.program_id or self.team_wallet == self.program_id:
            raise ValueError("TREASURY_WALLET and TEAM_WALLET must not equal PROGRAM_ID")
        if self.treasury_wallet == self.team_wallet:
            logger.warning(
                "TREASURY_WALLET equals TEAM_WALLET; treasury and team shares "
                "will land in the same account"
            )
        return self

    @model_validator(mode="after")
    def validate_production(self) -> "Settings":
        """Validate production-specific requirements."""
        if self.environment == "production" and self.debug:
            raise ValueError(
                "DEBUG must be False in production environment. "
                "Set DEBUG=false in your .env file."
            )
        return self

    def to_distribution_config(self) -> DistributionConfig:
        """Build the immutable configuration injected into builder and engine."""
        return DistributionConfig(
            program_id=self.program_id,
            treasury_wallet=self.treasury_wallet,
            team_wallet=self.team_wallet,
            first_referrer_cap=self.first_referrer_cap_lamports,
            second_referrer_cap=self.second_referrer_cap_lamports,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
