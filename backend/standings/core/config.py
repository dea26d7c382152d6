"""
Configuration module for the Contest Standings service.
Loads environment variables and provides typed settings.
"""
from decimal import Decimal
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Prize Distribution
    default_prize_tiers: List[Decimal] = Field(
        default=[Decimal("0.69"), Decimal("0.20"), Decimal("0.11")],
        description="Prize pool fractions for 1st, 2nd, 3rd... when a contest supplies none",
    )
    payout_quantum: Decimal = Field(
        default=Decimal("0.000000001"),
        gt=0,
        description="Smallest payout unit; per-participant amounts are truncated to it",
    )

    # Rank change highlighting
    rank_change_hold_seconds: float = Field(
        default=2.0,
        ge=0,
        description="How long a rank movement stays visible after an update",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ...)",
    )

    # HTTP adapter
    cors_origins: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ],
        description="Origins allowed to call the standings API",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience export
settings = get_settings()
