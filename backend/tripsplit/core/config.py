"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from decimal import Decimal
from typing import List, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "TripSplit"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:8080"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Money
    MONEY_DECIMAL_PLACES: int = 2
    # Balances at or below this magnitude are treated as settled.
    # Set to 1 for currencies without a sub-unit.
    SETTLEMENT_TOLERANCE: Decimal = Decimal("0.01")

    @field_validator("SETTLEMENT_TOLERANCE")
    @classmethod
    def check_tolerance(cls, v: Decimal) -> Decimal:
        """Reject a negative settlement tolerance."""
        if v < 0:
            raise ValueError("SETTLEMENT_TOLERANCE must not be negative")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
