"""Configuration management using Pydantic Settings"""

from decimal import Decimal
from typing import Dict

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Database
    database_url: str = "sqlite:///./household_ledger.db"

    # Service
    service_name: str = "household-ledger"
    log_level: str = "INFO"

    # Views
    trend_months: int = 6
    recent_transactions_limit: int = 3

    # Seed incomes for members that have not been saved yet
    default_member_incomes: Dict[str, Decimal] = {"A": Decimal("0"), "B": Decimal("0")}

    # Household settings used until they are saved
    default_family_name: str = "Household"
    default_alert_threshold: int = 80


settings = Settings()
