"""Configuration management using Pydantic Settings"""

from decimal import Decimal
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Wealth tracker backend (trip, expense and deposit store)
    wealth_api_base: str = "http://localhost:8080/api"
    wealth_api_token: Optional[str] = None

    # Service
    service_name: str = "wealth-core"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Computation
    settlement_epsilon: Decimal = Decimal("0.01")
    trend_window_months: int = 6  # income vs expense chart
    asset_window_months: int = 12  # savings/asset growth chart
    top_categories_limit: int = 5


settings = Settings()
