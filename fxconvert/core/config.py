from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    DATA_DIR, STORAGE_BACKEND, BASE_CURRENCY, RATES_CACHE_TTL_SECONDS).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Currency Converter"
    debug: bool = False
    version: str = "0.1.0"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "fxconvert.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided
    storage_backend: str = "sqlite"

    # Exchange rates / caching
    base_currency: str = "USD"
    exchange_api_base_url: str = "https://api.exchangerate-api.com/v4/latest"
    rates_cache_ttl_seconds: int = 24 * 60 * 60
    http_timeout_seconds: float = 5.0

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        allowed = {"sqlite", "memory"}
        if self.storage_backend not in allowed:
            raise ValueError(
                f"Unsupported storage_backend '{self.storage_backend}'. Allowed: {allowed}"
            )
        if self.rates_cache_ttl_seconds <= 0:
            raise ValueError("rates_cache_ttl_seconds must be positive")
        self.base_currency = self.base_currency.upper()
        if self.storage_backend == "sqlite":
            if self.db_path is None:
                self.db_path = self.data_dir / self.db_filename
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def rates_url(self) -> str:
        return f"{self.exchange_api_base_url.rstrip('/')}/{self.base_currency}"


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
