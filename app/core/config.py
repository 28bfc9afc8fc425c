from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Environment mode: dev or prod
    ENV: Literal["dev", "prod"] = "dev"

    # API Keys
    CMC_API_KEY: str | None = None
    COINGECKO_API_KEY: str | None = None

    # Upstream endpoints
    CMC_MAP_URL: str = "https://pro-api.coinmarketcap.com/v1/cryptocurrency/map"
    COINGECKO_LIST_URL: str = "https://api.coingecko.com/api/v3/coins/list"
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None  # e.g. "logs/app.log"; rotated at 10 MB
    SLACK_WEBHOOK_URL: str | None = None

    # Matching / search
    MATCH_POLICY: Literal["symbol_name", "symbol"] = "symbol_name"
    SEARCH_MIN_QUERY_LENGTH: int = 3
    SEARCH_DEBOUNCE_MS: int = 500

    # Catalog refresh (0 disables the background refresher)
    CATALOG_REFRESH_SECONDS: int = 0

    # Docs Configuration
    DOCS_ENABLED: bool | None = None  # Override docs setting (None = auto based on ENV)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",  # ignore unrelated keys in local .env
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENV == "prod"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENV == "dev"

    @property
    def debug_enabled(self) -> bool:
        """Debug mode is only enabled in development."""
        return self.is_development

    @property
    def effective_log_level(self) -> str:
        """Return appropriate log level based on environment."""
        if self.is_production:
            # In production, minimum INFO level (ignore DEBUG)
            return self.LOG_LEVEL if self.LOG_LEVEL.upper() != "DEBUG" else "INFO"
        return self.LOG_LEVEL

    @property
    def docs_enabled(self) -> bool:
        """Swagger/ReDoc docs enabled based on environment or override."""
        if self.DOCS_ENABLED is not None:
            return self.DOCS_ENABLED
        return self.is_development

    @property
    def search_debounce_seconds(self) -> float:
        return max(self.SEARCH_DEBOUNCE_MS, 0) / 1000.0


settings = Settings()
