from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    SHOPIFY_STORE_DOMAIN: str
    SHOPIFY_ADMIN_TOKEN: str
    SHOPIFY_API_VERSION: str = "2024-10"
    ORDER_FETCH_LIMIT: int = Field(default=250, ge=1, le=250)
    RECENCY_WINDOW_DAYS: int = Field(default=90, ge=1)
    GIFT_METAFIELD_NAMESPACE: str = "gift"
    GIFT_METAFIELD_KEY: str = "message"
    REQUEST_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

@lru_cache
def get_settings() -> Settings:
    return Settings()
