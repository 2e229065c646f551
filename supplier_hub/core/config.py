"""
Application configuration
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import List, Optional


# Variables the relay cannot serve authenticated traffic without
REQUIRED_ENV_VARS = ("API_KEY",)


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Integration API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Relay shared secret (Authorization: Bearer <API_KEY>)
    API_KEY: Optional[str] = None

    # Downstream platforms
    SUPPLIER_PORTAL_URL: str = "https://supplier-bice.vercel.app"
    MENU_PLATFORM_URL: str = "https://micron-dusky.vercel.app"
    MAIN_SYSTEM_URL: str = "http://localhost:5173"
    SUPPLIER_PORTAL_API_KEY: Optional[str] = None
    MENU_PLATFORM_API_KEY: Optional[str] = None
    DOWNSTREAM_TIMEOUT_SECONDS: float = 30.0

    # Database
    DATABASE_URL: str = "sqlite:///./supplier_hub.db"

    # Portal security
    JWT_SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080  # 7 days

    # Business defaults
    DEFAULT_CURRENCY: str = "USD"
    DEFAULT_PAYMENT_TERMS_DAYS: int = 30

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=True
    )

    @property
    def supplier_portal_token(self) -> Optional[str]:
        return self.SUPPLIER_PORTAL_API_KEY or self.API_KEY

    @property
    def menu_platform_token(self) -> Optional[str]:
        return self.MENU_PLATFORM_API_KEY or self.API_KEY

    @property
    def missing_env_vars(self) -> List[str]:
        return [name for name in REQUIRED_ENV_VARS if not getattr(self, name)]


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
