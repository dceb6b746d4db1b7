from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    DATABASE_URL: str
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # Bounded store calls - every statement and pool checkout gives up after these
    DB_COMMAND_TIMEOUT_SECONDS: float = 10.0
    DB_POOL_TIMEOUT_SECONDS: float = 10.0

    # Stripe
    STRIPE_SECRET_KEY: Optional[str] = None
    STRIPE_CURRENCY: str = "usd"

    # Firebase Admin (service account JSON used to delete auth accounts)
    FIREBASE_CREDENTIALS_PATH: Optional[str] = None

    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cors_origin_list(self) -> list[str]:
        """Comma separated CORS origins from env"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
