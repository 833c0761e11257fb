"""
Application Configuration — Environment & Settings
Centralizes merchant credentials, gateway environment and frontend origin
from .env with Pydantic Settings for validation.
"""
from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings

# Resolve paths relative to backend/ directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # --- Core ---
    APP_NAME: str = "PhonePe Checkout Bridge"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # --- Frontend (CORS origin + post-payment redirect target) ---
    FRONTEND_ORIGIN: str = "https://joyrentals.store"
    FRONTEND_REDIRECT_PATH: str = "/phonepe-redirect.html"

    # --- Gateway ---
    PHONEPE_AUTH_MODE: str = "TOKEN"   # TOKEN | CHECKSUM
    PHONEPE_ENV: str = "TEST"          # TEST | PROD
    PHONEPE_HTTP_TIMEOUT: float = 30.0

    # Token (OAuth client-credentials) variant
    PHONEPE_CLIENT_ID: str = ""
    PHONEPE_CLIENT_VERSION: str = ""
    PHONEPE_CLIENT_SECRET: str = ""

    # Checksum (salted X-VERIFY) variant
    PHONEPE_MERCHANT_ID: str = ""
    PHONEPE_SALT_KEY: str = ""
    PHONEPE_SALT_INDEX: str = "1"

    ORDER_ID_PREFIX: str = "ORD"

    # --- Throttling ---
    RATE_LIMIT_REQUESTS: int = 10
    RATE_LIMIT_WINDOW: int = 60

    # --- Logging ---
    LOG_DIR: str = str(BASE_DIR / "logs")

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True

    @property
    def auth_mode(self) -> str:
        return (self.PHONEPE_AUTH_MODE or "TOKEN").strip().upper()

    @property
    def is_production(self) -> bool:
        return (self.PHONEPE_ENV or "TEST").strip().upper() == "PROD"

    @property
    def redirect_url(self) -> str:
        """Fixed post-payment landing page; never taken from the request."""
        return f"{self.FRONTEND_ORIGIN.rstrip('/')}{self.FRONTEND_REDIRECT_PATH}"


@lru_cache()
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
