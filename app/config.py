from pydantic_settings import BaseSettings
from typing import List, Optional
from urllib.parse import quote_plus

class Settings(BaseSettings):
    ENV: str = "local"
    LOG_LEVEL: str = "INFO"

    postgres_user: str = "postgres"
    postgres_password: str = ""
    postgres_db: str = "storefront"
    postgres_host: str = "localhost"
    postgres_port: str = "5432"
    DATABASE_URL: Optional[str] = None


    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    ADMIN_EMAILS: List[str] = []
    SERVICE_KEY: Optional[str] = None
    CORS_ORIGINS: List[str] = ["*"]

    # R2 storage
    R2_ACCOUNT_ID: Optional[str] = None
    R2_ACCESS_KEY_ID: Optional[str] = None
    R2_SECRET_ACCESS_KEY: Optional[str] = None
    R2_BUCKET_NAME: str = "script-assets"
    R2_PUBLIC_BASE: str = "https://storage.example.com"

    DOWNLOAD_URL_TTL_SECONDS: int = 300
    DOWNLOAD_FILE_EXTENSION: str = "zip"

    # Crypto payments (manually settled)
    BINANCE_API_KEY: Optional[str] = None
    BINANCE_API_SECRET: Optional[str] = None
    PAYMENT_DEPOSIT_ADDRESS: Optional[str] = None
    PAYMENT_CURRENCY: str = "BNB"
    PAYMENT_CHECKOUT_URL: str = "https://pay.binance.com/checkout"

    # Notifications
    DISCORD_BOT_TOKEN: Optional[str] = None
    DISCORD_API_BASE: str = "https://discord.com/api/v10"
    BREVO_API_KEY: Optional[str] = None
    MAIL_FROM: str = "onboarding@example.com"
    STORE_NAME: str = "SFAXIEN SCRIPTS"
    NOTIFY_TIMEOUT_SECONDS: int = 10
    NOTIFY_MAX_WORKERS: int = 8

    AD_DEFAULT_TTL_DAYS: int = 7

    @property
    def database_url(self):
        if self.DATABASE_URL:
            return self.DATABASE_URL
        encoded_password = quote_plus(self.postgres_password)
        return (
            f"postgresql+psycopg2://{self.postgres_user}:"
            f"{encoded_password}@{self.postgres_host}:"
            f"{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def payments_configured(self) -> bool:
        return bool(
            self.BINANCE_API_KEY
            and self.BINANCE_API_SECRET
            and self.PAYMENT_DEPOSIT_ADDRESS
        )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "allow"

settings = Settings()
