from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    DATABASE_URL: str
    SECRET_KEY: str
    PROJECT_ID: str = "therockwastemanagement"
    APP_NAME: str = "DustbinPro"
    PORT: int = 8080
    LOG_LEVEL: str = "INFO"

    # Session cookie
    SESSION_COOKIE_NAME: str = "portal_session"
    SESSION_IDLE_MINUTES: int = 30

    # Dashboard
    NOTIFICATION_LIMIT: int = 5

    # Outbound mail (disabled when SMTP_HOST is empty)
    SMTP_HOST: str | None = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: str | None = None
    SMTP_PASSWORD: str | None = None
    MAIL_FROM: str = "DustbinPro <noreply@dustbinpro.com>"

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
