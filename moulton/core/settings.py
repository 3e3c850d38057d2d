from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class Env(str, Enum):
    DEV = "dev"
    HML = "hml"
    PROD = "prod"


class Settings(BaseSettings):
    APP_ENV: Env = Env.DEV
    DEBUG: bool = False

    # Signing key for the __session cookie. Set a strong one in production.
    SESSION_SECRET: str = "dev-change-me"
    SESSION_COOKIE_NAME: str = "__session"
    # None keeps it a browser-session cookie with no signature age limit
    SESSION_MAX_AGE: int | None = None
    SECURE_COOKIES: bool = True

    NEWSLETTER_PROVIDER_URL: str = "https://buttondown.email"
    NEWSLETTER_LIST: str = "moulton"
    NEWSLETTER_TZ: str = "UTC"

    SITE_URL: str = "https://readmoulton.com"
    SITE_TITLE: str = "Moulton"
    SITE_DESCRIPTION: str = "A Remix Newsletter"

    LOG_JSON: bool = True
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def subscribe_url(self) -> str:
        base = self.NEWSLETTER_PROVIDER_URL.rstrip("/")
        return f"{base}/api/emails/embed-subscribe/{self.NEWSLETTER_LIST}"


# cria instância global
settings = Settings()
