"""Configuration settings for the GA4 query adapter."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from ga4_adapter.contracts.filters import ScopingFilter


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GA4_", env_file=".env", extra="ignore")

    PROPERTY_ID: str = ""
    DOMAIN: str = ""
    CREDENTIALS_FILE: str = ""

    SCOPING_DIMENSION: str = "hostName"
    LOG_LEVEL: str = "INFO"

    @property
    def is_configured(self) -> bool:
        return bool(self.PROPERTY_ID and self.DOMAIN and self.CREDENTIALS_FILE)

    @property
    def scope(self) -> ScopingFilter:
        return ScopingFilter(dimension=self.SCOPING_DIMENSION, value=self.DOMAIN)


settings = Settings()
