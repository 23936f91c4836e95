from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    app_env: str = "dev"
    log_level: str = "INFO"
    port: int = 8000

    currency_symbol: str = "₦"

    admin_api_url: str | None = None
    admin_api_token: str | None = None
    admin_api_timeout: float = 30.0

    @field_validator("admin_api_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v):
        if v in (None, ""):
            return None
        if isinstance(v, str):
            return v.strip().rstrip("/") or None
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper() or "INFO"
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
