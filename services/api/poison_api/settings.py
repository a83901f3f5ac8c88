from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_title: str = "Poison Transient API"
    reference_flux: Optional[float] = None
    strict_params: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="POISON_", env_file=".env", extra="ignore")


settings = Settings()


def get_settings() -> Settings:
    return settings
