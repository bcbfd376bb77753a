from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ukvalidator.core.constants import BATCH_MAX_ITEMS, OFCOM_BASE_URL


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = Field(default="UK Number Validator", alias="APP_NAME")
    app_env: str = Field(default="local", alias="APP_ENV")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    rules_path: str = Field(default="prefixes.json", alias="RULES_PATH")
    data_dir: str = Field(default="data", alias="DATA_DIR")
    ofcom_base_url: str = Field(default=OFCOM_BASE_URL, alias="OFCOM_BASE_URL")
    download_timeout_s: int = Field(default=60, alias="DOWNLOAD_TIMEOUT_S")
    status_policy: str = Field(default="current", alias="STATUS_POLICY")
    status_policy_file: str | None = Field(default=None, alias="STATUS_POLICY_FILE")
    batch_max_items: int = Field(default=BATCH_MAX_ITEMS, alias="BATCH_MAX_ITEMS")
    cors_allow_origins: str = Field(default="*", alias="CORS_ALLOW_ORIGINS")

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
