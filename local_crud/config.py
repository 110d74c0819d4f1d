from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from local_crud import __version__


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    database_url: str = Field(default="sqlite+pysqlite:///./local_crud.db", alias="DATABASE_URL")
    library_id: int = Field(default=1, alias="LIBRARY_ID")

    plugin_name: str = Field(default="zotero-local-crud", alias="PLUGIN_NAME")
    plugin_version: str = Field(default=__version__, alias="PLUGIN_VERSION")
    host_version: str = Field(default="7.0", alias="HOST_VERSION")

    url_prefix: str = Field(default="", alias="URL_PREFIX")
    default_search_limit: int = Field(default=100, alias="DEFAULT_SEARCH_LIMIT")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=23119, alias="PORT")

    @model_validator(mode="after")
    def validate_required_runtime(self) -> "Settings":
        if not self.database_url.strip():
            raise ValueError("DATABASE_URL is required")
        if self.library_id < 1:
            raise ValueError("LIBRARY_ID must be >= 1")
        if self.url_prefix and (not self.url_prefix.startswith("/") or self.url_prefix.endswith("/")):
            raise ValueError("URL_PREFIX must start with '/' and must not end with '/'")
        if self.default_search_limit < 1:
            raise ValueError("DEFAULT_SEARCH_LIMIT must be >= 1")
        if not 0 < self.port < 65536:
            raise ValueError("PORT must be between 1 and 65535")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
