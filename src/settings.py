from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def is_in_memory_dsn(dsn: str) -> bool:
    """
    True when the DSN points at an in-memory SQLite database.
    In-memory databases need a single shared connection, otherwise every
    new connection would see an empty database.
    """
    return dsn in ("sqlite://", "sqlite:///:memory:")


class Database(BaseModel):
    """SQLite database settings."""

    # In-memory by default, all state is reset when the process exits
    dsn: str = "sqlite://"
    echo: bool = False


class Dashboard(BaseModel):
    """Dashboard defaults and start-up behaviour."""

    default_country: str = "Honduras"
    default_fiscal_year: str = "FY25"
    default_chart_type: Literal["PIE", "BAR", "LINE"] = "BAR"
    seed_sample_data: bool = True
    log_level: str = "INFO"
    debug: bool = False


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )
    database: Database = Field(default_factory=lambda: Database())
    dashboard: Dashboard = Field(default_factory=lambda: Dashboard())


settings = Settings()
