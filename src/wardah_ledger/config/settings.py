"""Configuration settings for Wardah Ledger."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Flat settings read from environment variables (and `.env`)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Supabase / PostgREST
    supabase_url: str | None = Field(default=None, validation_alias="SUPABASE_URL")
    supabase_anon_key: SecretStr | None = Field(
        default=None, validation_alias="SUPABASE_ANON_KEY"
    )
    supabase_access_token: SecretStr | None = Field(
        default=None, validation_alias="SUPABASE_ACCESS_TOKEN"
    )
    supabase_schema: str = Field(default="public", validation_alias="SUPABASE_SCHEMA")
    supabase_timeout: float = Field(default=30.0, validation_alias="SUPABASE_TIMEOUT")
    # Must not exceed the server's max_rows, or a full page reads as the last one
    supabase_page_size: int = Field(
        default=1000, ge=1, validation_alias="SUPABASE_PAGE_SIZE"
    )

    # Trial balance sources
    trial_balance_view: str = Field(
        default="v_trial_balance", validation_alias="TRIAL_BALANCE_VIEW"
    )
    trial_balance_rpc: str = Field(
        default="rpc_get_trial_balance", validation_alias="TRIAL_BALANCE_RPC"
    )
    # How an empty answer from the precomputed view is read
    empty_service_result: Literal["failure", "no_data"] = Field(
        default="failure", validation_alias="EMPTY_SERVICE_RESULT"
    )

    # Tenant and presentation
    org_id: str | None = Field(default=None, validation_alias="WARDAH_ORG_ID")
    report_language: Literal["ar", "en"] = Field(
        default="ar", validation_alias="REPORT_LANGUAGE"
    )
    export_dir: Path = Field(default=Path("."), validation_alias="EXPORT_DIR")
    pdf_font_path: Path | None = Field(default=None, validation_alias="PDF_FONT_PATH")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", validation_alias="LOG_LEVEL"
    )
    log_format: Literal["json", "console"] = Field(
        default="console", validation_alias="LOG_FORMAT"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
