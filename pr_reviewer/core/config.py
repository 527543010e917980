from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):  # type: ignore[misc]
    """Runtime configuration.

    Values can come from GitHub Actions inputs (``INPUT_*``), plain
    environment variables or a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    # GitHub
    github_token: SecretStr = Field(
        default=...,
        validation_alias=AliasChoices("INPUT_GITHUB_TOKEN", "GITHUB_TOKEN"),
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        validation_alias=AliasChoices("GITHUB_API_URL", "github_api_url"),
    )
    github_event_path: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_EVENT_PATH", "github_event_path"),
    )
    github_event_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_EVENT_NAME", "github_event_name"),
    )

    # OpenAI
    openai_api_key: SecretStr = Field(
        default=...,
        validation_alias=AliasChoices("INPUT_OPENAI_API_KEY", "OPENAI_API_KEY"),
    )
    openai_api_model: str = Field(
        default="gpt-4o-mini",
        validation_alias=AliasChoices("INPUT_OPENAI_API_MODEL", "OPENAI_API_MODEL"),
    )
    openai_base_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_BASE_URL", "openai_base_url"),
    )

    # LLM sampling
    llm_temperature: float = 0.1
    llm_top_p: float = 1.0
    llm_max_tokens: int = 700
    llm_timeout_seconds: float = 120.0

    # Review Settings
    exclude: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_EXCLUDE", "EXCLUDE"),
    )
    review_language: str = "Brazilian Portuguese"
    comment_line_policy: Literal["drop", "keep"] = "drop"
    max_concurrent_reviews: int = Field(default=1, ge=1)


@lru_cache
def get_settings() -> Settings:
    return Settings()
