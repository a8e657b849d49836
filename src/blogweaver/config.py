"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `BLOGWEAVER_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """BlogWeaver settings.

    All fields are environment-configurable. Prefix is `BLOGWEAVER_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="BLOGWEAVER_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    app_env: Literal["dev", "prod"] = Field(default="dev")
    log_level: str = Field(default="INFO")

    # LLM (any OpenAI-compatible endpoint; DeepSeek by default)
    openai_api_key: str | None = Field(default=None)
    openai_base_url: str | None = Field(default="https://api.deepseek.com/beta")
    openai_model: str = Field(default="deepseek-chat")
    openai_timeout_s: float = Field(default=120.0)
    llm_max_retries: int = Field(default=2, ge=0, le=10)
    llm_retry_backoff_s: float = Field(default=1.0, ge=0.0, le=30.0)

    # Generation
    title_count: int = Field(default=5, ge=1, le=20)
    titles_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    titles_max_tokens: int = Field(default=1000, ge=16)
    outline_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    outline_max_tokens: int = Field(default=1000, ge=16)
    content_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    content_max_tokens: int = Field(default=4000, ge=16)

    # Outline editor
    default_node_title: str = Field(default="New item")

    # Export
    output_path: Path = Field(default=Path("article.md"))


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("BLOGWEAVER_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
