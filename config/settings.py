"""Pydantic Settings - typed configuration with .env auto-loading."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment / .env file."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ── Service ──────────────────────────────────────────────
    service_port: int = 5000
    cors_origins: list[str] = ["*"]
    debug: bool = False
    log_level: str = "INFO"

    # ── LLM ──────────────────────────────────────────────────
    # PydanticAI model string, e.g. "openai:gpt-4o", "anthropic:claude-sonnet-4-0"
    default_model: str = "openai:gpt-4o"
    max_tokens: int = 4096

    # ── Agent mode ───────────────────────────────────────────
    agent_mode_enabled: bool = True  # False = always use the plain chat runner
    premium_user: bool = False  # premium-only tools are hidden unless True
    enabled_tool_ids: list[str] | None = None  # None = every registered tool

    # ── Action blocks ────────────────────────────────────────
    write_tool_name: str = "writeToFile"
    workspace_dir: str = "workspace"


@lru_cache
def get_settings() -> Settings:
    """Singleton accessor for application settings."""
    return Settings()
