from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_GEMINI_MODELS = [
    "gemini-2.0-flash",
    "gemini-1.5-flash",
    "gemini-1.5-pro",
    "gemini-pro",
]


def _discover_env_files() -> tuple[str, ...]:
    """Determine which env files should be loaded."""
    files: list[str] = []

    custom_env = os.getenv("ENV_FILE")
    if custom_env and Path(custom_env).is_file():
        files.append(custom_env)

    project_root = Path(__file__).resolve().parents[2]
    default_env = project_root / "config" / "environments" / "development.env"
    if default_env.is_file():
        files.append(str(default_env))

    dot_env = project_root / ".env"
    if dot_env.is_file():
        files.append(str(dot_env))

    return tuple(dict.fromkeys(files))  # Preserve order, remove duplicates


def parse_string_list(value: Any) -> List[str]:
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return []
        if stripped.startswith("["):
            try:
                parsed = json.loads(stripped)
                if isinstance(parsed, list):
                    return [str(item).strip() for item in parsed if str(item).strip()]
            except json.JSONDecodeError:
                pass
        return [item.strip() for item in stripped.split(",") if item.strip()]
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if str(item).strip()]
    return []


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_discover_env_files(),
        env_file_encoding="utf-8",
        extra="allow",
        populate_by_name=True,
    )

    env: str = Field(default="development", alias="ENV")
    debug: bool = Field(default=True, alias="DEBUG")
    api_version: str = Field(default="v1", alias="API_VERSION")
    cors_origins: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["http://localhost:5173"], alias="CORS_ORIGINS")
    enable_swagger_ui: bool = Field(default=True, alias="ENABLE_SWAGGER_UI")
    enable_redoc: bool = Field(default=True, alias="ENABLE_REDOC")

    gemini_api_keys: Annotated[List[str], NoDecode] = Field(default_factory=list, alias="GEMINI_API_KEYS")
    gemini_api_key: str | None = Field(default=None, alias="GEMINI_API_KEY")
    gemini_api_keys_secret: str = Field(default="gemini_api_keys", alias="GEMINI_API_KEYS_SECRET")
    gemini_models: Annotated[List[str], NoDecode] = Field(default_factory=lambda: list(DEFAULT_GEMINI_MODELS), alias="GEMINI_MODELS")
    gemini_endpoint: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/models",
        alias="GEMINI_ENDPOINT",
    )

    llm_temperature: float = Field(default=0.3, alias="LLM_TEMPERATURE")
    llm_attempt_timeout_seconds: float = Field(default=30.0, alias="LLM_ATTEMPT_TIMEOUT_SECONDS")
    llm_transport_retries: int = Field(default=3, alias="LLM_TRANSPORT_RETRIES")
    insight_feedback_limit: int = Field(default=50, alias="INSIGHT_FEEDBACK_LIMIT")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    secrets_provider: str = Field(default="env", alias="SECRETS_PROVIDER")
    secrets_aws_prefix: str = Field(default="feedback-ai/", alias="SECRETS_AWS_PREFIX")
    aws_region: str = Field(default="us-east-1", alias="AWS_REGION")

    @field_validator("cors_origins", "gemini_api_keys", mode="before")
    @classmethod
    def _parse_lists(cls, value: Any) -> List[str]:
        return parse_string_list(value)

    @field_validator("gemini_models", mode="before")
    @classmethod
    def _parse_models(cls, value: Any) -> List[str]:
        models = list(dict.fromkeys(parse_string_list(value)))
        return models or list(DEFAULT_GEMINI_MODELS)

    @field_validator("secrets_provider", mode="before")
    @classmethod
    def _normalize_provider(cls, value: Any) -> str:
        if isinstance(value, str) and value.strip():
            return value.strip().lower()
        return "env"

    @property
    def configured_api_keys(self) -> list[str]:
        """Environment-sourced keys in priority order, single key last."""
        keys = list(self.gemini_api_keys)
        if self.gemini_api_key:
            keys.append(self.gemini_api_key.strip())
        return keys


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]
