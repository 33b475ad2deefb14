from __future__ import annotations

import json
from typing import Annotated, List, Any
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import Field, AnyHttpUrl, AliasChoices, field_validator


class Settings(BaseSettings):
    # Where to read .env from and what to do with unknown keys
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="forbid",  # strict: unknown keys are rejected (catches typos)
    )

    # General
    APP_NAME: str = "Trivia Quiz Backend"
    API_V1_PREFIX: str = "/api/v1"
    APP_ENV: str = Field(
        "dev",
        validation_alias=AliasChoices("APP_ENV", "app_env"),
        description="Application environment: dev|staging|prod",
    )
    BACKEND_PORT: int = Field(
        8000,
        validation_alias=AliasChoices("BACKEND_PORT", "app_port"),
        description="Backend port to bind",
    )
    LOG_LEVEL: str = Field(
        "INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
        description="Root logging level",
    )

    # Upstream APIs
    TRIVIA_API_URL: AnyHttpUrl = Field(
        "https://opentdb.com/api.php",
        validation_alias=AliasChoices("TRIVIA_API_URL", "trivia_api_url"),
        description="Open Trivia DB question endpoint",
    )
    TRANSLATE_API_URL: AnyHttpUrl = Field(
        "https://translate.googleapis.com/translate_a/single",
        validation_alias=AliasChoices("TRANSLATE_API_URL", "translate_api_url"),
        description="Google Translate (gtx client) endpoint",
    )
    TARGET_LANG: str = Field(
        "pt",
        validation_alias=AliasChoices("TARGET_LANG", "target_lang"),
        description="Language code questions are translated into",
    )
    HTTP_TIMEOUT: float = Field(
        10.0,
        gt=0,
        validation_alias=AliasChoices("HTTP_TIMEOUT", "http_timeout"),
        description="Timeout in seconds for every upstream request",
    )

    # Game
    QUESTION_COUNT: int = Field(
        5,
        ge=1,
        le=50,
        validation_alias=AliasChoices("QUESTION_COUNT", "question_count"),
        description="Questions per game when the client does not ask for a count",
    )
    FEEDBACK_DELAY_MS: int = Field(
        1500,
        ge=0,
        validation_alias=AliasChoices("FEEDBACK_DELAY_MS", "feedback_delay_ms"),
        description="How long the client should show answer feedback before advancing",
    )

    # CORS origins
    FRONTEND_ORIGINS: Annotated[List[str], NoDecode] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ]

    @field_validator("FRONTEND_ORIGINS", mode="before")
    @classmethod
    def _parse_origins(cls, v: Any) -> Any:
        """
        Allows FRONTEND_ORIGINS in .env as:
        - a JSON array: ["http://localhost:5173","http://localhost:3000"]
        - or a plain string: http://localhost:5173,http://localhost:3000
        - or with ; as the separator
        """
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("[") and s.endswith("]"):
                try:
                    return json.loads(s)
                except ValueError:
                    # broken JSON falls back to splitting
                    pass
            return [item.strip() for item in s.replace(";", ",").split(",") if item.strip()]
        return v


settings = Settings()
