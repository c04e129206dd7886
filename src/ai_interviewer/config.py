"""
Application configuration using pydantic-settings.

Loads configuration from environment variables and .env files.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ai_interviewer.models.llm_client import CompletionConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./interviews.db",
        description="Async SQLAlchemy connection string for the session store",
    )

    # LLM Configuration (OpenRouter chat completions)
    llm_model_name: str = Field(
        default="openai/gpt-3.5-turbo",
        description="Model name sent with every completion request",
    )
    llm_timeout: int = Field(
        default=120,
        description="Timeout in seconds for LLM requests",
    )
    llm_max_tokens: int = Field(
        default=100,
        description="Token budget for interview questions",
    )
    openrouter_api_key: str = Field(
        default="",
        description="Bearer token for the completions endpoint",
    )
    openrouter_endpoint: str = Field(
        default="https://openrouter.ai/api/v1/chat/completions",
        description="Chat completions endpoint URL",
    )

    # Mock mode
    mock_completions: bool = Field(
        default=False,
        description="Use canned offline replies instead of calling the model",
    )
    mock_turns_before_end: int = Field(
        default=3,
        description="Candidate answers after which the mock interviewer ends the interview",
    )

    # Interview
    summary_target_tokens: int = Field(
        default=700,
        description="Target size of resume and job description summaries",
    )
    feedback_max_tokens: int = Field(
        default=500,
        description="Token budget for the final feedback",
    )

    # Application
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    def completion_config(self) -> CompletionConfig:
        """Build the configuration object handed to the completion client."""
        return CompletionConfig(
            mock_completions=self.mock_completions,
            api_key=self.openrouter_api_key,
            endpoint=self.openrouter_endpoint,
            model=self.llm_model_name,
            timeout=self.llm_timeout,
            mock_turns_before_end=self.mock_turns_before_end,
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()
