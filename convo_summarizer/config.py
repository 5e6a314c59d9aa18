from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Centralized application settings leveraging environment overrides.
    """

    app_name: str = "Conversation Summarizer"
    environment: str = Field("local", validation_alias="ENVIRONMENT")
    allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = Field("INFO", description="Root log level for the service")
    max_payload_bytes: int = Field(2 * 1024 * 1024, ge=1024)  # 2 MB soft limit

    # LLM settings
    llm_provider: Literal["openrouter", "openai", "anthropic", "ollama", "none"] = (
        Field("openrouter", description="Model gateway backend")
    )
    llm_base_url: str = Field(
        "https://openrouter.ai/api/v1",
        description="Base URL for OpenAI-compatible gateways",
    )
    openrouter_api_key: Optional[str] = Field(
        None, validation_alias="OPENROUTER_API_KEY"
    )
    openai_api_key: Optional[str] = Field(None, validation_alias="OPENAI_API_KEY")
    anthropic_api_key: Optional[str] = Field(None, validation_alias="ANTHROPIC_API_KEY")
    ollama_base_url: str = "http://localhost:11434"
    app_url: str = Field("http://localhost:3000", description="Sent as HTTP-Referer")
    app_title: str = Field("Slack Summarizer SaaS", description="Sent as X-Title")

    primary_model: str = "deepseek/deepseek-r1:free"
    fallback_model: Optional[str] = "openai/gpt-4o-mini"
    primary_attempts: int = Field(2, ge=1, le=10)
    fallback_attempts: int = Field(1, ge=0, le=10)
    retry_backoff_ms: int = Field(1000, ge=0)
    llm_temperature: float = Field(0.3, ge=0.0, le=2.0)
    llm_max_tokens: int = Field(2000, ge=100, le=8000)
    slack_max_tokens: int = Field(1500, ge=100, le=8000)
    llm_attempt_timeout_s: Optional[float] = Field(60.0, gt=0)

    # Input handling
    min_text_length: int = Field(10, ge=1)
    chunking_threshold_chars: int = Field(50_000, ge=1000)
    chunk_size_chars: int = Field(40_000, ge=100)
    chunk_boundary_ratio: float = Field(0.8, ge=0.0, le=1.0)
    chunk_parallelism: int = Field(1, ge=1, le=16)

    @model_validator(mode="after")
    def check_chunk_size(self) -> "Settings":
        if self.chunk_size_chars > self.chunking_threshold_chars:
            raise ValueError(
                "chunk_size_chars must not exceed chunking_threshold_chars"
            )
        return self

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
