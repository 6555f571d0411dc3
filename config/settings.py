"""
Configuration management for Campus Connect Chat
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List, Optional
from functools import lru_cache


DEFAULT_SYSTEM_PROMPT = """You are Campus Connect AI, a friendly assistant for students.

Answer clearly and concisely. When document context is provided, base your
answer on it and say so when the document does not contain the answer.
When current date, time or news context is provided, use it instead of
guessing."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Claude API
    anthropic_api_key: Optional[str] = Field(default=None)
    anthropic_model: str = Field(default="claude-sonnet-4-20250514")
    max_tokens: int = Field(default=1024)
    temperature: float = Field(default=0.3)
    system_prompt: Optional[str] = Field(default=DEFAULT_SYSTEM_PROMPT)

    # News API (optional)
    news_api_key: Optional[str] = Field(default=None)
    news_api_url: str = Field(default="https://newsapi.org/v2/everything")
    news_result_limit: int = Field(default=3)
    news_timeout_seconds: float = Field(default=5.0)

    # Date/time context
    timezone: str = Field(default="UTC")

    # Document ingestion
    chunk_size: int = Field(default=1000)
    chunk_overlap: int = Field(default=200)

    # Document store
    max_sessions: int = Field(default=100)

    # Server
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)
    cors_origins: List[str] = Field(default=["*"])
    debug: bool = Field(default=True)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
