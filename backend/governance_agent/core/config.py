"""Application configuration."""
from functools import lru_cache
from typing import List, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "DAO Governance Agent"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api/v1"
    cors_origins: Union[List[str], str] = ["http://localhost:3000", "http://localhost:5173"]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Union[List[str], str]) -> List[str]:
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Ledger backend
    backend_mode: str = "memory"  # memory or http
    ledger_base_url: str = "http://localhost:4943/api"
    ledger_timeout: float = 10.0
    seed_data_path: str = "./config/seed_proposals.yaml"
    simulated_latency: float = 0.0  # seconds, memory backend only

    # Identity used when casting votes
    voter_identity: str = "current-user.icp"

    # AI advisor
    advisor_provider: str = "canned"  # canned, openai or ollama
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o"
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.1:8b"
    llm_temperature: float = 0.3
    llm_max_tokens: int = 1000

    # Circuit breaker (advisor)
    circuit_breaker_failure_threshold: int = 5
    circuit_breaker_recovery_timeout: float = 60.0

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("backend_mode", "advisor_provider")
    @classmethod
    def normalize_choice(cls, v: str) -> str:
        return v.strip().lower()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
