"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # API Keys
    ncbi_api_key: str = ""
    anthropic_api_key: str = ""

    # PubMed
    pubmed_max_retries: int = 3
    pubmed_timeout_short: float = 10.0
    pubmed_timeout_long: float = 15.0
    pubmed_max_citations: int = 5
    pubmed_prioritize_reviews: bool = True
    pubmed_max_age_years: int = 5
    log_network_requests: bool = False

    # LLM Settings
    use_llm_extraction: bool = True
    use_llm_query_generation: bool = True
    llm_model: str = "claude-sonnet-4-6"
    small_llm_model: str = "claude-haiku-4-5-20251001"
    extraction_max_tokens: int = 500
    generation_max_tokens: int = 500
    extraction_temperature: float = 0.0
    generation_temperature: float = 0.1

    # App Settings
    debug: bool = False
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
