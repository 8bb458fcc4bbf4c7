"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Language model service
    openai_api_key: str = ""
    openai_base_url: str | None = None  # OpenAI-compatible servers
    classifier_model: str = "gpt-4o"
    explainer_model: str = "gpt-4o"
    classifier_max_tokens: int = 100
    explainer_max_tokens: int = 200
    llm_timeout_seconds: float = 20.0

    # Service
    service_name: str = "liquidity-gateway"
    log_level: str = "INFO"


settings = Settings()
