"""
Application configuration management using pydantic-settings
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # LLM Provider - OpenAI (absent key => heuristic planner + static summary)
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_BASE_URL: str = ""

    # Web search - DuckDuckGo instant answer API
    SEARCH_API_URL: str = "https://api.duckduckgo.com/"
    SEARCH_USER_AGENT: str = "AgenticAIBot/1.0 (+https://agentic-76ce2e54.vercel.app)"
    SEARCH_TIMEOUT_SECONDS: float = 10.0

    # Agent
    MAX_TASK_LENGTH: int = 5000

    # Application
    APP_NAME: str = "agentic.ai"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def llm_configured(self) -> bool:
        """True when an OpenAI key is present"""
        return bool(self.OPENAI_API_KEY.strip())

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
