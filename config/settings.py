from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Generative providers
    GOOGLE_API_KEY: str = ""
    OPENAI_API_KEY: str = ""
    DEFAULT_MODEL: str = "gemini-1.5-pro"
    GENERATION_TEMPERATURE: float = 0.7
    ANALYSIS_TEMPERATURE: float = 0.3
    MAX_OUTPUT_TOKENS: int = 4096

    # Storage
    STORAGE_BACKEND: str = "memory"  # memory | sql
    DATABASE_URL: str = "sqlite:///./content.db"

    # Frontend
    FRONTEND_URL: str = "http://localhost:5173"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Retrieval
    DEFAULT_SEARCH_LIMIT: int = 10
    RECENT_CONTENT_LIMIT: int = 5

    # Progress display
    PROGRESS_TICK_SECONDS: float = 0.5
    PROGRESS_STEP: int = 5
    PROGRESS_CEILING: int = 95
    THOUGHT_REVEAL_SECONDS: float = 0.8

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
