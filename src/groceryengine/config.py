"""Engine configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Matching
    similarity_threshold: float = 0.8  # names match when similarity is strictly above this

    # Rendering
    fraction_epsilon: float = 0.01  # tolerance when snapping decimals to fraction glyphs

    # Consolidation
    max_consolidation_items: int = 1000  # inputs past this are passed through unmerged

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
