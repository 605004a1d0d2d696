"""Configuration management."""

from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    
    # Firestore (REST API)
    firestore_project_id: Optional[str] = None
    firestore_api_key: Optional[str] = None
    firestore_database: str = Field(default="(default)")
    remote_timeout_seconds: float = Field(default=10.0)
    
    # Local fallback storage
    data_dir: Path = Field(default=Path("data"))
    
    # Countdown target (e.g. a scheduled test or enlistment date)
    target_date: Optional[date] = None
    
    # Daily goals
    water_goal_glasses: int = Field(default=8)
    exercise_goal_minutes: int = Field(default=30)
    
    log_level: str = Field(default="INFO")
    
    @property
    def has_remote(self) -> bool:
        return self.firestore_project_id is not None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
