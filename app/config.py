"""
Configuration management using pydantic-settings.
Loads environment variables with type validation.
"""

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

# Ships inside the package (Latin + Devanagari coverage)
DEFAULT_PDF_FONT = Path(__file__).parent / "export" / "fonts" / "TiroDevanagariHindi-Regular.ttf"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "VoxScribe Backend"
    app_version: str = "0.1.0"
    debug: bool = False

    # Google Gemini
    google_api_key: str
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1"
    gemini_timeout_seconds: float | None = None

    # Transcription
    default_language: str = "English"
    transcript_placeholder_duration: float = 120

    # Export
    pdf_font_path: str = str(DEFAULT_PDF_FONT)
    pdf_text_shaping: bool = True

    # Supabase (identity provider + record store)
    supabase_url: str
    supabase_anon_key: str
    supabase_files_table: str = "files"

    # Rate limiting
    rate_limit_enabled: bool = True
    transcribe_rate_limit: str = "10/minute"

    # CORS
    cors_origins: str = "http://localhost:3000"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def supabase_rest_url(self) -> str:
        return f"{self.supabase_url.rstrip('/')}/rest/v1"

    @property
    def supabase_auth_url(self) -> str:
        return f"{self.supabase_url.rstrip('/')}/auth/v1"


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance.
    Use dependency injection in FastAPI routes.
    """
    return Settings()
