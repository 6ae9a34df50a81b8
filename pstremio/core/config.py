"""
Configuration Management
Loads and validates environment variables
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Dict, Optional


class Settings(BaseSettings):
    """Application settings from environment variables"""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )
    BASE_URL: str = "http://localhost:8000"
    
    # Addon identity
    ADDON_ID: str = "com.pstremio"
    ADDON_NAME: str = "P-Stremio"
    ADDON_VERSION: str = "1.0.0"
    BINGE_GROUP_PREFIX: str = "pstremio"
    
    # Metadata (TMDB). Either a v4 read token or a v3 API key.
    TMDB_ACCESS_TOKEN: Optional[str] = None
    TMDB_API_KEY: Optional[str] = None
    
    # Provider engine sidecar
    PROVIDERS_API_URL: str = "http://localhost:3000"
    
    # Sent to upstream hosts and handed to players as proxy headers.
    # Stream headers and preferred headers override these.
    HEADER_OVERRIDES: Dict[str, str] = {
        "Origin": "https://pstream.mov",
        "Referer": "https://pstream.mov/",
    }
    
    # Development
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"


settings = Settings()
