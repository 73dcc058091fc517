"""
Configuration settings for the application
"""

import os
from typing import Dict, List, Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database (Supabase exposes a regular Postgres URL)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./eventra.db")

    # Auth provider
    SUPABASE_URL: Optional[str] = os.getenv("SUPABASE_URL")
    SUPABASE_JWT_SECRET: str = os.getenv("SUPABASE_JWT_SECRET", "local-dev-jwt-secret-change-me")
    SUPABASE_JWT_AUDIENCE: str = os.getenv("SUPABASE_JWT_AUDIENCE", "authenticated")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")

    # AI suggestions
    AI_ENABLED: bool = os.getenv("AI_ENABLED", "true").lower() in ("1", "true", "yes")
    OPENAI_API_KEY: Optional[str] = os.getenv("OPENAI_API_KEY")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o")
    OPENAI_TIMEOUT_S: float = float(os.getenv("OPENAI_TIMEOUT_S", "20.0"))
    OPENAI_MAX_RETRIES: int = int(os.getenv("OPENAI_MAX_RETRIES", "1"))

    # Application
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:8000",
    ]

    # File limits
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB

    # Rate limiting
    RATE_LIMIT_PER_MINUTE: int = 30
    AI_RATE_LIMIT_PER_MINUTE: int = 10

    # Max events per subscription tier, None means unlimited
    TIER_EVENT_LIMITS: Dict[str, Optional[int]] = {
        "free": 3,
        "starter": 10,
        "pro": None,
        "business": None,
        "enterprise": None,
    }

    class Config:
        env_file = ".env"

settings = Settings()
