"""
Configuration management via environment variables.

This module loads configuration from .env file using python-dotenv.
All configuration values are accessed through the Settings class.

The earmark database is a hosted Postgres instance (Supabase), so the
connection string is normally supplied as DATABASE_URL.
"""
import os
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# Load .env file from project root
# This must happen before accessing os.environ
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Application identifier for logging
        app_env: Environment name (development, staging, production)
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for daily log files (empty = project logs/)
        database_url: Postgres connection string for the earmark database
        query_row_limit: Maximum rows fetched per earmark query
        groq_api_key: API key for Groq LLM service
        google_api_key: API key for Google Gemini service
        openai_api_key: API key for the OpenAI vector store
        openai_vector_store_id: Vector store holding earmark documents
        llm_model: Primary Groq model
        llm_model_fast: Smaller Groq model used last in the cascade
        llm_model_fallback: Gemini model used when Groq fails
        llm_temperature: LLM creativity (0.0 = deterministic, 1.0 = creative)
        llm_max_tokens: Maximum response length
    """
    # Application settings
    app_name: str
    app_env: str
    log_level: str
    log_dir: str

    # Database settings
    database_url: str
    query_row_limit: int

    # LLM settings
    groq_api_key: str
    google_api_key: str
    llm_model: str
    llm_model_fast: str
    llm_model_fallback: str
    llm_temperature: float
    llm_max_tokens: int

    # Document search
    openai_api_key: str
    openai_vector_store_id: str
    document_max_results: int

    # Memory
    session_ttl_minutes: int
    max_messages_per_session: int

    # Safety
    rate_limit_per_minute: int
    enable_audit_logging: bool

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"

    def has_vector_store(self) -> bool:
        """Check if document search is configured."""
        return bool(self.openai_api_key and self.openai_vector_store_id)


def _get_env(key: str, default: Optional[str] = None) -> str:
    """
    Get environment variable with optional default.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set and no default provided
    """
    value = os.environ.get(key, default)
    if value is None:
        raise ValueError(
            f"Required environment variable '{key}' is not set. "
            f"Please check your .env file."
        )
    return value


def _normalize_database_url(database_url: str) -> str:
    """Fix dialect prefixes and strip driver-incompatible parameters."""
    # Supabase hands out postgres:// URLs, SQLAlchemy wants postgresql://
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)

    # psycopg2 spells it sslmode, not ssl-mode
    if "ssl-mode=" in database_url:
        database_url = re.sub(r"ssl-mode=", "sslmode=", database_url)

    return database_url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are read once; call get_settings.cache_clear() after
    changing the environment (tests do this).

    Returns:
        Settings instance with all configuration values

    Raises:
        ValueError: If required environment variables are missing
    """
    # Priority:
    # 1. DATABASE_URL (Supabase connection string)
    # 2. Local components (DB_HOST, DB_USER, etc)
    database_url = os.environ.get("DATABASE_URL")

    if not database_url:
        host = _get_env("DB_HOST", "localhost")
        port = _get_env("DB_PORT", "5432")
        user = _get_env("DB_USER", "postgres")
        password = _get_env("DB_PASSWORD", "")
        name = _get_env("DB_NAME", "postgres")
        database_url = f"postgresql://{user}:{password}@{host}:{port}/{name}"

    return Settings(
        # Application
        app_name=_get_env("APP_NAME", "EarmarkAssistant"),
        app_env=_get_env("APP_ENV", "development"),
        log_level=_get_env("LOG_LEVEL", "INFO"),
        log_dir=_get_env("LOG_DIR", ""),

        # Database
        database_url=_normalize_database_url(database_url),
        query_row_limit=int(_get_env("QUERY_ROW_LIMIT", "1000")),

        # LLM
        groq_api_key=_get_env("GROQ_API_KEY"),
        google_api_key=_get_env("GOOGLE_API_KEY", ""),
        llm_model=_get_env("LLM_MODEL", "llama-3.3-70b-versatile"),
        llm_model_fast=_get_env("LLM_MODEL_FAST", "llama-3.1-8b-instant"),
        llm_model_fallback=_get_env("LLM_MODEL_FALLBACK", "gemini-2.0-flash"),
        llm_temperature=float(_get_env("LLM_TEMPERATURE", "0.1")),
        llm_max_tokens=int(_get_env("LLM_MAX_TOKENS", "1024")),

        # Document search
        openai_api_key=_get_env("OPENAI_API_KEY", ""),
        openai_vector_store_id=_get_env("OPENAI_VECTOR_STORE_ID", ""),
        document_max_results=int(_get_env("DOCUMENT_MAX_RESULTS", "5")),

        # Memory
        session_ttl_minutes=int(_get_env("SESSION_TTL_MINUTES", "1440")),
        max_messages_per_session=int(_get_env("MAX_MESSAGES_PER_SESSION", "20")),

        # Safety
        rate_limit_per_minute=int(_get_env("RATE_LIMIT_PER_MINUTE", "30")),
        enable_audit_logging=_get_env("ENABLE_AUDIT_LOGGING", "true").lower() == "true",
    )
