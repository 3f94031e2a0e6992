import logging
import os

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings

load_dotenv()

DEFAULT_DB_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), "prompts.db")


class Settings(BaseSettings):
    """Environment settings; each field reads the upper-cased variable of the same name."""

    # Gateway
    upstream_api_key: str | None = None
    upstream_url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    rewrite_model: str = "google/gemini-2.5-flash"
    upstream_timeout: float = 45.0
    upstream_retries: int = 1
    enforce_model_catalog: bool = False

    # Web app
    gateway_url: str = "http://localhost:8001"
    gateway_timeout: float = 60.0
    secret_key: str = "change-me-in-production"
    prompts_db_path: str = DEFAULT_DB_PATH
    session_limit: int = 1000
    session_ttl: float = 3600.0

    log_level: str = "INFO"

    class Config:
        case_sensitive = False

    @field_validator("gateway_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, value: str) -> str:
        return value.upper()


def get_settings() -> Settings:
    """Read settings from the environment (a .env file is loaded on import)"""
    return Settings()


def configure_logging(level: str | None = None):
    level = level or get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
    # Suppress noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
