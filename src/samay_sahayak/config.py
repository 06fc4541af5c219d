"""Configuration management."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Storage
DATA_DIR: Path = Path(os.getenv("DATA_DIR", "./data"))
DATABASE_PATH: Path = Path(os.getenv("DATABASE_PATH", str(DATA_DIR / "samay_sahayak.db")))
DB_CONNECT_RETRIES: int = int(os.getenv("DB_CONNECT_RETRIES", "5"))
DB_RETRY_DELAY: float = float(os.getenv("DB_RETRY_DELAY", "5.0"))

# Completion service
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
COMPLETION_MODEL: str = os.getenv("COMPLETION_MODEL", "gpt-4o-mini")
# Optional OpenAI-compatible endpoint (e.g. Gemini's compatibility layer)
COMPLETION_BASE_URL: str | None = os.getenv("COMPLETION_BASE_URL") or None

# HTTP server
HOST: str = os.getenv("HOST", "127.0.0.1")
PORT: int = int(os.getenv("PORT", "5000"))
API_PREFIX: str = os.getenv("API_PREFIX", "/api")
ALLOWED_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.getenv(
        "ALLOWED_ORIGINS", "https://samay-sahayak.vercel.app,http://localhost:3000"
    ).split(",")
    if origin.strip()
]

# API client (CLI views talk to a running server)
API_URL: str = os.getenv("API_URL", f"http://localhost:{PORT}")

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging for the server and CLI."""
    logging.basicConfig(
        format=LOG_FORMAT,
        level=getattr(logging, level.upper(), logging.INFO),
    )


def validate_config() -> None:
    """Validate configuration, warning about optional-but-important settings."""
    if not OPENAI_API_KEY:
        logger.warning(
            "OPENAI_API_KEY is not set; AI timetable generation will fail until it is configured"
        )
    if not API_PREFIX.startswith("/"):
        raise ValueError("API_PREFIX must start with '/'")
    if DB_CONNECT_RETRIES < 1:
        raise ValueError("DB_CONNECT_RETRIES must be at least 1")
