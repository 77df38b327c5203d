"""Configuration management from environment variables."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file
load_dotenv()

# Project root
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = Path(os.getenv("DATA_DIR", str(PROJECT_ROOT / "data")))

# Ensure directories exist
DATA_DIR.mkdir(parents=True, exist_ok=True)

DEFAULT_SEED_URL = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Application configuration."""

    # Store
    DATABASE_PATH: Path = Path(os.getenv("DATABASE_PATH", str(DATA_DIR / "transactions.db")))

    # Seed source (http(s) URL or local JSON file)
    SEED_URL: str = os.getenv("SEED_URL", DEFAULT_SEED_URL)
    TIMEOUT: int = int(os.getenv("TIMEOUT", "20"))
    MAX_RETRIES: int = int(os.getenv("MAX_RETRIES", "3"))

    # Listing
    DEFAULT_PER_PAGE: int = int(os.getenv("DEFAULT_PER_PAGE", "10"))
    MAX_PER_PAGE: int = int(os.getenv("MAX_PER_PAGE", "100"))
    MAX_SEARCH_LENGTH: int = int(os.getenv("MAX_SEARCH_LENGTH", "100"))

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))
    CORS_ORIGINS: list[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    REQUEST_LOG_ENABLED: bool = _env_bool("REQUEST_LOG_ENABLED", "true")

    # API Security
    API_KEY: str | None = os.getenv("API_KEY")

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration."""
        errors = []
        if not cls.SEED_URL:
            errors.append("SEED_URL is required")
        for name in ("TIMEOUT", "MAX_RETRIES", "DEFAULT_PER_PAGE", "MAX_PER_PAGE", "PORT"):
            if getattr(cls, name) <= 0:
                errors.append(f"{name} must be a positive integer")
        if cls.DEFAULT_PER_PAGE > cls.MAX_PER_PAGE:
            errors.append("DEFAULT_PER_PAGE must not exceed MAX_PER_PAGE")
        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")


config = Config()
