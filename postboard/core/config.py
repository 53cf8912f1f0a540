import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _default_database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    if not os.getenv("DB_NAME"):
        return "sqlite:///./postboard.db"
    return (
        f"postgresql://{os.getenv('DB_USER')}:{os.getenv('DB_PASS')}"
        f"@{os.getenv('DB_HOST', 'localhost')}:{os.getenv('DB_PORT', '5432')}/{os.getenv('DB_NAME')}"
    )


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


@dataclass
class Settings:
    database_url: str = field(default_factory=_default_database_url)

    jwt_secret: str = field(default_factory=lambda: os.getenv("JWT_SECRET", "change-me"))
    jwt_algorithm: str = field(default_factory=lambda: os.getenv("JWT_ALGORITHM", "HS256"))
    access_token_expire_hours: int = field(default_factory=lambda: _env_int("ACCESS_TOKEN_EXPIRE_HOURS", 24))

    upload_dir: str = field(default_factory=lambda: os.getenv("UPLOAD_DIR", "uploads"))
    upload_url_prefix: str = field(default_factory=lambda: os.getenv("UPLOAD_URL_PREFIX", "/uploads"))
    max_upload_size: int = field(default_factory=lambda: _env_int("MAX_UPLOAD_SIZE", 5 * 1024 * 1024))
    max_upload_files: int = field(default_factory=lambda: _env_int("MAX_UPLOAD_FILES", 5))

    cors_origins: str = field(default_factory=lambda: os.getenv("CORS_ORIGINS", "*"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def get_settings() -> Settings:
    return Settings()
