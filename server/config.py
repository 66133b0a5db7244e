# server/config.py

import os
from dataclasses import dataclass, field
from functools import lru_cache
from dotenv import load_dotenv


load_dotenv()


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """
    Process-wide configuration, read once at startup.
    Instances are immutable; tests build their own and pass them to create_app().
    """
    database_url: str = "sqlite:///./blog.db"
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    cookie_name: str = "token"
    cookie_secure: bool = False
    upload_dir: str = "uploads"
    allowed_cover_extensions: tuple[str, ...] = ("jpg", "jpeg", "png", "gif", "webp")
    cors_origins: tuple[str, ...] = field(
        default=("http://localhost:8501", "http://localhost:3000")
    )
    log_level: str = "INFO"


def load_settings() -> Settings:
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./blog.db"),
        jwt_secret=os.getenv("JWT_SECRET_KEY"),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60")),
        cookie_name=os.getenv("AUTH_COOKIE_NAME", "token"),
        cookie_secure=_env_bool("AUTH_COOKIE_SECURE"),
        upload_dir=os.getenv("UPLOAD_DIR", "uploads"),
        allowed_cover_extensions=tuple(
            ext.lower() for ext in _env_list("ALLOWED_COVER_EXTENSIONS", "jpg,jpeg,png,gif,webp")
        ),
        cors_origins=_env_list("CORS_ORIGINS", "http://localhost:8501,http://localhost:3000"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
