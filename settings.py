from __future__ import annotations

import os
from typing import List

from pydantic import BaseModel, Field


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def normalize_database_url(url: str) -> str:
    # Render sometimes hands out postgres://; normalize to postgresql://
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    # Force psycopg3 driver if using Postgres
    if url.startswith("postgresql://") and "+psycopg" not in url:
        url = url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


class Settings(BaseModel):
    database_url: str = "sqlite:///./trivia.db"
    admin_token: str = ""
    daily_game_size: int = Field(default=9, ge=1)
    unlimited_batch_size: int = Field(default=12, ge=1)
    daily_autocreate: bool = True
    create_schema: bool = False
    seed_on_startup: bool = False
    questions_dir: str = "data/questions"
    cors_origins: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read settings from the environment, falling back to the model defaults."""
    defaults = Settings()
    origins = os.getenv("CORS_ORIGINS")
    return Settings(
        database_url=normalize_database_url(os.getenv("DATABASE_URL", defaults.database_url)),
        admin_token=os.getenv("ADMIN_TOKEN", ""),
        daily_game_size=int(os.getenv("DAILY_GAME_SIZE", defaults.daily_game_size)),
        unlimited_batch_size=int(os.getenv("UNLIMITED_BATCH_SIZE", defaults.unlimited_batch_size)),
        daily_autocreate=_env_bool("DAILY_AUTOCREATE", defaults.daily_autocreate),
        create_schema=_env_bool("CREATE_SCHEMA", defaults.create_schema),
        seed_on_startup=_env_bool("SEED_ON_STARTUP", defaults.seed_on_startup),
        questions_dir=os.getenv("QUESTIONS_DIR", defaults.questions_dir),
        cors_origins=(
            [o.strip() for o in origins.split(",") if o.strip()]
            if origins
            else defaults.cors_origins
        ),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
    )
